# synccircle/client/__init__.py

from .api_client import ApiRequestError, SyncCircleClient
from .debouncer import Debouncer
from .draft_controller import ActionMode, DraftController, MissingRequiredAnswers
from .query_cache import QueryCache

__all__ = [
    'ActionMode', 'ApiRequestError', 'Debouncer', 'DraftController',
    'MissingRequiredAnswers', 'QueryCache', 'SyncCircleClient',
]
