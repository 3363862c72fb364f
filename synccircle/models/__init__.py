# synccircle/models/__init__.py

from .user import User
from .space import Space
from .space_member import SpaceMember
from .form import Form
from .response import Response
from .token_blocklist import TokenBlocklist

__all__ = [
    'User',
    'Space',
    'SpaceMember',
    'Form',
    'Response',
    'TokenBlocklist',
]
