from .answer_kind_factory import AnswerKindFactory
from .base_answer_kind import BaseAnswerKind
from .rating_kind import is_rating_value

__all__ = ['AnswerKindFactory', 'BaseAnswerKind', 'is_rating_value']
