# synccircle/services/answer_kinds/answer_kind_factory.py
from typing import Any, Dict, Optional

from .base_answer_kind import BaseAnswerKind
from .choice_kind import MultipleChoiceAnswerKind
from .rating_kind import RatingAnswerKind
from .text_kind import TextAnswerKind, TextareaAnswerKind
from .upload_kind import FileAnswerKind, ImageAnswerKind


class AnswerKindFactory:
    """Dispatch answer handling by question type"""

    _kinds: Dict[str, BaseAnswerKind] = {
        kind.question_type: kind
        for kind in (
            TextAnswerKind(),
            TextareaAnswerKind(),
            MultipleChoiceAnswerKind(),
            RatingAnswerKind(),
            ImageAnswerKind(),
            FileAnswerKind(),
        )
    }

    @classmethod
    def question_types(cls):
        return tuple(cls._kinds)

    @classmethod
    def get_kind(cls, question_type: Optional[str]) -> Optional[BaseAnswerKind]:
        """Get the strategy for a question type, None when the type is unknown"""
        if not isinstance(question_type, str):
            return None
        return cls._kinds.get(question_type.lower())

    @classmethod
    def is_answered(cls, question: Dict[str, Any], value: Any) -> bool:
        """Whether ``value`` counts as an answer to ``question``; unknown types never do."""
        kind = cls.get_kind(question.get('type'))
        return kind is not None and not kind.is_empty(value)
