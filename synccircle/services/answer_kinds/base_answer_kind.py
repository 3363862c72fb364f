# synccircle/services/answer_kinds/base_answer_kind.py
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class BaseAnswerKind(ABC):
    """Validation and display strategy for one question type."""

    question_type: str = ""

    def validate_definition(self, question: Dict[str, Any]) -> List[str]:
        """Return problems with the type-specific part of a question definition."""
        return []

    @abstractmethod
    def validate(self, question: Dict[str, Any], value: Any) -> Optional[str]:
        """Return an error message when ``value`` is not a valid answer, else None."""

    def is_empty(self, value: Any) -> bool:
        if value is None:
            return True
        if isinstance(value, str):
            return value.strip() == ""
        if isinstance(value, (list, tuple)):
            return len(value) == 0
        return False

    def format(self, question: Dict[str, Any], value: Any) -> str:
        """Human-readable rendering of an answer value."""
        if self.is_empty(value):
            return "No answer provided"
        if isinstance(value, (list, tuple)):
            return ", ".join(str(item) for item in value)
        return str(value)

    def summarize(self, question: Dict[str, Any], values: List[Any]) -> Dict[str, Any]:
        """Aggregate the submitted answers to one question."""
        answered = [v for v in values if not self.is_empty(v)]
        return {
            'questionId': question.get('id'),
            'type': self.question_type,
            'answered': len(answered),
        }
