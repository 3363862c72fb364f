# synccircle/services/answer_kinds/text_kind.py
from typing import Any, Dict, Optional
from .base_answer_kind import BaseAnswerKind

MAX_TEXT_LENGTH = 10000


class TextAnswerKind(BaseAnswerKind):
    """Single-line free text"""

    question_type = "text"

    def validate(self, question: Dict[str, Any], value: Any) -> Optional[str]:
        if not isinstance(value, str):
            return f"Answer to '{question.get('title')}' must be text"
        if len(value) > MAX_TEXT_LENGTH:
            return f"Answer to '{question.get('title')}' cannot exceed {MAX_TEXT_LENGTH} characters"
        return None


class TextareaAnswerKind(TextAnswerKind):
    """Multi-line free text"""

    question_type = "textarea"
