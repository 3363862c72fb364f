# synccircle/services/answer_kinds/upload_kind.py
from typing import Any, Dict, Optional
from .base_answer_kind import BaseAnswerKind


class ImageAnswerKind(BaseAnswerKind):
    """Reference (file name or URL) to an uploaded image"""

    question_type = "image"

    def validate(self, question: Dict[str, Any], value: Any) -> Optional[str]:
        references = value if isinstance(value, list) else [value]
        if not all(isinstance(item, str) for item in references):
            return f"Answer to '{question.get('title')}' must reference an uploaded file"
        return None


class FileAnswerKind(ImageAnswerKind):
    """Reference to an uploaded document"""

    question_type = "file"
