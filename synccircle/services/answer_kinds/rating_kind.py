# synccircle/services/answer_kinds/rating_kind.py
from typing import Any, Dict, List, Optional
from .base_answer_kind import BaseAnswerKind
from synccircle.utils.helpers import round_half_up

DEFAULT_MAX_RATING = 5
RATING_SCALE_LIMIT = 10


def is_rating_value(value: Any) -> bool:
    """True for numbers on the 1-10 scale; booleans do not count."""
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and 1 <= value <= RATING_SCALE_LIMIT
    )


class RatingAnswerKind(BaseAnswerKind):
    """Numeric rating from 1 to ``maxRating``"""

    question_type = "rating"

    def max_rating(self, question: Dict[str, Any]) -> int:
        return question.get('maxRating') or DEFAULT_MAX_RATING

    def validate_definition(self, question: Dict[str, Any]) -> List[str]:
        max_rating = question.get('maxRating')
        if max_rating is None:
            return []
        if isinstance(max_rating, bool) or not isinstance(max_rating, int) \
                or not 2 <= max_rating <= RATING_SCALE_LIMIT:
            return [f"maxRating of question '{question.get('title')}' must be an integer between 2 and {RATING_SCALE_LIMIT}"]
        return []

    def validate(self, question: Dict[str, Any], value: Any) -> Optional[str]:
        max_rating = self.max_rating(question)
        if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= max_rating:
            return f"Answer to '{question.get('title')}' must be a whole number from 1 to {max_rating}"
        return None

    def format(self, question: Dict[str, Any], value: Any) -> str:
        if self.is_empty(value):
            return "No rating given"
        return f"{value}/{self.max_rating(question)}"

    def summarize(self, question: Dict[str, Any], values: List[Any]) -> Dict[str, Any]:
        summary = super().summarize(question, values)
        ratings = [v for v in values if is_rating_value(v)]
        summary['averageRating'] = round_half_up(sum(ratings) / len(ratings), 1) if ratings else None
        return summary
