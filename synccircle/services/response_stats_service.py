# synccircle/services/response_stats_service.py
from typing import Any, Dict, List
from synccircle.models.form import Form
from synccircle.models.response import Response
from synccircle.services.answer_kinds import AnswerKindFactory, is_rating_value
from synccircle.services.space_service import SpaceService
from synccircle.utils.helpers import round_half_up
import logging

logger = logging.getLogger(__name__)

class ResponseStatsService:
    """Aggregates over a form's submitted (non-draft) responses."""

    @staticmethod
    def completion_rate(total_responses: int, member_count: int) -> int:
        if member_count <= 0:
            return 0
        return round_half_up(total_responses / member_count * 100)

    @staticmethod
    def average_rating(responses: List[Response]):
        """Mean of every 1-10 numeric answer value, or None when there are none."""
        ratings = [
            value
            for response in responses
            for value in (response.answers or {}).values()
            if is_rating_value(value)
        ]
        if not ratings:
            return None
        return round_half_up(sum(ratings) / len(ratings), 1)

    @staticmethod
    def question_summaries(form: Form, responses: List[Response]) -> List[Dict[str, Any]]:
        summaries = []
        for question in form.questions or []:
            kind = AnswerKindFactory.get_kind(question.get('type'))
            if kind is None:
                logger.warning(f"Form {form.id} has question '{question.get('id')}' of unknown type '{question.get('type')}'")
                continue
            values = [(r.answers or {}).get(question.get('id')) for r in responses]
            summaries.append(kind.summarize(question, values))
        return summaries

    @classmethod
    def compute_stats(cls, form: Form, responses: List[Response]) -> Dict[str, Any]:
        """Stats block of the admin listing; drafts are ignored."""
        submitted = [r for r in responses if not r.is_draft]
        member_count = SpaceService.get_member_count(form.space_id)

        stats = {
            'totalResponses': len(submitted),
            'memberCount': member_count,
            'completionRate': cls.completion_rate(len(submitted), member_count),
            'questionSummaries': cls.question_summaries(form, submitted),
        }
        average = cls.average_rating(submitted)
        if average is not None:
            stats['averageRating'] = average
        return stats
