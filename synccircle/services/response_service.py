# synccircle/services/response_service.py
from typing import Any, Dict, List, Optional, Tuple
from datetime import datetime, timezone
from sqlalchemy.orm import joinedload
from synccircle import db
from synccircle.models.form import Form
from synccircle.models.response import Response
from synccircle.models.user import User
from synccircle.services.answer_kinds import AnswerKindFactory
from synccircle.services.response_stats_service import ResponseStatsService
from synccircle.utils.api_errors import ApiError
from synccircle.utils.permission_manager import PermissionManager
import logging

logger = logging.getLogger(__name__)

class ResponseService:
    """Draft/submit lifecycle of a user's answers to a form.

    Rows are never deleted here. Draft saves collapse into the current row
    when that row is still a draft; final submissions always insert a new
    row, which then supersedes any older draft as the current row.
    """

    @staticmethod
    def get_current_response(form_id: int, user_id: int) -> Optional[Response]:
        """Most recently saved row for the (form, user) pair."""
        return Response.query.filter_by(form_id=form_id, user_id=user_id)\
            .order_by(Response.submitted_at.desc(), Response.id.desc())\
            .first()

    @staticmethod
    def validate_payload(data: Any, require_form_id: bool = True) -> List[str]:
        """Shape checks on a request body."""
        if not isinstance(data, dict):
            return ["Request body must be a JSON object"]

        errors = []
        if require_form_id:
            form_id = data.get('formId')
            if form_id is None:
                errors.append("formId is required")
            elif isinstance(form_id, bool) or not isinstance(form_id, int):
                errors.append("formId must be an integer")

        if 'answers' not in data:
            errors.append("answers is required")
        elif not isinstance(data['answers'], dict):
            errors.append("answers must be an object keyed by question id")

        if 'isDraft' in data and not isinstance(data['isDraft'], bool):
            errors.append("isDraft must be true or false")
        return errors

    @staticmethod
    def drop_unknown_answers(form: Form, answers: Dict[str, Any]) -> Dict[str, Any]:
        """Answers limited to the form's current questions.

        Questions can be removed from a form after users have started drafts;
        their stale answers are dropped rather than rejected.
        """
        known = {question.get('id') for question in form.questions or []}
        dropped = [question_id for question_id in answers if question_id not in known]
        if dropped:
            logger.info(f"Dropping answers to removed questions {', '.join(map(str, dropped))} on form {form.id}")
        return {question_id: value for question_id, value in answers.items() if question_id in known}

    @staticmethod
    def validate_answers(form: Form, answers: Dict[str, Any], require_complete: bool) -> List[str]:
        """Check answer values against the form's questions.

        Drafts may be partial; ``require_complete`` additionally demands an
        answer for every required question. Ids that are not on the form are
        ignored here; see ``drop_unknown_answers``.
        """
        errors = []
        for question_id, value in answers.items():
            question = form.get_question(question_id)
            if question is None:
                continue
            kind = AnswerKindFactory.get_kind(question.get('type'))
            if kind is None or kind.is_empty(value):
                continue
            error = kind.validate(question, value)
            if error:
                errors.append(error)

        if require_complete:
            missing = [
                question.get('title')
                for question in form.required_questions()
                if not AnswerKindFactory.is_answered(question, answers.get(question.get('id')))
            ]
            if missing:
                errors.append(f"Missing required answers: {', '.join(missing)}")
        return errors

    @classmethod
    def _check_answerable(cls, form: Form, current_user: User, answers: Dict[str, Any],
                          is_draft: bool) -> Optional[ApiError]:
        error = PermissionManager.check_space_access(current_user, form.space_id)
        if error:
            return error
        if not form.is_active:
            return ApiError.validation("This form is no longer accepting responses")
        problems = cls.validate_answers(form, answers, require_complete=not is_draft)
        if problems:
            return ApiError.validation("Invalid response data", problems)
        return None

    @classmethod
    def save_response(cls, current_user: User, data: Any) -> Tuple[Optional[Response], Optional[ApiError]]:
        """Upsert for POST /api/responses.

        Drafts update the current row in place while it is a draft and insert
        otherwise; final submissions always insert.
        """
        problems = cls.validate_payload(data)
        if problems:
            return None, ApiError.validation("Invalid response data", problems)

        form = db.session.get(Form, data['formId'])
        if not form:
            return None, ApiError.not_found("Form not found")

        answers = cls.drop_unknown_answers(form, data['answers'])
        is_draft = data.get('isDraft', False)
        error = cls._check_answerable(form, current_user, answers, is_draft)
        if error:
            return None, error

        now = datetime.now(timezone.utc)
        try:
            current = cls.get_current_response(form.id, current_user.id) if is_draft else None
            if current is not None and current.is_draft:
                current.answers = dict(answers)
                current.submitted_at = now
                response = current
                logger.debug(f"Draft {response.id} updated for form {form.id} by {current_user.username}")
            else:
                response = Response(
                    form_id=form.id,
                    user_id=current_user.id,
                    answers=dict(answers),
                    is_draft=is_draft,
                    submitted_at=now,
                )
                db.session.add(response)
            db.session.commit()
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error saving response for form {form.id} by {current_user.username}: {str(e)}", exc_info=True)
            return None, ApiError.internal("Failed to save response")

        if not is_draft:
            logger.info(f"Response {response.id} submitted for form {form.id} by {current_user.username}")
        return response, None

    @classmethod
    def update_response(cls, response_id: int, current_user: User, data: Any) -> Tuple[Optional[Response], Optional[ApiError]]:
        """In-place update for PUT /api/responses/<id> (edit-existing mode)."""
        problems = cls.validate_payload(data, require_form_id=False)
        if problems:
            return None, ApiError.validation("Invalid response data", problems)

        response = db.session.get(Response, response_id)
        if not response:
            return None, ApiError.not_found("Response not found")
        if not PermissionManager.check_resource_ownership(current_user, response):
            return None, ApiError.forbidden("You can only edit your own responses")

        answers = cls.drop_unknown_answers(response.form, data['answers'])
        is_draft = data.get('isDraft', False)
        error = cls._check_answerable(response.form, current_user, answers, is_draft)
        if error:
            return None, error

        try:
            response.answers = dict(answers)
            response.is_draft = is_draft
            response.submitted_at = datetime.now(timezone.utc)
            db.session.commit()
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error updating response {response_id}: {str(e)}", exc_info=True)
            return None, ApiError.internal("Failed to update response")

        logger.info(f"Response {response.id} updated by {current_user.username} (draft={is_draft})")
        return response, None

    @staticmethod
    def get_response(response_id: int, current_user: User) -> Tuple[Optional[Response], Optional[ApiError]]:
        """A single response, visible to its owner and to the space's admins."""
        response = db.session.get(Response, response_id)
        if not response:
            return None, ApiError.not_found("Response not found")
        if PermissionManager.check_resource_ownership(current_user, response):
            return response, None
        if PermissionManager.is_space_admin(current_user, response.form.space_id):
            return response, None
        return None, ApiError.forbidden("You do not have access to this response")

    @classmethod
    def get_my_draft(cls, form_id: int, current_user: User) -> Tuple[Optional[Response], Optional[ApiError]]:
        """The caller's current row for the form when it is still a draft."""
        form = db.session.get(Form, form_id)
        if not form:
            return None, ApiError.not_found("Form not found")
        error = PermissionManager.check_space_access(current_user, form.space_id)
        if error:
            return None, error

        current = cls.get_current_response(form_id, current_user.id)
        if current is not None and current.is_draft:
            return current, None
        return None, None

    @staticmethod
    def get_submitted_responses(form_id: int) -> List[Response]:
        return Response.query.options(joinedload(Response.user))\
            .filter(Response.form_id == form_id, Response.is_draft.is_(False))\
            .order_by(Response.submitted_at.desc(), Response.id.desc())\
            .all()

    @classmethod
    def has_pending_submission(cls, form_id: int, current_user: User) -> Tuple[bool, Optional[ApiError]]:
        draft, error = cls.get_my_draft(form_id, current_user)
        if error:
            return False, error
        return draft is not None, None

    @classmethod
    def get_form_responses(cls, form_id: int, current_user: User) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Submitted responses for a form with their aggregate stats (admins only)."""
        form = db.session.get(Form, form_id)
        if not form:
            return None, ApiError.not_found("Form not found")
        error = PermissionManager.check_space_access(current_user, form.space_id, require_admin=True,
                                                     action="view all responses")
        if error:
            return None, error

        responses = cls.get_submitted_responses(form_id)
        return {
            'responses': responses,
            'stats': ResponseStatsService.compute_stats(form, responses),
        }, None
