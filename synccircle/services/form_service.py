# synccircle/services/form_service.py
from typing import Any, Dict, List, Optional, Tuple
from synccircle import db
from synccircle.models.form import Form, Frequency
from synccircle.models.space import Space
from synccircle.models.user import User
from synccircle.services.answer_kinds import AnswerKindFactory
from synccircle.utils.api_errors import ApiError
from synccircle.utils.helpers import validate_send_time
from synccircle.utils.permission_manager import PermissionManager
import logging

logger = logging.getLogger(__name__)

# Fields a form update may touch; spaceId is fixed once created
UPDATABLE_FIELDS = {
    'title': 'title',
    'description': 'description',
    'questions': 'questions',
    'frequency': 'frequency',
    'sendTime': 'send_time',
    'isActive': 'is_active',
}

class FormService:
    @staticmethod
    def validate_questions(questions: Any) -> List[str]:
        """Check a list of question definitions; returns the problems found."""
        if not isinstance(questions, list):
            return ["questions must be a list"]

        errors: List[str] = []
        seen_ids = set()
        for index, question in enumerate(questions, start=1):
            if not isinstance(question, dict):
                errors.append(f"Question {index} must be an object")
                continue

            question_id = question.get('id')
            if not isinstance(question_id, str) or not question_id.strip():
                errors.append(f"Question {index} needs a string id")
            elif question_id in seen_ids:
                errors.append(f"Duplicate question id '{question_id}'")
            else:
                seen_ids.add(question_id)

            title = question.get('title')
            if not isinstance(title, str) or not title.strip():
                errors.append(f"Question {index} needs a title")

            if not isinstance(question.get('required', False), bool):
                errors.append(f"Question {index}: required must be true or false")

            kind = AnswerKindFactory.get_kind(question.get('type'))
            if kind is None:
                errors.append(
                    f"Question {index} has unknown type '{question.get('type')}'. "
                    f"Expected one of: {', '.join(AnswerKindFactory.question_types())}"
                )
                continue
            errors.extend(kind.validate_definition(question))

        return errors

    @classmethod
    def _validate_form_fields(cls, data: Dict[str, Any], partial: bool = False) -> List[str]:
        errors: List[str] = []

        if not partial or 'title' in data:
            title = data.get('title')
            if not isinstance(title, str) or not title.strip():
                errors.append("title is required")
            elif len(title) > 255:
                errors.append("title cannot exceed 255 characters")

        if 'description' in data and data['description'] is not None and not isinstance(data['description'], str):
            errors.append("description must be text")

        if not partial or 'questions' in data:
            errors.extend(cls.validate_questions(data.get('questions')))

        if not partial or 'frequency' in data:
            if data.get('frequency') not in Frequency.ALL:
                errors.append(f"frequency must be one of: {', '.join(Frequency.ALL)}")

        if not partial or 'sendTime' in data:
            if not validate_send_time(data.get('sendTime')):
                errors.append("sendTime must use the HH:MM format")

        if 'isActive' in data and not isinstance(data['isActive'], bool):
            errors.append("isActive must be true or false")

        return errors

    @classmethod
    def create_form(cls, current_user: User, data: Dict[str, Any]) -> Tuple[Optional[Form], Optional[ApiError]]:
        space_id = data.get('spaceId')
        if isinstance(space_id, bool) or not isinstance(space_id, int):
            return None, ApiError.validation("Invalid form data", ["spaceId must be an integer"])

        errors = cls._validate_form_fields(data)
        if errors:
            return None, ApiError.validation("Invalid form data", errors)

        if not db.session.get(Space, space_id):
            return None, ApiError.not_found("Space not found")

        error = PermissionManager.check_space_access(current_user, space_id, require_admin=True,
                                                     action="create forms")
        if error:
            return None, error

        form = Form(
            title=data['title'].strip(),
            description=data.get('description'),
            space_id=space_id,
            created_by=current_user.id,
            questions=data['questions'],
            frequency=data['frequency'],
            send_time=data['sendTime'],
            is_active=data.get('isActive', True),
        )
        try:
            db.session.add(form)
            db.session.commit()
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error creating form in space {space_id}: {str(e)}", exc_info=True)
            return None, ApiError.internal("Failed to create form")
        logger.info(f"Form {form.id} created in space {space_id} by {current_user.username}")
        return form, None

    @staticmethod
    def get_form(form_id: int, current_user: User) -> Tuple[Optional[Form], Optional[ApiError]]:
        form = db.session.get(Form, form_id)
        if not form:
            return None, ApiError.not_found("Form not found")
        error = PermissionManager.check_space_access(current_user, form.space_id)
        if error:
            return None, error
        return form, None

    @classmethod
    def update_form(cls, form_id: int, current_user: User, data: Dict[str, Any]) -> Tuple[Optional[Form], Optional[ApiError]]:
        form = db.session.get(Form, form_id)
        if not form:
            return None, ApiError.not_found("Form not found")

        error = PermissionManager.check_space_access(current_user, form.space_id, require_admin=True,
                                                     action="edit forms")
        if error:
            return None, error

        updates = {key: value for key, value in data.items() if key in UPDATABLE_FIELDS}
        if not updates:
            return None, ApiError.validation("No valid fields to update")

        errors = cls._validate_form_fields(updates, partial=True)
        if errors:
            return None, ApiError.validation("Invalid form data", errors)

        try:
            for key, value in updates.items():
                if key == 'title':
                    value = value.strip()
                setattr(form, UPDATABLE_FIELDS[key], value)
            db.session.commit()
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error updating form {form_id}: {str(e)}", exc_info=True)
            return None, ApiError.internal("Failed to update form")
        logger.info(f"Form {form.id} updated by {current_user.username}: {sorted(updates)}")
        return form, None
