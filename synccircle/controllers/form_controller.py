# synccircle/controllers/form_controller.py

from typing import Any, Dict, List, Optional, Tuple
from synccircle.models.form import Form
from synccircle.models.user import User
from synccircle.services.form_service import FormService
from synccircle.services.space_service import SpaceService
from synccircle.utils.api_errors import ApiError
import logging

logger = logging.getLogger(__name__)

class FormController:
    @staticmethod
    def create_form(current_user: User, data: Dict[str, Any]) -> Tuple[Optional[Form], Optional[ApiError]]:
        try:
            return FormService.create_form(current_user, data)
        except Exception as e:
            logger.exception(f"Error in create_form controller: {str(e)}")
            return None, ApiError.internal("Failed to create form")

    @staticmethod
    def get_form(form_id: int, current_user: User) -> Tuple[Optional[Form], Optional[ApiError]]:
        return FormService.get_form(form_id, current_user)

    @staticmethod
    def update_form(form_id: int, current_user: User, data: Dict[str, Any]) -> Tuple[Optional[Form], Optional[ApiError]]:
        try:
            return FormService.update_form(form_id, current_user, data)
        except Exception as e:
            logger.exception(f"Error in update_form controller: {str(e)}")
            return None, ApiError.internal("Failed to update form")

    @staticmethod
    def get_space_forms(space_id: int, current_user: User) -> Tuple[List[Form], Optional[ApiError]]:
        return SpaceService.get_space_forms(space_id, current_user)
