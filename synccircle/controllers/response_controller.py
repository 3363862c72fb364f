# synccircle/controllers/response_controller.py

from typing import Any, Dict, Optional, Tuple
from synccircle.models.response import Response
from synccircle.models.user import User
from synccircle.services.response_service import ResponseService
from synccircle.utils.api_errors import ApiError
import logging

logger = logging.getLogger(__name__)

class ResponseController:
    """
    Controller for the response lifecycle.
    Delegates to ResponseService; unexpected failures become internal errors.
    """

    @staticmethod
    def save_response(current_user: User, data: Any) -> Tuple[Optional[Response], Optional[ApiError]]:
        try:
            return ResponseService.save_response(current_user, data)
        except Exception as e:
            logger.exception(f"Error in save_response controller: {str(e)}")
            return None, ApiError.internal("Failed to save response")

    @staticmethod
    def update_response(response_id: int, current_user: User, data: Any) -> Tuple[Optional[Response], Optional[ApiError]]:
        try:
            return ResponseService.update_response(response_id, current_user, data)
        except Exception as e:
            logger.exception(f"Error in update_response controller: {str(e)}")
            return None, ApiError.internal("Failed to update response")

    @staticmethod
    def get_response(response_id: int, current_user: User) -> Tuple[Optional[Response], Optional[ApiError]]:
        return ResponseService.get_response(response_id, current_user)

    @staticmethod
    def get_my_draft(form_id: int, current_user: User) -> Tuple[Optional[Response], Optional[ApiError]]:
        return ResponseService.get_my_draft(form_id, current_user)

    @staticmethod
    def has_pending_submission(form_id: int, current_user: User) -> Tuple[bool, Optional[ApiError]]:
        return ResponseService.has_pending_submission(form_id, current_user)

    @staticmethod
    def get_form_responses(form_id: int, current_user: User) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        try:
            return ResponseService.get_form_responses(form_id, current_user)
        except Exception as e:
            logger.exception(f"Error in get_form_responses controller: {str(e)}")
            return None, ApiError.internal("Failed to load responses")
