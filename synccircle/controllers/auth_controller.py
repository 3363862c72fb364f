# synccircle/controllers/auth_controller.py

from synccircle.services.auth_service import AuthService
from synccircle.services.user_service import UserService
import logging

logger = logging.getLogger(__name__)

class AuthController:
    """Login/logout; delegates to AuthService."""

    @staticmethod
    def login(username: str, password: str):
        """Return an access token, or None for unknown users and bad passwords."""
        if not UserService.get_user_by_username(username):
            logger.warning(f"Login attempt for non-existent user: {username}")
            return None
        return AuthService.authenticate_user(username, password)

    @staticmethod
    def logout(jti: str, username: str = None):
        success, error = AuthService.revoke_token(jti)
        if not success:
            logger.warning(f"Token revocation failed during logout for user '{username}': {error}")
        return success, error
