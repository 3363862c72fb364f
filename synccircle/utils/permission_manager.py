# synccircle/utils/permission_manager.py

from typing import Optional
from functools import wraps
from flask_jwt_extended import get_jwt_identity
from synccircle.models.space_member import SpaceMember, SpaceRole
from synccircle.services.auth_service import AuthService
from synccircle.utils.api_errors import ApiError, error_response
import logging

logger = logging.getLogger(__name__)

class PermissionManager:
    """Space-scoped access checks.

    Every form belongs to one space; reading and answering it requires
    membership, managing it and viewing everyone's answers requires the
    space ``admin`` role.
    """

    @staticmethod
    def get_membership(user, space_id: int) -> Optional[SpaceMember]:
        if not user or space_id is None:
            return None
        return SpaceMember.query.filter_by(space_id=space_id, user_id=user.id).first()

    @classmethod
    def get_space_role(cls, user, space_id: int) -> Optional[str]:
        membership = cls.get_membership(user, space_id)
        return membership.role if membership else None

    @classmethod
    def is_member(cls, user, space_id: int) -> bool:
        return cls.get_membership(user, space_id) is not None

    @classmethod
    def is_space_admin(cls, user, space_id: int) -> bool:
        return cls.get_space_role(user, space_id) == SpaceRole.ADMIN

    @classmethod
    def check_space_access(cls, user, space_id: int, require_admin: bool = False,
                           action: str = "access this space") -> Optional[ApiError]:
        """Return a Forbidden error when ``user`` lacks the needed role, else None."""
        role = cls.get_space_role(user, space_id)
        if role is None:
            logger.warning(f"Permission denied: user {user.username if user else 'Unknown'} is not a member of space {space_id}")
            return ApiError.forbidden("Not a member of this space")
        if require_admin and role != SpaceRole.ADMIN:
            logger.warning(f"Permission denied: user {user.username} tried to {action} in space {space_id} as {role}")
            return ApiError.forbidden(f"Only admins can {action}")
        return None

    @staticmethod
    def check_resource_ownership(user, resource) -> bool:
        """Check if user owns the resource"""
        if hasattr(resource, 'user_id'):
            return resource.user_id == user.id
        if hasattr(resource, 'created_by'):
            return resource.created_by == user.id
        return False

    @staticmethod
    def require_current_user(f):
        """Resolve the JWT identity to a user and pass it as ``current_user``.

        Must sit below ``@jwt_required()``.
        """
        @wraps(f)
        def decorated_function(*args, **kwargs):
            identity = get_jwt_identity()
            user = AuthService.get_current_user(identity)
            if not user:
                logger.warning(f"Token identity '{identity}' does not match any user")
                return error_response(ApiError.unauthorized("User for this token no longer exists"))
            kwargs['current_user'] = user
            return f(*args, **kwargs)
        return decorated_function
