# synccircle/services/space_service.py
from typing import List, Optional, Tuple
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from synccircle import db
from synccircle.models.form import Form
from synccircle.models.space import Space
from synccircle.models.space_member import SpaceMember, SpaceRole
from synccircle.models.user import User
from synccircle.utils.api_errors import ApiError
from synccircle.utils.permission_manager import PermissionManager
import logging

logger = logging.getLogger(__name__)

class SpaceService:
    @staticmethod
    def create_space(name: str, owner: User, description: Optional[str] = None) -> Tuple[Optional[Space], Optional[str]]:
        """Create a space; its owner joins it as an admin."""
        if not name or not name.strip():
            return None, "Space name is required"
        try:
            space = Space(name=name.strip(), description=description, owner_id=owner.id)
            db.session.add(space)
            db.session.flush()
            db.session.add(SpaceMember(space_id=space.id, user_id=owner.id, role=SpaceRole.ADMIN))
            db.session.commit()
            logger.info(f"Space {space.id} '{space.name}' created by {owner.username}")
            return space, None
        except IntegrityError:
            db.session.rollback()
            return None, "Could not create space: invite code collision, please retry"

    @staticmethod
    def add_member(space_id: int, user: User, role: str = SpaceRole.PARTICIPANT) -> Tuple[Optional[SpaceMember], Optional[str]]:
        if role not in SpaceRole.ALL:
            return None, f"Role must be one of: {', '.join(SpaceRole.ALL)}"
        space = db.session.get(Space, space_id)
        if not space:
            return None, "Space not found"
        if PermissionManager.is_member(user, space_id):
            return None, "Already a member of this space"

        member = SpaceMember(space_id=space_id, user_id=user.id, role=role)
        db.session.add(member)
        db.session.commit()
        logger.info(f"User {user.username} joined space {space_id} as {role}")
        return member, None

    @staticmethod
    def get_member_count(space_id: int) -> int:
        return db.session.query(func.count(SpaceMember.id)).filter(SpaceMember.space_id == space_id).scalar() or 0

    @staticmethod
    def get_space_forms(space_id: int, current_user: User) -> Tuple[List[Form], Optional[ApiError]]:
        space = db.session.get(Space, space_id)
        if not space:
            return [], ApiError.not_found("Space not found")
        error = PermissionManager.check_space_access(current_user, space_id)
        if error:
            return [], error
        forms = Form.query.filter_by(space_id=space_id).order_by(Form.created_at.desc(), Form.id.desc()).all()
        return forms, None
