# synccircle/services/user_service.py
from typing import Optional, Tuple
from sqlalchemy.exc import IntegrityError
from synccircle import db
from synccircle.models.user import User
from synccircle.utils.helpers import validate_email
import logging

logger = logging.getLogger(__name__)

class UserService:
    @staticmethod
    def create_user(username: str, password: str, first_name: Optional[str] = None,
                    last_name: Optional[str] = None, email: Optional[str] = None) -> Tuple[Optional[User], Optional[str]]:
        if not username or len(username.strip()) < 3:
            return None, "Username must be at least 3 characters long"
        if not password or len(password) < 8:
            return None, "Password must be at least 8 characters long"
        if email and not validate_email(email):
            return None, "Invalid email format"
        if User.query.filter_by(username=username).first():
            return None, f"User '{username}' already exists"

        try:
            user = User(
                username=username.strip(),
                first_name=first_name,
                last_name=last_name,
                email=email,
            )
            user.set_password(password)
            db.session.add(user)
            db.session.commit()
            logger.info(f"User {username} created")
            return user, None
        except IntegrityError:
            db.session.rollback()
            return None, "A user with this username or email already exists"

    @staticmethod
    def get_user_by_username(username: str) -> Optional[User]:
        return User.query.filter_by(username=username).first()
