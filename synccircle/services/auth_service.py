# synccircle/services/auth_service.py
from datetime import datetime, timezone
from flask_jwt_extended import create_access_token
from sqlalchemy.exc import IntegrityError
from synccircle.models.token_blocklist import TokenBlocklist
from synccircle.models.user import User
from synccircle import db, cache
import logging

logger = logging.getLogger(__name__)

class AuthService:
    @staticmethod
    def authenticate_user(username, password):
        """Return an access token for valid credentials, None otherwise"""
        user = User.query.filter_by(username=username).first()
        if user and user.check_password(password):
            access_token = create_access_token(identity=user.username)
            logger.info(f"User {username} authenticated")
            return access_token
        logger.warning(f"Failed login attempt for username '{username}'")
        return None

    @staticmethod
    def get_current_user(username):
        if not username:
            return None
        return User.query.filter_by(username=username).first()

    @staticmethod
    def revoke_token(jti):
        """Add a token's JTI to the blocklist.

        Returns (success, error_message).
        """
        try:
            db.session.add(TokenBlocklist(jti=jti, created_at=datetime.now(timezone.utc)))
            db.session.commit()
        except IntegrityError:
            # Already revoked
            db.session.rollback()
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error revoking token {jti}: {str(e)}", exc_info=True)
            return False, "Could not revoke token"

        # Drop any cached "not revoked" answer for this token
        cache.delete(f"blocklist:{jti}")
        logger.info(f"Token {jti} revoked")
        return True, None
