from flask_jwt_extended import decode_token
from synccircle import cache
from synccircle.models import TokenBlocklist
from synccircle.services.auth_service import AuthService
from synccircle.services.user_service import UserService

def test_authenticate_user(session, admin_user):
    token = AuthService.authenticate_user('alice', 'password123')
    assert token is not None
    assert decode_token(token)['sub'] == 'alice'

def test_authenticate_user_wrong_password(session, admin_user):
    assert AuthService.authenticate_user('alice', 'nope') is None
    assert AuthService.authenticate_user('nobody', 'password123') is None

def test_revoke_token_is_idempotent(session):
    assert AuthService.revoke_token('jti-1') == (True, None)
    assert AuthService.revoke_token('jti-1') == (True, None)
    assert TokenBlocklist.query.filter_by(jti='jti-1').count() == 1

def test_revoke_token_drops_cached_lookup(session):
    cache.set('blocklist:jti-2', False)
    AuthService.revoke_token('jti-2')
    assert cache.get('blocklist:jti-2') is None

def test_create_user(session):
    user, error = UserService.create_user('carol', 'longpassword', 'Carol', None, 'carol@example.com')
    assert error is None
    assert user.check_password('longpassword')

def test_create_user_validation(session, admin_user):
    assert UserService.create_user('al', 'longpassword')[1] == "Username must be at least 3 characters long"
    assert UserService.create_user('carol', 'short')[1] == "Password must be at least 8 characters long"
    assert UserService.create_user('carol', 'longpassword', email='bad')[1] == "Invalid email format"
    assert UserService.create_user('alice', 'longpassword')[1] == "User 'alice' already exists"
