import pytest
from datetime import datetime
from synccircle.models import Response, Space, SpaceMember
from synccircle.models.space import generate_invite_code, INVITE_CODE_ALPHABET, INVITE_CODE_LENGTH
from synccircle.models.space_member import SpaceRole

def test_password_hashing(app_context, admin_user):
    """Passwords are stored hashed and checked against the hash."""
    assert admin_user.password_hash != 'password123'
    assert admin_user.check_password('password123')
    assert not admin_user.check_password('wrong-password')

def test_user_to_dict_hides_password(app_context, admin_user):
    data = admin_user.to_dict()
    assert data['username'] == 'alice'
    assert 'password_hash' not in data
    assert 'passwordHash' not in data

def test_generate_invite_code():
    code = generate_invite_code()
    assert len(code) == INVITE_CODE_LENGTH
    assert all(char in INVITE_CODE_ALPHABET for char in code)

def test_space_gets_invite_code(session, admin_user):
    space = Space(name='Design', owner_id=admin_user.id)
    session.add(space)
    session.commit()
    assert space.invite_code and len(space.invite_code) == INVITE_CODE_LENGTH

def test_space_member_is_admin(session, space, admin_user, member_user):
    admin = SpaceMember.query.filter_by(space_id=space.id, user_id=admin_user.id).one()
    member = SpaceMember.query.filter_by(space_id=space.id, user_id=member_user.id).one()
    assert admin.is_admin
    assert not member.is_admin
    assert member.role == SpaceRole.PARTICIPANT

def test_form_question_lookup(app_context, form):
    assert form.get_question('q2')['type'] == 'rating'
    assert form.get_question('missing') is None
    assert [q['id'] for q in form.required_questions()] == ['q1', 'q2']

def test_form_to_dict_uses_camel_case(app_context, form):
    data = form.to_dict()
    assert data['spaceId'] == form.space_id
    assert data['sendTime'] == '09:00'
    assert data['isActive'] is True
    assert len(data['questions']) == 4

@pytest.mark.parametrize("is_draft", [True, False])
def test_response_to_dict(session, form, member_user, is_draft):
    response = Response(form_id=form.id, user_id=member_user.id, answers={'q1': 'Shipped it'},
                        is_draft=is_draft, submitted_at=datetime(2024, 5, 1, 9, 30))
    session.add(response)
    session.commit()

    data = response.to_dict()
    assert data == {
        'id': response.id,
        'formId': form.id,
        'userId': member_user.id,
        'answers': {'q1': 'Shipped it'},
        'isDraft': is_draft,
        'submittedAt': '2024-05-01T09:30:00',
    }
    assert 'user' not in data
    assert response.to_dict(include_user=True)['user']['username'] == 'bob'
