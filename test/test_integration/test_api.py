import pytest
import json
from synccircle.models import Response
from conftest import QUESTIONS

COMPLETE = {'q1': 'Wrote tests', 'q2': 5}

def _post_response(client, headers, form_id, answers, is_draft):
    return client.post('/api/responses', json={'formId': form_id, 'answers': answers, 'isDraft': is_draft},
                       headers=headers)

def test_login_and_me(client, member_user):
    response = client.post('/api/auth/login', json={'username': 'bob', 'password': 'password123'})
    assert response.status_code == 200
    token = response.get_json()['access_token']

    me = client.get('/api/auth/me', headers={'Authorization': f'Bearer {token}'})
    assert me.status_code == 200
    assert me.get_json()['username'] == 'bob'

@pytest.mark.parametrize("body,status", [
    ({'username': 'bob', 'password': 'wrong-password'}, 401),
    ({'username': 'bob'}, 400),
    (None, 400),
])
def test_login_failures(client, member_user, body, status):
    response = client.post('/api/auth/login', json=body)
    assert response.status_code == status
    assert 'error' in response.get_json()

def test_logout_revokes_token(client, member_user, auth_headers):
    headers = auth_headers(member_user)
    assert client.post('/api/auth/logout', headers=headers).status_code == 200

    response = client.get('/api/auth/me', headers=headers)
    assert response.status_code == 401
    assert response.get_json() == {"error": "Token has been revoked", "error_type": "unauthorized"}

def test_requests_without_token_are_unauthorized(client, form):
    response = client.get(f'/api/forms/{form.id}/my-response')
    assert response.status_code == 401
    assert response.get_json()['error_type'] == 'unauthorized'

def test_token_for_deleted_user(client, session, member_user, auth_headers):
    headers = auth_headers(member_user)
    session.delete(member_user)
    session.commit()

    response = client.get('/api/auth/me', headers=headers)
    assert response.status_code == 401

def test_draft_lifecycle_over_http(client, form, member_user, auth_headers):
    headers = auth_headers(member_user)

    assert client.get(f'/api/forms/{form.id}/my-response', headers=headers).get_json() is None

    first = _post_response(client, headers, form.id, {'q1': 'a'}, True)
    second = _post_response(client, headers, form.id, {'q1': 'a', 'q2': 3}, True)
    assert first.status_code == 200
    assert second.get_json()['id'] == first.get_json()['id']

    draft = client.get(f'/api/forms/{form.id}/my-response', headers=headers).get_json()
    assert draft['answers'] == {'q1': 'a', 'q2': 3}
    assert draft['isDraft'] is True
    pending = client.get(f'/api/forms/{form.id}/pending-submission', headers=headers).get_json()
    assert pending == {'hasPendingSubmission': True}

    submitted = _post_response(client, headers, form.id, COMPLETE, False)
    assert submitted.status_code == 200
    assert submitted.get_json()['isDraft'] is False
    assert submitted.get_json()['id'] != first.get_json()['id']

    assert client.get(f'/api/forms/{form.id}/my-response', headers=headers).get_json() is None
    pending = client.get(f'/api/forms/{form.id}/pending-submission', headers=headers).get_json()
    assert pending == {'hasPendingSubmission': False}
    assert Response.query.filter_by(form_id=form.id).count() == 2

def test_submit_missing_required_answers(client, form, member_user, auth_headers):
    response = _post_response(client, auth_headers(member_user), form.id, {'q1': 'only this'}, False)

    assert response.status_code == 400
    body = response.get_json()
    assert body['error_type'] == 'validation_error'
    assert body['details'] == ["Missing required answers: How was your week?"]

@pytest.mark.parametrize("user_fixture,form_id,status", [
    ('outsider_user', None, 403),
    ('member_user', 9999, 404),
])
def test_save_response_errors(request, client, form, auth_headers, user_fixture, form_id, status):
    user = request.getfixturevalue(user_fixture)
    response = _post_response(client, auth_headers(user), form_id or form.id, {'q1': 'a'}, True)
    assert response.status_code == status

def test_save_response_rejects_non_json(client, form, member_user, auth_headers):
    response = client.post('/api/responses', data='not json', headers=auth_headers(member_user))
    assert response.status_code == 400
    assert response.get_json()['details'] == ["Request body must be a JSON object"]

def test_update_response_endpoint(client, form, member_user, admin_user, auth_headers):
    created = _post_response(client, auth_headers(member_user), form.id, COMPLETE, False).get_json()

    edited = client.put(f"/api/responses/{created['id']}", json={'answers': {'q1': 'Edited', 'q2': 2}, 'isDraft': False},
                        headers=auth_headers(member_user))
    assert edited.status_code == 200
    assert edited.get_json()['answers'] == {'q1': 'Edited', 'q2': 2}

    forbidden = client.put(f"/api/responses/{created['id']}", json={'answers': COMPLETE, 'isDraft': False},
                           headers=auth_headers(admin_user))
    assert forbidden.status_code == 403

    missing = client.put('/api/responses/9999', json={'answers': COMPLETE, 'isDraft': False},
                         headers=auth_headers(member_user))
    assert missing.status_code == 404

def test_get_response_endpoint(client, form, member_user, admin_user, outsider_user, auth_headers):
    created = _post_response(client, auth_headers(member_user), form.id, COMPLETE, False).get_json()

    assert client.get(f"/api/responses/{created['id']}", headers=auth_headers(member_user)).status_code == 200
    assert client.get(f"/api/responses/{created['id']}", headers=auth_headers(admin_user)).status_code == 200
    assert client.get(f"/api/responses/{created['id']}", headers=auth_headers(outsider_user)).status_code == 403

def test_admin_response_listing(client, form, admin_user, member_user, auth_headers):
    _post_response(client, auth_headers(member_user), form.id, {'q1': 'b', 'q2': 4, 'q3': 'Okay'}, False)
    _post_response(client, auth_headers(admin_user), form.id, {'q1': 'draft only'}, True)

    response = client.get(f'/api/forms/{form.id}/responses', headers=auth_headers(admin_user))
    assert response.status_code == 200
    data = json.loads(response.data)

    assert len(data['responses']) == 1
    assert data['responses'][0]['user']['username'] == 'bob'
    assert data['stats']['totalResponses'] == 1
    assert data['stats']['completionRate'] == 50
    assert data['stats']['averageRating'] == 4.0

    assert client.get(f'/api/forms/{form.id}/responses', headers=auth_headers(member_user)).status_code == 403

def test_form_endpoints(client, space, admin_user, member_user, auth_headers):
    payload = {
        'title': 'Standup',
        'spaceId': space.id,
        'questions': QUESTIONS,
        'frequency': 'weekly',
        'sendTime': '08:45',
    }
    created = client.post('/api/forms', json=payload, headers=auth_headers(admin_user))
    assert created.status_code == 201
    form_id = created.get_json()['id']

    assert client.post('/api/forms', json=payload, headers=auth_headers(member_user)).status_code == 403

    fetched = client.get(f'/api/forms/{form_id}', headers=auth_headers(member_user))
    assert fetched.get_json()['title'] == 'Standup'

    updated = client.put(f'/api/forms/{form_id}', json={'isActive': False}, headers=auth_headers(admin_user))
    assert updated.get_json()['isActive'] is False

    listed = client.get(f'/api/spaces/{space.id}/forms', headers=auth_headers(member_user))
    assert [f['id'] for f in listed.get_json()] == [form_id]

def test_create_form_validation_body(client, space, admin_user, auth_headers):
    response = client.post('/api/forms', json={'spaceId': space.id, 'title': 'x'}, headers=auth_headers(admin_user))
    assert response.status_code == 400
    body = response.get_json()
    assert body['error'] == "Invalid form data"
    assert "questions must be a list" in body['details']

def test_unknown_route_uses_json_error(client):
    response = client.get('/api/nope')
    assert response.status_code == 404
    assert response.get_json()['error_type'] == 'not_found'

def test_ping_endpoints(client):
    assert client.get('/api/ping').get_json()['status'] == 'pong'
    assert client.get('/api/health/ping').status_code == 200
    status = client.get('/api/health/status')
    assert status.status_code == 200
    assert status.get_json()['database_connection'] == 'healthy'
