import datetime

import jwt
import pytest
from flask_jwt_extended import create_access_token

from agrimarket.errors import AuthError, ConflictError, ValidationError
from agrimarket.services import auth_service
from helpers import register_payload, auth_header


def test_register_returns_token_and_public_profile(client):
    response = client.post('/api/auth/register', json=register_payload())

    assert response.status_code == 201
    body = response.get_json()
    assert body['token']
    assert body['user']['username'] == 'farmer42'
    assert body['user']['fullName'] == 'Jane Doe'
    assert body['user']['userType'] == 'seller'
    assert body['user']['age'] == 30
    assert body['user']['avatar'] == '👤'
    assert 'password' not in body['user']


def test_register_stores_bcrypt_hash(client, users):
    client.post('/api/auth/register', json=register_payload())

    stored = users.find_by_username('farmer42')
    assert stored.password != 'secret1'
    assert stored.password.startswith('$2')


def test_register_same_username_twice_conflicts(client):
    first = client.post('/api/auth/register', json=register_payload())
    second = client.post('/api/auth/register', json=register_payload(
        password='another-pass', fullName='Someone Else', age=55, region='Davao', userType='buyer'))

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.get_json() == {'error': 'Username already exists'}


def test_usernames_are_case_sensitive(client):
    client.post('/api/auth/register', json=register_payload())
    response = client.post('/api/auth/register', json=register_payload(username='Farmer42'))

    assert response.status_code == 201


@pytest.mark.parametrize('field, value', [
    ('username', 'ab'),
    ('password', '12345'),
    ('fullName', 'J'),
    ('age', 17),
    ('age', 101),
    ('age', 'thirty'),
    ('region', 'C'),
    ('userType', 'farmer'),
])
def test_register_rejects_invalid_field(client, field, value):
    response = client.post('/api/auth/register', json=register_payload(**{field: value}))

    assert response.status_code == 400
    body = response.get_json()
    assert body['error'] == 'Validation failed'
    assert [d['field'] for d in body['details']] == [field]


def test_register_reports_every_invalid_field(client):
    response = client.post('/api/auth/register', json={'username': 'x'})

    fields = {d['field'] for d in response.get_json()['details']}
    assert fields == {'username', 'password', 'fullName', 'age', 'region', 'userType'}


def test_register_accepts_numeric_string_age_and_age_bounds(client):
    assert client.post('/api/auth/register', json=register_payload(username='young', age='18')).status_code == 201
    assert client.post('/api/auth/register', json=register_payload(username='elder', age=100)).status_code == 201


def test_register_with_invalid_json(client):
    response = client.post('/api/auth/register', data='{not json', content_type='application/json')

    assert response.status_code == 400
    assert response.get_json() == {'error': 'Invalid JSON in request body'}


def test_login_success(client, registered):
    response = client.post('/api/auth/login', json={'username': 'farmer42', 'password': 'secret1'})

    assert response.status_code == 200
    body = response.get_json()
    assert body['message'] == 'Login successful'
    assert body['token']
    assert body['user']['id'] == registered[1]['id']


def test_login_errors_do_not_reveal_which_part_was_wrong(client, registered):
    wrong_password = client.post('/api/auth/login', json={'username': 'farmer42', 'password': 'nope123'})
    unknown_user = client.post('/api/auth/login', json={'username': 'ghost', 'password': 'secret1'})

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.get_json() == unknown_user.get_json() == {'error': 'Invalid username or password'}


def test_login_requires_both_fields(client):
    response = client.post('/api/auth/login', json={'username': ''})

    assert response.status_code == 400
    assert {d['field'] for d in response.get_json()['details']} == {'username', 'password'}


def test_verify_token_returns_user(client, registered):
    token, user = registered
    response = client.get('/api/auth/verify', headers=auth_header(token))

    assert response.status_code == 200
    assert response.get_json()['user']['username'] == user['username']


def test_verify_without_token(client):
    response = client.get('/api/auth/verify')

    assert response.status_code == 401
    assert response.get_json() == {'error': 'Access token required'}


@pytest.mark.parametrize('header', ['Bearer not-a-token', 'Bearer a.b.c'])
def test_verify_with_malformed_token(client, header):
    response = client.get('/api/auth/verify', headers={'Authorization': header})

    assert response.status_code == 403
    assert response.get_json() == {'error': 'Invalid or expired token'}


def test_verify_with_expired_token(app, client):
    with app.app_context():
        token = create_access_token(identity='1', expires_delta=datetime.timedelta(seconds=-10))

    response = client.get('/api/auth/verify', headers=auth_header(token))

    assert response.status_code == 403


def test_verify_with_foreign_signature(client):
    token = jwt.encode({'sub': '1', 'type': 'access'}, 'some-other-secret', algorithm='HS256')

    response = client.get('/api/auth/verify', headers=auth_header(token))

    assert response.status_code == 403


def test_verify_token_for_unknown_user(app, client):
    with app.app_context():
        token = auth_service.issue_token('ghost')

    response = client.get('/api/auth/verify', headers=auth_header(token))

    assert response.status_code == 404


def test_verify_token_service(app):
    with app.app_context():
        token = auth_service.issue_token('abc123')
        assert auth_service.verify_token(token) == 'abc123'
        with pytest.raises(AuthError) as excinfo:
            auth_service.verify_token(None)
        assert excinfo.value.status_code == 401


def test_register_service_conflict_and_validation(app, users):
    with app.app_context():
        auth_service.register(users, register_payload())
        with pytest.raises(ConflictError):
            auth_service.register(users, register_payload(fullName='Other Person'))
        with pytest.raises(ValidationError):
            auth_service.register(users, register_payload(username='new', password='short'))


def test_update_profile(client, registered):
    token, _ = registered
    response = client.put('/api/users/me', json={'region': 'Bohol', 'userType': 'both'},
                          headers=auth_header(token))

    assert response.status_code == 200
    user = response.get_json()['user']
    assert user['region'] == 'Bohol'
    assert user['userType'] == 'both'
    assert user['fullName'] == 'Jane Doe'


def test_update_profile_validates(client, registered):
    token, _ = registered
    response = client.put('/api/users/me', json={'age': 12}, headers=auth_header(token))

    assert response.status_code == 400


def test_current_user_profile(client, registered):
    token, user = registered
    response = client.get('/api/users/me', headers=auth_header(token))

    assert response.status_code == 200
    assert response.get_json()['id'] == user['id']


def test_users_list_hides_password_hashes(client, registered):
    response = client.get('/api/users')

    assert response.status_code == 200
    body = response.get_json()
    assert [u['username'] for u in body] == ['farmer42']
    assert all('password' not in u for u in body)


def test_register_and_login_with_password_over_bcrypt_limit(client):
    long_password = 'p' * 80

    register = client.post('/api/auth/register', json=register_payload(password=long_password))
    login = client.post('/api/auth/login', json={'username': 'farmer42', 'password': long_password})

    assert register.status_code == 201
    assert login.status_code == 200
    assert login.get_json()['user']['username'] == 'farmer42'


def test_long_password_differing_past_72_bytes_is_rejected(client):
    client.post('/api/auth/register', json=register_payload(password='p' * 80))

    response = client.post('/api/auth/login', json={'username': 'farmer42', 'password': 'p' * 79 + 'q'})

    assert response.status_code == 401
    assert response.get_json() == {'error': 'Invalid username or password'}
