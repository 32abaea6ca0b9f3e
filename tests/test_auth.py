# tests/test_auth.py

import datetime
import json

import jwt
import pytest
from werkzeug.security import generate_password_hash

from prayertools.errors import AuthenticationError
from prayertools.services.auth_service import (
    Credential,
    login,
    create_access_token,
    decode_access_token,
)
from prayertools.utils.time_utils import parse_duration

SECRET = 'unit-test-secret-key-with-enough-length'


@pytest.fixture(scope='module')
def credentials():
    return (
        Credential(id=7, email='imam@example.com', password_hash=generate_password_hash('Secret1!'),
                   role='admin', name='Imam'),
    )

# --- Credential Gate ---

def test_login_returns_token_and_public_summary(credentials):
    token, user = login('imam@example.com', 'Secret1!', credentials, SECRET)

    assert user == {"id": 7, "email": 'imam@example.com', "role": 'admin', "name": 'Imam'}
    assert 'password_hash' not in user

    payload = jwt.decode(token, SECRET, algorithms=["HS256"])
    assert payload['id'] == 7
    assert payload['email'] == 'imam@example.com'
    assert payload['role'] == 'admin'

def test_login_unknown_email_and_wrong_password_look_the_same(credentials):
    with pytest.raises(AuthenticationError) as wrong_password:
        login('imam@example.com', 'wrongpass', credentials, SECRET)
    with pytest.raises(AuthenticationError) as unknown_user:
        login('nouser@x.com', 'anything', credentials, SECRET)

    assert str(wrong_password.value) == str(unknown_user.value) == "Invalid credentials"

def test_login_email_match_is_exact(credentials):
    with pytest.raises(AuthenticationError):
        login('IMAM@example.com', 'Secret1!', credentials, SECRET)

def test_token_expiration_defaults_to_seven_days(credentials):
    now = datetime.datetime(2025, 1, 1, tzinfo=datetime.timezone.utc)
    token = create_access_token(credentials[0], SECRET, now=now)
    payload = jwt.decode(token, SECRET, algorithms=["HS256"], options={"verify_exp": False})
    assert payload['exp'] - payload['iat'] == 7 * 24 * 3600

def test_expired_token_is_rejected(credentials):
    issued = datetime.datetime.now(datetime.timezone.utc) - datetime.timedelta(hours=2)
    token = create_access_token(credentials[0], SECRET, expires_in='1h', now=issued)
    with pytest.raises(AuthenticationError, match="expired"):
        decode_access_token(token, SECRET)

def test_token_signed_with_other_secret_is_rejected(credentials):
    token = create_access_token(credentials[0], 'another-secret-key-with-enough-length')
    with pytest.raises(AuthenticationError):
        decode_access_token(token, SECRET)

@pytest.mark.parametrize("value, seconds", [
    ("7d", 7 * 86400),
    ("12h", 12 * 3600),
    ("30m", 1800),
    ("45s", 45),
    ("3600", 3600),
    (120, 120),
])
def test_parse_duration(value, seconds):
    assert parse_duration(value).total_seconds() == seconds

def test_parse_duration_rejects_garbage():
    with pytest.raises(ValueError):
        parse_duration("seven days")

# --- Login route ---

def test_login_route_with_default_admin(test_client, app):
    response = test_client.post('/api/auth/login', json={
        "email": "admin@islamicprayertools.com", "password": "Admin123!"
    })
    assert response.status_code == 200
    data = json.loads(response.data)
    assert data['success'] is True
    assert data['user'] == {
        "id": 1, "email": "admin@islamicprayertools.com", "role": "admin", "name": "Admin User"
    }
    payload = jwt.decode(data['token'], app.config['JWT_SECRET_KEY'], algorithms=["HS256"])
    assert payload['role'] == 'admin'

def test_login_route_wrong_password_matches_unknown_user(test_client):
    wrong_password = test_client.post('/api/auth/login', json={
        "email": "admin@islamicprayertools.com", "password": "wrongpass"
    })
    unknown_user = test_client.post('/api/auth/login', json={
        "email": "nouser@x.com", "password": "anything"
    })
    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.get_json() == unknown_user.get_json() == {"error": "Invalid credentials"}

@pytest.mark.parametrize("body", [
    {},
    {"email": "admin@islamicprayertools.com"},
    {"password": "Admin123!"},
    {"email": "", "password": "Admin123!"},
])
def test_login_route_missing_fields(test_client, body):
    response = test_client.post('/api/auth/login', json=body)
    assert response.status_code == 400
    assert response.get_json()['error'] == "Email and password required"

def test_login_route_unexpected_failure(test_client, mocker):
    mocker.patch('prayertools.routes.auth_routes.auth_service.login', side_effect=RuntimeError("boom"))
    response = test_client.post('/api/auth/login', json={"email": "a@b.c", "password": "x"})
    assert response.status_code == 500
    assert response.get_json() == {"error": "Login failed"}

# --- Protected routes ---

def test_protected_route_without_token(test_client):
    response = test_client.get('/api/notifications/')
    assert response.status_code == 401
    assert response.get_json() == {"error": "Authentication token is missing!"}

def test_protected_route_with_bad_token(test_client):
    response = test_client.get('/api/notifications/', headers={'Authorization': 'Bearer not-a-token'})
    assert response.status_code == 401

def test_admin_route_rejects_staff(test_client, auth_headers_for_staff):
    response = test_client.get('/api/notifications/', headers=auth_headers_for_staff)
    assert response.status_code == 403
