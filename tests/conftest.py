# tests/conftest.py

import pytest
from unittest.mock import MagicMock
from prayertools import create_app, db as _db
from prayertools.services.auth_service import create_access_token, find_credential

ADMIN_EMAIL = 'admin@islamicprayertools.com'
STAFF_EMAIL = 'staff@islamicprayertools.com'


@pytest.fixture(scope='session')
def app():
    """Session-wide application for testing."""
    app = create_app('testing')
    return app

@pytest.fixture(scope='function')
def db(app):
    """Function-level database setup. Creates and tears down tables for each test function."""
    with app.app_context():
        _db.create_all()

        yield _db

        _db.session.remove()
        _db.drop_all()

@pytest.fixture(scope='function')
def test_client(app, db):
    """A test client for the app, ensuring the DB is initialized."""
    return app.test_client()


def create_test_token(app, email):
    """Helper to sign a token for one of the configured credentials."""
    credential = find_credential(app.config['CREDENTIALS'], email)
    token = create_access_token(credential, app.config['JWT_SECRET_KEY'])
    return {'Authorization': f'Bearer {token}'}

@pytest.fixture(scope='function')
def auth_headers_for_admin(app):
    return create_test_token(app, ADMIN_EMAIL)

@pytest.fixture(scope='function')
def auth_headers_for_staff(app):
    return create_test_token(app, STAFF_EMAIL)


@pytest.fixture
def mock_upstream(mocker):
    """
    Patches requests.get used by the upstream adapters.
    The mock answers with a small, valid AlAdhan payload by default.
    """
    mock_response = MagicMock()
    mock_response.status_code = 200
    mock_response.raise_for_status.return_value = None
    mock_response.json.return_value = {
        "code": 200,
        "status": "OK",
        "data": {
            "timings": {"Fajr": "05:00", "Dhuhr": "13:00", "Asr": "17:00", "Maghrib": "18:45", "Isha": "20:00"},
        },
    }
    mock_get = mocker.patch('prayertools.services.upstream.requests.get',
                            return_value=mock_response)
    return mock_get
