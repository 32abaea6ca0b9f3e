import os
from dotenv import load_dotenv
from werkzeug.security import generate_password_hash

from .utils.constants import Roles

# Load .env file
dotenv_path = os.path.join(os.path.dirname(os.path.dirname(__file__)), '.env')
if os.path.exists(dotenv_path):
    load_dotenv(dotenv_path)
else:
    print("Warning: .env file not found. Using defaults or environment variables.")


def _default_credentials():
    """
    Builds the fixed list of staff accounts allowed to log in.

    Hashes are read from the environment when present. Otherwise the demo
    passwords are hashed once at import time.
    """
    from .services.auth_service import Credential

    admin_hash = os.environ.get('ADMIN_PASSWORD_HASH') or generate_password_hash('Admin123!', method='pbkdf2:sha256')
    staff_hash = os.environ.get('STAFF_PASSWORD_HASH') or generate_password_hash('Staff123!', method='pbkdf2:sha256')
    return (
        Credential(id=1, email='admin@islamicprayertools.com', password_hash=admin_hash,
                   role=Roles.ADMIN, name='Admin User'),
        Credential(id=2, email='staff@islamicprayertools.com', password_hash=staff_hash,
                   role=Roles.STAFF, name='Staff User'),
    )


class Config:
    """Base configuration."""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'a_default_fallback_secret_key_for_development_only'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///prayertools.db'
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Sentry Configuration
    SENTRY_DSN = os.environ.get('SENTRY_DSN')

    # JWT issued by the login route
    JWT_SECRET_KEY = os.environ.get('JWT_SECRET_KEY') or 'fallback-secret'
    JWT_EXPIRES_IN = os.environ.get('JWT_EXPIRES_IN', '7d')
    CREDENTIALS = _default_credentials()

    # Redis is only used as the Celery broker and result backend.
    REDIS_URL = os.environ.get('REDIS_URL') or 'redis://localhost:6379/0'
    CELERY_BROKER_URL = os.environ.get('CELERY_BROKER_URL') or REDIS_URL
    CELERY_RESULT_BACKEND = os.environ.get('CELERY_RESULT_BACKEND') or REDIS_URL

    # How often (seconds) the beat scheduler looks for due notifications.
    NOTIFICATION_DISPATCH_INTERVAL = int(os.environ.get('NOTIFICATION_DISPATCH_INTERVAL', 60))

    # Prayer Time API Configuration
    PRAYER_API_BASE_URL = os.environ.get('PRAYER_API_BASE_URL') or "http://api.aladhan.com/v1"
    PRAYER_API_TIMEOUT = float(os.environ.get('PRAYER_API_TIMEOUT', 10))
    DEFAULT_CALCULATION_METHOD = os.environ.get('DEFAULT_CALCULATION_METHOD', '2')

    # Geolocation API Configuration
    IP_LOCATION_API_URL = os.environ.get('IP_LOCATION_API_URL') or "https://ipapi.co/json/"
    GEOCODING_API_URL = os.environ.get('GEOCODING_API_URL') or "https://maps.googleapis.com/maps/api/geocode/json"
    GOOGLE_MAPS_API_KEY = os.environ.get('GOOGLE_MAPS_API_KEY')
    LOCATION_API_TIMEOUT = float(os.environ.get('LOCATION_API_TIMEOUT', 10))

    # Mosque directory
    DEFAULT_SEARCH_RADIUS_KM = float(os.environ.get('DEFAULT_SEARCH_RADIUS_KM', 8.047))

    # 100 requests per 15 minutes by default
    RATELIMIT_DEFAULT = os.environ.get('RATELIMIT_DEFAULT', '100 per 15 minutes')
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', 'http://localhost:3000,http://localhost:3001').split(',')

class DevelopmentConfig(Config):
    FLASK_ENV = 'development'
    DEBUG = True
    LOG_LEVEL = "DEBUG"

class ProductionConfig(Config):
    FLASK_ENV = 'production'
    DEBUG = False

    # Ensure critical secrets are set in production
    if os.environ.get('FLASK_CONFIG') == 'production':
        if not os.environ.get('SECRET_KEY'):
            raise ValueError("CRITICAL: SECRET_KEY not found in environment!")
        if not os.environ.get('JWT_SECRET_KEY'):
            raise ValueError("CRITICAL: JWT_SECRET_KEY not found in environment!")
        if not os.environ.get('DATABASE_URL'):
            raise ValueError("CRITICAL: DATABASE_URL for production is not set!")

        if not Config.SENTRY_DSN:
            print("Warning: SENTRY_DSN not found. Error tracking will be disabled.")

class TestingConfig(Config):
    TESTING = True
    # Use an in-memory SQLite database for tests to ensure speed and isolation.
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    RATELIMIT_ENABLED = False # Disable rate limiting for tests
    SECRET_KEY = 'test-secret-key'
    JWT_SECRET_KEY = 'test-jwt-secret-key-that-is-long-enough-for-hs256'
    PRAYER_API_BASE_URL = 'http://aladhan.test/v1'
    IP_LOCATION_API_URL = 'http://ipapi.test/json/'
    GEOCODING_API_URL = 'http://geocode.test/json'
    GOOGLE_MAPS_API_KEY = 'test-maps-key'
    CELERY_BROKER_URL = 'memory://'
    CELERY_RESULT_BACKEND = 'cache+memory://'

config_by_name = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
