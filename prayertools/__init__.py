import sentry_sdk
from sentry_sdk.integrations.flask import FlaskIntegration

# Import extensions from the central extensions file
from .extensions import db, migrate, limiter
import logging
from flask import Flask
from flask_cors import CORS
from flask_smorest import Api

# Declare extensions that are not in the extensions file
cors = CORS()

def create_app(config_name):
    """
    Flask Application Factory function.
    """
    app = Flask(__name__,
                instance_relative_config=False)

    # 1. Load Config
    from .config import config_by_name
    config_obj = config_by_name.get(config_name, config_by_name['default'])
    app.config.from_object(config_obj)
    app.logger.info(f"App configured with: {config_obj.__name__}")

    # Flask-Smorest API documentation configuration
    app.config["API_TITLE"] = "Islamic Prayer Tools API"
    app.config["API_VERSION"] = "v1"
    app.config["OPENAPI_VERSION"] = "3.0.2"
    app.config["OPENAPI_URL_PREFIX"] = "/api/docs"
    app.config["OPENAPI_SWAGGER_UI_PATH"] = "/swagger-ui"
    app.config["OPENAPI_SWAGGER_UI_URL"] = "https://cdn.jsdelivr.net/npm/swagger-ui-dist/"

    # 2. Sentry SDK initialization - for error and performance tracking
    if app.config.get('SENTRY_DSN'):
        sentry_sdk.init(
            dsn=app.config['SENTRY_DSN'],
            integrations=[FlaskIntegration()],
            send_default_pii=False,
            traces_sample_rate=1.0
        )
        app.logger.info("Sentry initialized for error tracking.")

    # 3. Check secrets
    if app.config.get('JWT_SECRET_KEY') == 'fallback-secret':
        app.logger.warning("JWT_SECRET_KEY is not set! Tokens are signed with an insecure fallback secret.")

    # 4. Initialize Extensions
    db.init_app(app)
    migrate.init_app(app, db)
    cors.init_app(app, resources={r"/api/*": {"origins": app.config.get('CORS_ORIGINS', '*')}},
                  supports_credentials=True)

    # 5. Initialize Rate Limiter
    limiter.init_app(app)

    # 6. Initialize Flask-Smorest API
    api = Api(app)
    api.spec.components.security_scheme(
        "Bearer", {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"}
    )

    # 7. Error handlers and template filters
    from .errors import register_error_handlers
    register_error_handlers(app)

    from .utils.numerals import to_arabic_numerals, from_arabic_numerals
    app.add_template_filter(to_arabic_numerals, 'arabic_numerals')
    app.add_template_filter(from_arabic_numerals, 'western_numerals')

    # 8. Background tasks
    from .celery_utils import init_celery
    init_celery(app)
    from . import tasks  # noqa: F401  registers the Celery tasks

    # 9. Register Blueprints in app context
    with app.app_context():
        from . import models  # noqa: F401  registers the tables with SQLAlchemy
        from .routes.main_routes import main_bp
        from .routes.auth_routes import auth_bp
        from .routes.prayer_routes import prayer_bp
        from .routes.mosque_routes import mosque_bp
        from .routes.notification_routes import notification_bp
        from .routes.location_routes import location_bp

        api.register_blueprint(main_bp)
        api.register_blueprint(auth_bp)
        api.register_blueprint(prayer_bp)
        api.register_blueprint(mosque_bp)
        api.register_blueprint(notification_bp)
        api.register_blueprint(location_bp)

        # 10. Set up Logging
        log_level_str = app.config.get('LOG_LEVEL', 'INFO').upper()
        log_level = getattr(logging, log_level_str, logging.INFO)
        app.logger.setLevel(log_level)

        app.logger.info(f"Application initialized with environment: {app.config.get('FLASK_ENV')}, Debug: {app.config.get('DEBUG')}")

    # 11. Finally, return the app
    return app
