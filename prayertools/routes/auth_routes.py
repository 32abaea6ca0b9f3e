# prayertools/routes/auth_routes.py

from flask import request, current_app
from flask_smorest import Blueprint
from marshmallow import ValidationError as SchemaValidationError

from ..errors import ValidationError, AuthenticationError, PrayerToolsError
from ..schemas import LoginSchema, LoginResponseSchema, ApiErrorSchema
from ..services import auth_service

auth_bp = Blueprint('Auth', __name__, url_prefix='/api/auth', description="Staff and admin login.")


@auth_bp.route('/login', methods=['POST'])
@auth_bp.response(200, LoginResponseSchema, description="Login succeeded.")
@auth_bp.alt_response(400, schema=ApiErrorSchema, description="Email or password missing.")
@auth_bp.alt_response(401, schema=ApiErrorSchema, description="Invalid credentials.")
@auth_bp.alt_response(500, schema=ApiErrorSchema, description="Login failed.")
def login():
    """
    Log in with email and password.

    Returns a signed token and the account's public profile.
    """
    try:
        data = LoginSchema().load(request.get_json(silent=True) or {})
    except SchemaValidationError as err:
        raise ValidationError("Email and password required", errors=err.messages)

    try:
        token, user = auth_service.login(
            data['email'],
            data['password'],
            credentials=current_app.config['CREDENTIALS'],
            secret=current_app.config['JWT_SECRET_KEY'],
            expires_in=current_app.config.get('JWT_EXPIRES_IN', '7d'),
        )
    except AuthenticationError:
        current_app.logger.info("Failed login attempt.")
        raise
    except Exception as e:
        current_app.logger.error(f"Login error: {e}", exc_info=True)
        raise PrayerToolsError("Login failed")

    current_app.logger.info(f"User {user['id']} ({user['role']}) logged in.")
    return {"success": True, "token": token, "user": user}
