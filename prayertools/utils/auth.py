# prayertools/utils/auth.py
from functools import wraps
from flask import request, current_app, g

from ..errors import AuthenticationError, AuthorizationError
from ..services.auth_service import decode_access_token


def _get_bearer_token():
    auth_header = request.headers.get("authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header.split(" ", 1)[1].strip()
    return None


def _validate_token_and_get_user():
    """Decodes the bearer token and stores its payload on g.user."""
    token = _get_bearer_token()
    if not token:
        raise AuthenticationError("Authentication token is missing!")

    payload = decode_access_token(token, current_app.config['JWT_SECRET_KEY'])
    g.user = payload
    current_app.logger.debug(f"Authenticated user {payload.get('id')} with role {payload.get('role')}")
    return payload


def jwt_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        _validate_token_and_get_user()
        return f(*args, **kwargs)
    return decorated_function


def role_required(*roles):
    """Allows the request only when the token's role is one of `roles`."""
    def decorator(f):
        @wraps(f)
        @jwt_required
        def decorated_function(*args, **kwargs):
            if g.user.get('role') not in roles:
                current_app.logger.warning(
                    f"User {g.user.get('id')} with role '{g.user.get('role')}' denied access to {request.path}"
                )
                raise AuthorizationError(f"Role {' or '.join(repr(r) for r in roles)} required.")
            return f(*args, **kwargs)
        return decorated_function
    return decorator
