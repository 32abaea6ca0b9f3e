# prayertools/services/auth_service.py

import datetime
from collections import namedtuple

import jwt
from werkzeug.security import check_password_hash

from ..errors import AuthenticationError
from ..utils.time_utils import parse_duration

JWT_ALGORITHM = "HS256"

# A staff account allowed to log in. The list of these comes from app config
# and never changes while the process runs.
Credential = namedtuple('Credential', ['id', 'email', 'password_hash', 'role', 'name'])


def public_user_summary(credential):
    """Everything about a credential that may leave the server."""
    return {
        "id": credential.id,
        "email": credential.email,
        "role": credential.role,
        "name": credential.name,
    }


def find_credential(credentials, email):
    """Exact, case-sensitive email match. Returns None when nothing matches."""
    for credential in credentials:
        if credential.email == email:
            return credential
    return None


def create_access_token(credential, secret, expires_in='7d', now=None):
    """
    Signs a token carrying the credential's id, email and role.

    Args:
        credential (Credential): The authenticated account.
        secret (str): HS256 signing secret.
        expires_in (str | int | timedelta): Lifetime, e.g. "7d" or 3600.
        now (datetime, optional): Issue time, defaults to the current UTC time.

    Returns:
        str: The encoded JWT.
    """
    issued_at = now or datetime.datetime.now(datetime.timezone.utc)
    payload = {
        "id": credential.id,
        "email": credential.email,
        "role": credential.role,
        "iat": issued_at,
        "exp": issued_at + parse_duration(expires_in),
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def decode_access_token(token, secret):
    """
    Verifies a token issued by create_access_token and returns its payload.
    Raises AuthenticationError for expired, tampered or malformed tokens.
    """
    try:
        return jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired!")
    except jwt.InvalidTokenError:
        raise AuthenticationError("Invalid authentication token!")


def login(email, password, credentials, secret, expires_in='7d'):
    """
    Checks an email/password pair against the configured credentials.

    An unknown email and a wrong password raise the same AuthenticationError,
    so callers cannot tell which accounts exist.

    Returns:
        tuple: (token, public user summary dict)
    """
    credential = find_credential(credentials, email)
    if credential is None:
        raise AuthenticationError()

    if not check_password_hash(credential.password_hash, password):
        raise AuthenticationError()

    token = create_access_token(credential, secret, expires_in)
    return token, public_user_summary(credential)
