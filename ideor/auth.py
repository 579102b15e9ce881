# Firebase ID token verification for API routes
# The verified uid is the owner key of every project, task and evaluation

import logging
from dataclasses import dataclass
from typing import Optional

import firebase_admin
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from firebase_admin import auth, credentials
from google.auth.exceptions import DefaultCredentialsError

from ideor.errors import AuthenticationError, AuthUnavailableError

logger = logging.getLogger(__name__)

_firebase_app = None

# Missing headers are rejected in require_auth
bearer_scheme = HTTPBearer(auto_error=False)

_TOKEN_ERRORS = (
    ValueError,
    auth.InvalidIdTokenError,
    auth.ExpiredIdTokenError,
    auth.RevokedIdTokenError,
    auth.CertificateFetchError,
)


def get_firebase_app():
    """Reuse the default Firebase app, creating it from Application Default Credentials once."""
    global _firebase_app
    if _firebase_app is not None:
        return _firebase_app
    try:
        _firebase_app = firebase_admin.get_app()
    except ValueError:
        try:
            _firebase_app = firebase_admin.initialize_app(credentials.ApplicationDefault())
        except (ValueError, DefaultCredentialsError) as e:
            logger.error(f"Firebase Admin SDK initialization failed: {e}")
            raise AuthUnavailableError(str(e)) from e
    return _firebase_app


@dataclass(frozen=True)
class UserInfo:
    uid: str
    email: Optional[str] = None
    display_name: Optional[str] = None


def verify_token(id_token: str) -> Optional[UserInfo]:
    """Decode a Firebase ID token; None when it is invalid, expired or revoked.

    Raises AuthUnavailableError when the Admin SDK cannot start.
    """
    get_firebase_app()
    try:
        claims = auth.verify_id_token(id_token)
    except _TOKEN_ERRORS as e:
        logger.info(f"Rejected bearer token: {e}")
        return None

    uid = claims.get("uid")
    if not uid:
        return None
    return UserInfo(uid=uid, email=claims.get("email"), display_name=claims.get("name"))


async def require_auth(
    bearer: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> UserInfo:
    """Route dependency yielding the caller; 401 without a valid bearer token."""
    if bearer is None or not bearer.credentials:
        raise AuthenticationError("Authentication required")

    user = verify_token(bearer.credentials)
    if user is None:
        raise AuthenticationError("Invalid or expired token")
    return user
