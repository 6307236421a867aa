"""Session credentials: signed JWTs carrying the actor id in the ``sub`` claim."""

import secrets
from datetime import UTC, datetime, timedelta

import jwt
import structlog

from storefront.auth.errors import InvalidCredentialError, UnauthorizedError
from storefront.config import get_settings

logger = structlog.get_logger(__name__)

ROLE_CUSTOMER = "CUSTOMER"
ROLE_ADMIN = "ADMIN"


def issue_token(subject: str, role: str = ROLE_CUSTOMER, expires_in: timedelta | None = None) -> str:
    """Mint a signed session credential for ``subject``."""
    settings = get_settings()
    now = datetime.now(UTC)
    lifetime = expires_in if expires_in is not None else settings.token_ttl
    claims = {
        "sub": str(subject),
        "role": role,
        "iat": now,
        "exp": now + lifetime,
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> dict:
    """Return the claims of a valid credential.

    Raises:
        InvalidCredentialError: bad signature, expired, malformed, or no subject.
    """
    settings = get_settings()
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.PyJWTError as exc:
        raise InvalidCredentialError(str(exc)) from exc


def authenticate_admin(username: str, password: str) -> str:
    """Exchange the configured admin credentials for an ADMIN session token."""
    settings = get_settings()
    if settings.admin_password is None:
        logger.warning("Admin login attempted but ADMIN_PASSWORD is not configured")
        raise UnauthorizedError("Invalid credentials")

    username_ok = secrets.compare_digest(username.encode("utf-8"), settings.admin_username.encode("utf-8"))
    password_ok = secrets.compare_digest(password.encode("utf-8"), settings.admin_password.encode("utf-8"))
    if not (username_ok and password_ok):
        raise UnauthorizedError("Invalid credentials")

    return issue_token(settings.admin_username, role=ROLE_ADMIN)
