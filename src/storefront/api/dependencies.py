"""FastAPI dependencies that resolve the acting identity of a request."""

from fastapi import Cookie, Depends, Header, HTTPException

from storefront.auth.errors import ForbiddenError, UnauthorizedError
from storefront.auth.session import ActorIdentity, require_admin, require_authenticated, resolve


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def optional_actor(
    authorization: str | None = Header(default=None),
    token: str | None = Cookie(default=None),
) -> ActorIdentity:
    """Resolve the caller, falling back to guest. Never rejects the request."""
    return resolve(_bearer_token(authorization) or token)


async def authenticated_actor(actor: ActorIdentity = Depends(optional_actor)) -> ActorIdentity:
    try:
        require_authenticated(actor)
    except UnauthorizedError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    return actor


async def admin_actor(actor: ActorIdentity = Depends(authenticated_actor)) -> ActorIdentity:
    try:
        require_admin(actor)
    except ForbiddenError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    return actor
