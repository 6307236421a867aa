"""Identity resolution: who is acting on this request.

Every request resolves to exactly one ``ActorIdentity``. A missing or invalid
credential never fails the request on its own; it resolves to the guest
actor. Operations that need a real customer call ``require_authenticated``.
"""

from dataclasses import dataclass

import structlog

from storefront.auth.credentials import ROLE_ADMIN, ROLE_CUSTOMER, verify_token
from storefront.auth.errors import ForbiddenError, InvalidCredentialError, UnauthorizedError
from storefront.customer.guest import ensure_guest_identity

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ActorIdentity:
    customer_id: str | None = None
    role: str | None = None

    @classmethod
    def guest(cls) -> "ActorIdentity":
        return cls()

    @classmethod
    def authenticated(cls, customer_id: str, role: str = ROLE_CUSTOMER) -> "ActorIdentity":
        return cls(customer_id=str(customer_id), role=role)

    @property
    def is_authenticated(self) -> bool:
        return self.customer_id is not None

    @property
    def is_admin(self) -> bool:
        return self.is_authenticated and self.role == ROLE_ADMIN


def resolve(session_credential: str | None) -> ActorIdentity:
    """Resolve an optional session credential to an actor. Never raises."""
    if not session_credential:
        return ActorIdentity.guest()

    try:
        claims = verify_token(session_credential)
    except InvalidCredentialError as exc:
        logger.info("Session credential rejected, continuing as guest", reason=str(exc))
        return ActorIdentity.guest()

    subject = claims.get("sub")
    if not subject:
        return ActorIdentity.guest()
    return ActorIdentity.authenticated(subject, role=claims.get("role") or ROLE_CUSTOMER)


def require_authenticated(actor: ActorIdentity) -> str:
    """Return the actor's customer id, or raise ``UnauthorizedError`` for guests."""
    if not actor.is_authenticated:
        raise UnauthorizedError("Unauthorized")
    return actor.customer_id


def require_admin(actor: ActorIdentity) -> str:
    customer_id = require_authenticated(actor)
    if not actor.is_admin:
        raise ForbiddenError("Admin role required")
    return customer_id


def attribute_owner(actor: ActorIdentity) -> str:
    """Customer id that should own an order placed by ``actor``.

    Guests are attributed to the guest placeholder identity, which is
    provisioned on first use. Admins are not customers and check out as guests.
    """
    if actor.is_authenticated and not actor.is_admin:
        return actor.customer_id

    return ensure_guest_identity()
