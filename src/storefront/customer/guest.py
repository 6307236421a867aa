"""Lazy, idempotent provisioning of the guest placeholder identity."""

import structlog
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain
from sqlalchemy.exc import DBAPIError

from storefront.customer.customer import GUEST_CUSTOMER_ID, Customer

logger = structlog.get_logger(__name__)

# Errors raised to the insert that loses a concurrent first use
_LOST_RACE_ERRORS = (ValidationError, ExpectedVersionError, DBAPIError)


def _read_placeholder(repo) -> str:
    try:
        return str(repo.get(GUEST_CUSTOMER_ID).id)
    except ObjectNotFoundError:
        # The winning insert may not be visible on the first read
        return str(repo.get(GUEST_CUSTOMER_ID).id)


def ensure_guest_identity() -> str:
    """Return the guest placeholder id, creating the record if it does not exist yet.

    Concurrent first use is settled by the store: the placeholder has a fixed
    id, a unique sentinel email and its own event stream, so only one insert
    can win. A caller whose insert is rejected reads back the record the
    winner created.
    """
    repo = current_domain.repository_for(Customer)
    try:
        return str(repo.get(GUEST_CUSTOMER_ID).id)
    except ObjectNotFoundError:
        pass

    try:
        repo.add(Customer.provision_guest())
        logger.info("Provisioned guest placeholder identity", customer_id=GUEST_CUSTOMER_ID)
    except _LOST_RACE_ERRORS as exc:
        logger.info(
            "Guest placeholder already created by a concurrent checkout",
            customer_id=GUEST_CUSTOMER_ID,
            error=type(exc).__name__,
        )

    return _read_placeholder(repo)
