"""Customer sign-in with email and password."""

import structlog
from protean.utils.globals import current_domain

from storefront.auth.errors import UnauthorizedError
from storefront.auth.passwords import verify_password
from storefront.customer.customer import Customer

logger = structlog.get_logger(__name__)


def authenticate_customer(email: str, password: str) -> Customer:
    """Verify credentials and record the login.

    Raises:
        UnauthorizedError: unknown email, the guest placeholder, or a wrong password.
    """
    repo = current_domain.repository_for(Customer)
    customer = repo.find_by_email(email)

    if customer is None or customer.is_guest_placeholder:
        raise UnauthorizedError("Invalid credentials")
    if not verify_password(password, customer.password_hash):
        logger.info("Rejected login with wrong password", customer_id=str(customer.id))
        raise UnauthorizedError("Invalid credentials")

    customer.record_login()
    repo.add(customer)
    return customer
