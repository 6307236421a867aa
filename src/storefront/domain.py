"""Storefront domain: customers, guest checkout, and the order ledger.

Handles customer registration and sign-in, the guest placeholder identity
used for anonymous checkouts, order placement and status tracking, and
linking guest-placed orders to a customer account.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

storefront = Domain(name="storefront")
