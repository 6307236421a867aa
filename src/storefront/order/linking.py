"""Account linking: hand guest orders over to the customer who placed them.

A guest order is matched by the email typed at checkout, compared
case-insensitively with the customer's current email. Matched orders are
no longer owned by the guest placeholder, so repeated runs relink nothing.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.auth.session import ActorIdentity, require_authenticated
from storefront.customer.customer import GUEST_CUSTOMER_ID, Customer
from storefront.customer.email import normalize_email
from storefront.domain import storefront
from storefront.order.order import Order

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class LinkGuestOrders:
    customer_id = Identifier(required=True)


@storefront.command_handler(part_of=Order)
class LinkGuestOrdersHandler:
    @handle(LinkGuestOrders)
    def link_guest_orders(self, command):
        try:
            customer = current_domain.repository_for(Customer).get(command.customer_id)
        except ObjectNotFoundError:
            logger.info("Skipping guest order linking for unknown customer", customer_id=str(command.customer_id))
            return 0

        if customer.is_guest_placeholder:
            return 0

        email = normalize_email(customer.email)
        repo = current_domain.repository_for(Order)
        linked = 0
        for order in repo.owned_by(GUEST_CUSTOMER_ID):
            if not order.customer_email or normalize_email(order.customer_email) != email:
                continue
            order.reassign_owner(customer.id)
            repo.add(order)
            linked += 1

        if linked:
            logger.info("Linked guest orders to customer", customer_id=str(customer.id), linked=linked)
        return linked


def link_guest_orders_for(actor: ActorIdentity) -> int:
    """Run the linker for an authenticated actor. Guests get ``UnauthorizedError``."""
    customer_id = require_authenticated(actor)
    return current_domain.process(LinkGuestOrders(customer_id=customer_id), asynchronous=False)
