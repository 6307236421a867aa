"""Domain events for the Customer aggregate."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Customer")
class CustomerRegistered:
    """A new customer account was created."""

    __version__ = 1

    customer_id = Identifier(required=True)
    email = String(required=True, max_length=254)
    name = String(required=True, max_length=100)
    registered_at = DateTime(required=True)


@storefront.event(part_of="Customer")
class GuestIdentityProvisioned:
    """The guest placeholder identity was created on first anonymous checkout."""

    __version__ = 1

    customer_id = Identifier(required=True)
    provisioned_at = DateTime(required=True)


@storefront.event(part_of="Customer")
class CustomerLoggedIn:
    __version__ = 1

    customer_id = Identifier(required=True)
    logged_in_at = DateTime(required=True)
