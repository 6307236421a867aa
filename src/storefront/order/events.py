"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A checkout produced a confirmed order."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    customer_email = String()
    item_count = Integer(required=True)
    total = Integer(required=True)
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusUpdated:
    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    tracking_number = String()
    updated_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderLinkedToCustomer:
    """A guest order was re-attributed to the customer whose email it carries."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_customer_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    linked_at = DateTime(required=True)
