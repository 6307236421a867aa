"""Order aggregate: the authoritative record of a placed order.

Status model:
    CONFIRMED, PROCESSING, SHIPPED, DELIVERED, CANCELLED

Any listed status may follow any other. CANCELLED and DELIVERED are terminal
in practice but no transition graph is enforced.
"""

import secrets
import string
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String, Text, ValueObject

from storefront.domain import storefront
from storefront.order.events import OrderLinkedToCustomer, OrderPlaced, OrderStatusUpdated

ORDER_NUMBER_PREFIX = "AURA-"
_ORDER_NUMBER_ALPHABET = string.ascii_uppercase + string.digits
_ORDER_NUMBER_LENGTH = 8

DEFAULT_PAYMENT_METHOD = "COD"


class OrderStatus(Enum):
    CONFIRMED = "CONFIRMED"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class InvalidStatusError(ValidationError):
    """Raised when a status value is not one of ``OrderStatus``."""


def parse_status(value) -> OrderStatus:
    try:
        return OrderStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise InvalidStatusError({"status": [f"Invalid status {value!r}, expected one of {allowed}"]}) from None


def generate_order_number() -> str:
    """Opaque public order id, also used as the tracking reference."""
    suffix = "".join(secrets.choice(_ORDER_NUMBER_ALPHABET) for _ in range(_ORDER_NUMBER_LENGTH))
    return f"{ORDER_NUMBER_PREFIX}{suffix}"


def compute_total(items) -> int:
    """Sum of ``price * quantity`` over line item dicts."""
    return sum(item["price"] * item["quantity"] for item in items)


@storefront.value_object(part_of="Order")
class ShippingAddress:
    """Delivery address as typed at checkout. Not updated if the customer moves."""

    street = String(max_length=255)
    ward = String(max_length=100)
    district = String(max_length=100)
    city = String(max_length=100)
    country = String(max_length=100)


@storefront.entity(part_of="Order")
class OrderItem:
    """A line item. ``price`` is the unit price snapshot taken at checkout."""

    product_id = Integer(required=True, min_value=1)
    quantity = Integer(required=True, min_value=1)
    price = Integer(required=True, min_value=1)


@storefront.aggregate
class Order:
    customer_id = Identifier(required=True)
    items = HasMany(OrderItem)
    total = Integer(required=True, min_value=0)
    shipping_fee = Integer(default=0, min_value=0)
    discount = Integer(default=0, min_value=0)
    status = String(
        max_length=20,
        choices=OrderStatus,
        default=OrderStatus.CONFIRMED.value,
    )
    tracking_number = String(max_length=255)
    notes = Text()

    # Checkout snapshot
    customer_name = String(required=True, max_length=100)
    customer_email = String(max_length=254)
    customer_phone = String(max_length=20)
    shipping_address = ValueObject(ShippingAddress)
    payment_method = String(max_length=50, default=DEFAULT_PAYMENT_METHOD)

    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def place(
        cls,
        customer_id,
        items_data,
        customer_name,
        customer_email=None,
        customer_phone=None,
        shipping_address=None,
        payment_method=None,
        shipping_fee=0,
        discount=0,
        notes=None,
    ):
        """Create a CONFIRMED order owned by ``customer_id``.

        Args:
            customer_id: Owning identity, a real customer or the guest placeholder.
            items_data: List of dicts with product_id, quantity, price. Already validated.
            shipping_address: Dict with street, ward, district, city, country, or None.
        """
        now = datetime.now(UTC)
        total = compute_total(items_data)

        order = cls(
            id=generate_order_number(),
            customer_id=str(customer_id),
            items=[
                OrderItem(product_id=item["product_id"], quantity=item["quantity"], price=item["price"])
                for item in items_data
            ],
            total=total,
            shipping_fee=shipping_fee or 0,
            discount=discount or 0,
            status=OrderStatus.CONFIRMED.value,
            notes=notes,
            customer_name=customer_name,
            customer_email=customer_email,
            customer_phone=customer_phone,
            shipping_address=ShippingAddress(**shipping_address) if shipping_address else None,
            payment_method=payment_method or DEFAULT_PAYMENT_METHOD,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                customer_email=customer_email,
                item_count=len(items_data),
                total=total,
                placed_at=now,
            )
        )
        return order

    def update_status(self, status, tracking_number=None, notes=None):
        """Set a new status. Tracking number and notes are overwritten, ``None`` clears them."""
        new_status = parse_status(status.value if isinstance(status, OrderStatus) else status)
        previous = self.status
        now = datetime.now(UTC)

        self.status = new_status.value
        self.tracking_number = tracking_number
        self.notes = notes
        self.updated_at = now

        self.raise_(
            OrderStatusUpdated(
                order_id=str(self.id),
                previous_status=previous,
                new_status=new_status.value,
                tracking_number=tracking_number,
                updated_at=now,
            )
        )

    def reassign_owner(self, customer_id):
        previous = self.customer_id
        now = datetime.now(UTC)

        self.customer_id = str(customer_id)
        self.updated_at = now

        self.raise_(
            OrderLinkedToCustomer(
                order_id=str(self.id),
                previous_customer_id=str(previous),
                customer_id=str(customer_id),
                linked_at=now,
            )
        )
