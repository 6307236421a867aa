"""Order placement: command and handler."""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.customer.email import validate_email
from storefront.domain import storefront
from storefront.order.order import Order, compute_total

logger = structlog.get_logger(__name__)

_ITEM_FIELDS = ("product_id", "quantity", "price")


@storefront.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, quantity, price}
    total = Integer()  # caller-declared, informational only
    shipping_fee = Integer(default=0, min_value=0)
    discount = Integer(default=0, min_value=0)
    customer_name = String(required=True, max_length=100)
    customer_email = String(max_length=254)
    customer_phone = String(max_length=20)
    shipping_address = Text()  # JSON: address dict
    payment_method = String(max_length=50)
    notes = Text()


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def validate_line_items(items) -> list[dict]:
    """Return normalised line items or raise ``ValidationError`` on ``items``."""
    if not isinstance(items, list) or not items:
        raise ValidationError({"items": ["At least one line item is required"]})

    errors = []
    cleaned = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            errors.append(f"Item {index} must be an object")
            continue
        bad = [name for name in _ITEM_FIELDS if not _is_positive_int(item.get(name))]
        if bad:
            errors.append(f"Item {index}: {', '.join(bad)} must be positive integers")
            continue
        cleaned.append({name: item[name] for name in _ITEM_FIELDS})

    if errors:
        raise ValidationError({"items": errors})
    return cleaned


def _load(value):
    return json.loads(value) if isinstance(value, str) else value


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        items = validate_line_items(_load(command.items))
        email = None
        if command.customer_email:
            validate_email(command.customer_email, field="customer_email")
            # Kept as typed; matching against accounts ignores case
            email = command.customer_email.strip()

        address = _load(command.shipping_address) or {}
        address = {key: value for key, value in address.items() if value} or None

        computed = compute_total(items)
        if command.total is not None and command.total != computed:
            logger.warning(
                "Declared order total differs from line items, using computed total",
                declared_total=command.total,
                computed_total=computed,
                customer_id=str(command.customer_id),
            )

        order = Order.place(
            customer_id=command.customer_id,
            items_data=items,
            customer_name=command.customer_name.strip(),
            customer_email=email,
            customer_phone=command.customer_phone,
            shipping_address=address,
            payment_method=command.payment_method,
            shipping_fee=command.shipping_fee,
            discount=command.discount,
            notes=command.notes,
        )
        current_domain.repository_for(Order).add(order)
        logger.info("Order placed", order_id=str(order.id), customer_id=str(order.customer_id), total=order.total)
        return str(order.id)
