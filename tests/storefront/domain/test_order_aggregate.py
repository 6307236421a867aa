"""Domain tests for the Order aggregate."""

import re

import pytest
from protean.exceptions import ValidationError

from storefront.order.events import OrderLinkedToCustomer, OrderPlaced, OrderStatusUpdated
from storefront.order.order import (
    DEFAULT_PAYMENT_METHOD,
    InvalidStatusError,
    Order,
    OrderItem,
    OrderStatus,
    ShippingAddress,
    compute_total,
    generate_order_number,
    parse_status,
)


def _place(**overrides):
    defaults = {
        "customer_id": "cust-001",
        "items_data": [
            {"product_id": 1, "quantity": 2, "price": 100},
            {"product_id": 7, "quantity": 1, "price": 350},
        ],
        "customer_name": "Nguyen Van A",
        "customer_email": "a@example.com",
    }
    defaults.update(overrides)
    return Order.place(**defaults)


class TestOrderNumber:
    def test_format(self):
        assert re.fullmatch(r"AURA-[A-Z0-9]{8}", generate_order_number())

    def test_numbers_differ(self):
        assert len({generate_order_number() for _ in range(50)}) == 50


class TestComputeTotal:
    def test_sums_price_times_quantity(self):
        assert compute_total([{"price": 100, "quantity": 2}, {"price": 5, "quantity": 3}]) == 215

    def test_empty_is_zero(self):
        assert compute_total([]) == 0


class TestParseStatus:
    @pytest.mark.parametrize("value", ["CONFIRMED", "PROCESSING", "SHIPPED", "DELIVERED", "CANCELLED"])
    def test_accepts_listed_statuses(self, value):
        assert parse_status(value) == OrderStatus(value)

    @pytest.mark.parametrize("value", ["shipped", "PENDING", "", None])
    def test_rejects_anything_else(self, value):
        with pytest.raises(InvalidStatusError) as exc:
            parse_status(value)
        assert "status" in exc.value.messages

    def test_invalid_status_is_a_validation_error(self):
        assert issubclass(InvalidStatusError, ValidationError)


class TestPlaceOrder:
    def test_order_is_confirmed(self):
        order = _place()
        assert order.status == OrderStatus.CONFIRMED.value

    def test_id_is_public_order_number(self):
        order = _place()
        assert re.fullmatch(r"AURA-[A-Z0-9]{8}", str(order.id))

    def test_total_is_sum_of_line_items(self):
        order = _place()
        assert order.total == 2 * 100 + 1 * 350

    def test_line_items_are_snapshotted(self):
        order = _place()
        assert len(order.items) == 2
        assert {(i.product_id, i.quantity, i.price) for i in order.items} == {(1, 2, 100), (7, 1, 350)}

    def test_owner_is_recorded(self):
        order = _place(customer_id="guest")
        assert order.customer_id == "guest"

    def test_timestamps_set(self):
        order = _place()
        assert order.created_at is not None
        assert order.updated_at == order.created_at

    def test_defaults(self):
        order = _place()
        assert order.payment_method == DEFAULT_PAYMENT_METHOD
        assert order.shipping_fee == 0
        assert order.discount == 0
        assert order.tracking_number is None
        assert order.shipping_address is None

    def test_checkout_snapshot(self):
        order = _place(
            customer_phone="0901234567",
            shipping_address={"street": "12 Le Loi", "district": "District 1", "city": "Ho Chi Minh City"},
            payment_method="BANK_TRANSFER",
            shipping_fee=30,
            discount=10,
            notes="Leave at the door",
        )
        assert order.customer_name == "Nguyen Van A"
        assert order.customer_email == "a@example.com"
        assert order.customer_phone == "0901234567"
        assert order.shipping_address.street == "12 Le Loi"
        assert order.shipping_address.ward is None
        assert order.shipping_address.city == "Ho Chi Minh City"
        assert order.payment_method == "BANK_TRANSFER"
        assert order.shipping_fee == 30
        assert order.discount == 10
        assert order.notes == "Leave at the door"

    def test_shipping_fee_and_discount_do_not_change_total(self):
        order = _place(shipping_fee=30, discount=10)
        assert order.total == 550

    def test_raises_order_placed(self):
        order = _place()
        assert len(order._events) == 1
        event = order._events[0]
        assert isinstance(event, OrderPlaced)
        assert event.order_id == str(order.id)
        assert event.customer_id == "cust-001"
        assert event.item_count == 2
        assert event.total == 550


class TestOrderItem:
    @pytest.mark.parametrize("field", ["product_id", "quantity", "price"])
    def test_values_must_be_positive(self, field):
        values = {"product_id": 1, "quantity": 1, "price": 1}
        values[field] = 0
        with pytest.raises(ValidationError) as exc:
            OrderItem(**values)
        assert field in exc.value.messages


class TestShippingAddress:
    def test_fields(self):
        address = ShippingAddress(street="1 A St", ward="W1", district="D1", city="Hanoi", country="Vietnam")
        assert address.ward == "W1"
        assert address.country == "Vietnam"


class TestUpdateStatus:
    def test_sets_status_and_tracking(self):
        order = _place()
        order._events.clear()

        order.update_status("SHIPPED", tracking_number="VN123")

        assert order.status == "SHIPPED"
        assert order.tracking_number == "VN123"

    def test_accepts_enum_member(self):
        order = _place()
        order.update_status(OrderStatus.PROCESSING)
        assert order.status == "PROCESSING"

    def test_omitted_tracking_and_notes_are_cleared(self):
        order = _place()
        order.update_status("SHIPPED", tracking_number="VN123", notes="Handed to carrier")
        order.update_status("DELIVERED")

        assert order.tracking_number is None
        assert order.notes is None

    def test_terminal_statuses_are_not_enforced(self):
        order = _place()
        order.update_status("CANCELLED")
        order.update_status("PROCESSING")
        assert order.status == "PROCESSING"

    def test_raises_status_updated(self):
        order = _place()
        order._events.clear()

        order.update_status("SHIPPED", tracking_number="VN123")

        assert len(order._events) == 1
        event = order._events[0]
        assert isinstance(event, OrderStatusUpdated)
        assert event.previous_status == "CONFIRMED"
        assert event.new_status == "SHIPPED"
        assert event.tracking_number == "VN123"

    def test_invalid_status_leaves_order_unchanged(self):
        order = _place()
        order.update_status("SHIPPED", tracking_number="VN123")
        order._events.clear()

        with pytest.raises(InvalidStatusError):
            order.update_status("LOST", tracking_number="XX999")

        assert order.status == "SHIPPED"
        assert order.tracking_number == "VN123"
        assert order._events == []


class TestReassignOwner:
    def test_changes_owner(self):
        order = _place(customer_id="guest")
        order._events.clear()

        order.reassign_owner("cust-123")

        assert order.customer_id == "cust-123"
        assert len(order._events) == 1
        event = order._events[0]
        assert isinstance(event, OrderLinkedToCustomer)
        assert event.previous_customer_id == "guest"
        assert event.customer_id == "cust-123"
