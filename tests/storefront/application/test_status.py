"""Application tests for admin status updates."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError

from storefront.order.order import InvalidStatusError, Order
from storefront.order.status import UpdateOrderStatus


@pytest.fixture()
def order_id():
    order = Order.place(
        customer_id="cust-001",
        items_data=[{"product_id": 1, "quantity": 2, "price": 100}],
        customer_name="Nguyen Van A",
    )
    current_domain.repository_for(Order).add(order)
    return str(order.id)


def _update(order_id, status, **kwargs):
    return current_domain.process(UpdateOrderStatus(order_id=order_id, status=status, **kwargs), asynchronous=False)


class TestUpdateOrderStatusFlow:
    def test_ship_with_tracking_number(self, order_id):
        _update(order_id, "SHIPPED", tracking_number="VN123")

        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == "SHIPPED"
        assert order.tracking_number == "VN123"

    def test_notes_overwritten_and_cleared(self, order_id):
        _update(order_id, "PROCESSING", notes="Packing")
        assert current_domain.repository_for(Order).get(order_id).notes == "Packing"

        _update(order_id, "SHIPPED")
        order = current_domain.repository_for(Order).get(order_id)
        assert order.notes is None
        assert order.tracking_number is None

    def test_any_status_may_follow_any_other(self, order_id):
        _update(order_id, "DELIVERED")
        _update(order_id, "CONFIRMED")
        assert current_domain.repository_for(Order).get(order_id).status == "CONFIRMED"

    def test_invalid_status_leaves_order_unchanged(self, order_id):
        _update(order_id, "SHIPPED", tracking_number="VN123")

        with pytest.raises(InvalidStatusError):
            _update(order_id, "RETURNED", tracking_number="XX1")

        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == "SHIPPED"
        assert order.tracking_number == "VN123"

    def test_invalid_status_checked_before_lookup(self):
        with pytest.raises(InvalidStatusError):
            _update("AURA-MISSING0", "LOST")

    def test_unknown_order(self):
        with pytest.raises(ObjectNotFoundError):
            _update("AURA-MISSING0", "SHIPPED")
