"""Order queries."""

from storefront.domain import storefront
from storefront.order.order import Order


def _newest_first(orders) -> list[Order]:
    return sorted(orders, key=lambda order: order.created_at, reverse=True)


@storefront.repository(part_of=Order)
class OrderRepository:
    def owned_by(self, customer_id) -> list[Order]:
        """Orders owned by ``customer_id``, newest first."""
        return _newest_first(self._dao.query.filter(customer_id=str(customer_id)).all().items)

    def newest_first(self) -> list[Order]:
        """Every order, newest first. Admin view."""
        return _newest_first(self._dao.query.all().items)
