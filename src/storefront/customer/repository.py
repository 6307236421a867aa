"""Repository for the Customer aggregate."""

from storefront.customer.customer import Customer
from storefront.customer.email import normalize_email
from storefront.domain import storefront


@storefront.repository(part_of=Customer)
class CustomerRepository:
    def find_by_email(self, email: str) -> Customer | None:
        """Find a customer by email, ignoring case."""
        normalized = normalize_email(email)
        if not normalized:
            return None
        matches = self._dao.query.filter(email=normalized).all().items
        return matches[0] if matches else None
