"""Customer aggregate, including the guest placeholder identity.

All anonymous checkouts are attributed to one well-known Customer row, the
guest placeholder. It has a fixed id and sentinel contact values, is created
lazily on the first anonymous order, and is never deleted.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, String

from storefront.customer.events import CustomerLoggedIn, CustomerRegistered, GuestIdentityProvisioned
from storefront.domain import storefront

GUEST_CUSTOMER_ID = "guest"
GUEST_EMAIL = "guest@guest.local"
GUEST_NAME = "Guest"
# Not a valid bcrypt hash, so no password ever matches it
GUEST_PASSWORD_PLACEHOLDER = "!"


@storefront.aggregate
class Customer:
    """A person who can sign in and own orders.

    The email is stored in normalised (lower-case) form so that uniqueness and
    matching are case-insensitive.
    """

    email = String(required=True, max_length=254, unique=True)
    name = String(required=True, max_length=100)
    password_hash = String(max_length=255)
    phone = String(max_length=20)
    address = String(max_length=255)
    city = String(max_length=100)
    registered_at = DateTime()
    last_login_at = DateTime()

    @property
    def is_guest_placeholder(self) -> bool:
        return str(self.id) == GUEST_CUSTOMER_ID

    @classmethod
    def register(cls, email, name, password_hash, phone=None, address=None, city=None):
        now = datetime.now(UTC)
        customer = cls(
            email=email,
            name=name,
            password_hash=password_hash,
            phone=phone,
            address=address,
            city=city,
            registered_at=now,
        )
        customer.raise_(
            CustomerRegistered(
                customer_id=str(customer.id),
                email=email,
                name=name,
                registered_at=now,
            )
        )
        return customer

    @classmethod
    def provision_guest(cls):
        now = datetime.now(UTC)
        guest = cls(
            id=GUEST_CUSTOMER_ID,
            email=GUEST_EMAIL,
            name=GUEST_NAME,
            password_hash=GUEST_PASSWORD_PLACEHOLDER,
            registered_at=now,
        )
        guest.raise_(
            GuestIdentityProvisioned(
                customer_id=GUEST_CUSTOMER_ID,
                provisioned_at=now,
            )
        )
        return guest

    def record_login(self):
        now = datetime.now(UTC)
        self.last_login_at = now
        self.raise_(
            CustomerLoggedIn(
                customer_id=str(self.id),
                logged_in_at=now,
            )
        )
