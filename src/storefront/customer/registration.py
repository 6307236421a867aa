"""Customer registration: command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.customer.customer import GUEST_EMAIL, Customer
from storefront.customer.email import validate_email
from storefront.domain import storefront


@storefront.command(part_of="Customer")
class RegisterCustomer:
    """Create a customer account. The password arrives already hashed."""

    email = String(required=True, max_length=254)
    name = String(required=True, max_length=100)
    password_hash = String(required=True, max_length=255)
    phone = String(max_length=20)
    address = String(max_length=255)
    city = String(max_length=100)


@storefront.command_handler(part_of=Customer)
class RegisterCustomerHandler:
    @handle(RegisterCustomer)
    def register_customer(self, command):
        email = validate_email(command.email)
        if email == GUEST_EMAIL:
            raise ValidationError({"email": ["This email address is reserved"]})

        repo = current_domain.repository_for(Customer)
        if repo.find_by_email(email) is not None:
            raise ValidationError({"email": ["A customer with this email already exists"]})

        customer = Customer.register(
            email=email,
            name=command.name.strip(),
            password_hash=command.password_hash,
            phone=command.phone,
            address=command.address,
            city=command.city,
        )
        repo.add(customer)
        return str(customer.id)
