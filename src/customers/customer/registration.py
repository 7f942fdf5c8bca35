"""Customer registration: command and handler."""

from datetime import date

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from customers.customer.customer import Customer
from customers.customer.queries import find_by_email
from customers.domain import customers
from shared.errors import DuplicateEntityError

logger = structlog.get_logger(__name__)


def parse_date_of_birth(value):
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise ValidationError({"date_of_birth": ["Date of birth must be an ISO date (YYYY-MM-DD)"]}) from exc


@customers.command(part_of="Customer")
class RegisterCustomer:
    """Create a customer account.

    Carries the bcrypt hash, never the plain password, so nothing sensitive
    reaches the command stream.
    """

    email: String(required=True, max_length=255)
    password_hash: String(required=True, max_length=255)
    first_name: String(required=True, max_length=100)
    last_name: String(required=True, max_length=100)
    phone_number: String(max_length=20)
    date_of_birth: String(max_length=10)
    gender: String(max_length=20)


@customers.command_handler(part_of=Customer)
class RegisterCustomerHandler:
    @handle(RegisterCustomer)
    def register_customer(self, command):
        # Soft-deleted accounts keep their email reserved
        if find_by_email(command.email, include_deleted=True) is not None:
            raise DuplicateEntityError(f"Customer with email {command.email} already exists")

        customer = Customer.register(
            email=command.email,
            password_hash=command.password_hash,
            first_name=command.first_name,
            last_name=command.last_name,
            phone_number=command.phone_number,
            date_of_birth=parse_date_of_birth(command.date_of_birth),
            gender=command.gender,
        )
        current_domain.repository_for(Customer).add(customer)

        logger.info("Customer registered", customer_id=str(customer.id), email=customer.email)
        return str(customer.id)
