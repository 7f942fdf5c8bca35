"""Customer sign-in: credential check plus the login bookkeeping command."""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from customers.customer.customer import Customer
from customers.customer.queries import find_by_email, get_customer
from customers.domain import customers
from shared.errors import AuthenticationError
from shared.security import verify_password

logger = structlog.get_logger(__name__)

INVALID_CREDENTIALS = "Invalid email or password."
INACTIVE_ACCOUNT = "Account is inactive. Please contact support."


def authenticate(email, password) -> Customer:
    """Return the customer owning these credentials or raise ``AuthenticationError``."""
    customer = find_by_email(email)
    if customer is None or not verify_password(password or "", customer.password_hash):
        logger.info("Login rejected", email=email)
        raise AuthenticationError(INVALID_CREDENTIALS)
    if not customer.is_active:
        logger.info("Login rejected for inactive account", customer_id=str(customer.id))
        raise AuthenticationError(INACTIVE_ACCOUNT)
    return customer


@customers.command(part_of="Customer")
class RecordCustomerLogin:
    customer_id: Identifier(required=True)


@customers.command_handler(part_of=Customer)
class RecordCustomerLoginHandler:
    @handle(RecordCustomerLogin)
    def record_login(self, command):
        customer = get_customer(command.customer_id)
        customer.record_login()
        current_domain.repository_for(Customer).add(customer)
        return str(customer.id)
