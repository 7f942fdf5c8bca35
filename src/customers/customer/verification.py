"""Email verification: command and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from customers.customer.customer import Customer
from customers.customer.queries import get_customer
from customers.domain import customers


@customers.command(part_of="Customer")
class VerifyCustomerEmail:
    """Confirm ownership of the email address with the token issued at registration."""

    customer_id: Identifier(required=True)
    token: String(required=True, max_length=64)


@customers.command_handler(part_of=Customer)
class VerifyCustomerEmailHandler:
    @handle(VerifyCustomerEmail)
    def verify_email(self, command):
        customer = get_customer(command.customer_id)
        customer.verify_email(command.token)
        current_domain.repository_for(Customer).add(customer)
