"""Customer profile updates: command and handler."""

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from customers.customer.customer import Customer
from customers.customer.queries import get_customer
from customers.customer.registration import parse_date_of_birth
from customers.domain import customers


@customers.command(part_of="Customer")
class UpdateCustomerProfile:
    """Replace a customer's personal details."""

    customer_id: Identifier(required=True)
    first_name: String(required=True, max_length=100)
    last_name: String(required=True, max_length=100)
    phone_number: String(max_length=20)
    date_of_birth: String(max_length=10)
    gender: String(max_length=20)
    preferences: Text()


@customers.command_handler(part_of=Customer)
class UpdateCustomerProfileHandler:
    @handle(UpdateCustomerProfile)
    def update_profile(self, command):
        customer = get_customer(command.customer_id)
        customer.update_profile(
            first_name=command.first_name,
            last_name=command.last_name,
            phone_number=command.phone_number,
            date_of_birth=parse_date_of_birth(command.date_of_birth),
            gender=command.gender,
            preferences=command.preferences,
        )
        current_domain.repository_for(Customer).add(customer)
        return str(customer.id)
