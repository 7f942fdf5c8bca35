"""Address book management: commands and handler."""

from protean import handle
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from customers.customer.customer import AddressType, Customer
from customers.customer.queries import get_customer
from customers.domain import customers


@customers.command(part_of="Customer")
class AddCustomerAddress:
    customer_id: Identifier(required=True)
    address_type: String(max_length=20, default=AddressType.BOTH.value)
    address_line1: String(required=True, max_length=255)
    address_line2: String(max_length=255)
    city: String(required=True, max_length=100)
    state: String(max_length=100)
    zip_code: String(required=True, max_length=20)
    country: String(required=True, max_length=100)
    is_default: Boolean(default=False)
    delivery_instructions: String(max_length=500)


@customers.command(part_of="Customer")
class RemoveCustomerAddress:
    customer_id: Identifier(required=True)
    address_id: Identifier(required=True)


@customers.command(part_of="Customer")
class SetDefaultAddress:
    customer_id: Identifier(required=True)
    address_id: Identifier(required=True)


@customers.command_handler(part_of=Customer)
class ManageAddressesHandler:
    @handle(AddCustomerAddress)
    def add_address(self, command):
        customer = get_customer(command.customer_id)
        address = customer.add_address(
            address_type=command.address_type or AddressType.BOTH.value,
            address_line1=command.address_line1,
            address_line2=command.address_line2,
            city=command.city,
            state=command.state,
            zip_code=command.zip_code,
            country=command.country,
            is_default=command.is_default,
            delivery_instructions=command.delivery_instructions,
        )
        current_domain.repository_for(Customer).add(customer)
        return str(address.id)

    @handle(RemoveCustomerAddress)
    def remove_address(self, command):
        customer = get_customer(command.customer_id)
        customer.remove_address(command.address_id)
        current_domain.repository_for(Customer).add(customer)

    @handle(SetDefaultAddress)
    def set_default_address(self, command):
        customer = get_customer(command.customer_id)
        customer.set_default_address(command.address_id)
        current_domain.repository_for(Customer).add(customer)
