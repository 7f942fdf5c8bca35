"""Customer account lifecycle: activation, deactivation and soft delete."""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from customers.customer.customer import Customer
from customers.customer.queries import get_customer
from customers.domain import customers

logger = structlog.get_logger(__name__)


@customers.command(part_of="Customer")
class DeactivateCustomer:
    """Block sign-in without removing the account."""

    customer_id: Identifier(required=True)


@customers.command(part_of="Customer")
class ActivateCustomer:
    customer_id: Identifier(required=True)


@customers.command(part_of="Customer")
class DeleteCustomer:
    """Soft delete a customer account."""

    customer_id: Identifier(required=True)


@customers.command_handler(part_of=Customer)
class ManageAccountHandler:
    @handle(DeactivateCustomer)
    def deactivate(self, command):
        repo = current_domain.repository_for(Customer)
        customer = get_customer(command.customer_id)
        customer.deactivate()
        repo.add(customer)

    @handle(ActivateCustomer)
    def activate(self, command):
        repo = current_domain.repository_for(Customer)
        customer = get_customer(command.customer_id)
        customer.activate()
        repo.add(customer)

    @handle(DeleteCustomer)
    def delete(self, command):
        repo = current_domain.repository_for(Customer)
        customer = get_customer(command.customer_id)
        customer.soft_delete()
        repo.add(customer)
        logger.info("Customer deleted", customer_id=str(customer.id))
