"""Domain events for the Customer aggregate."""

from protean.fields import Boolean, DateTime, Identifier, String

from customers.domain import customers


@customers.event(part_of="Customer")
class CustomerRegistered:
    """A new customer account was created."""

    __version__ = 1

    customer_id: Identifier(required=True)
    email: String(required=True)
    full_name: String(required=True)
    registered_at: DateTime(required=True)


@customers.event(part_of="Customer")
class CustomerLoggedIn:
    """A customer signed in with valid credentials."""

    __version__ = 1

    customer_id: Identifier(required=True)
    logged_in_at: DateTime(required=True)


@customers.event(part_of="Customer")
class ProfileUpdated:
    __version__ = 1

    customer_id: Identifier(required=True)
    first_name: String(required=True)
    last_name: String(required=True)
    phone_number: String()
    date_of_birth: String()


@customers.event(part_of="Customer")
class AddressAdded:
    __version__ = 1

    customer_id: Identifier(required=True)
    address_id: Identifier(required=True)
    address_type: String(required=True)
    city: String(required=True)
    country: String(required=True)
    is_default: Boolean(default=False)


@customers.event(part_of="Customer")
class AddressRemoved:
    __version__ = 1

    customer_id: Identifier(required=True)
    address_id: Identifier(required=True)


@customers.event(part_of="Customer")
class DefaultAddressChanged:
    """A different address became the customer's default."""

    __version__ = 1

    customer_id: Identifier(required=True)
    address_id: Identifier(required=True)
    previous_default_address_id: Identifier()


@customers.event(part_of="Customer")
class EmailVerified:
    __version__ = 1

    customer_id: Identifier(required=True)
    email: String(required=True)
    verified_at: DateTime(required=True)


@customers.event(part_of="Customer")
class CustomerDeactivated:
    __version__ = 1

    customer_id: Identifier(required=True)
    deactivated_at: DateTime(required=True)


@customers.event(part_of="Customer")
class CustomerActivated:
    __version__ = 1

    customer_id: Identifier(required=True)
    activated_at: DateTime(required=True)


@customers.event(part_of="Customer")
class CustomerDeleted:
    """A customer account was soft deleted."""

    __version__ = 1

    customer_id: Identifier(required=True)
    email: String(required=True)
    deleted_at: DateTime(required=True)
