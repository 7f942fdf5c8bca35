"""BDD tests for customer accounts."""

from customers.customer.customer import Customer
from customers.customer.events import CustomerRegistered
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/customer_accounts.feature")


def _add(customer, city):
    return customer.add_address(address_line1="1 Main St", city=city, zip_code="00001", country="US")


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('the customer has addresses in "{first}" and "{second}"'))
def customer_has_two_addresses(customer, first, second):
    _add(customer, first)
    _add(customer, second)


@given("the customer is deactivated")
def customer_is_deactivated(customer):
    customer.deactivate()


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(
    parsers.cfparse('a customer registers with email "{email}" and name "{first}" "{last}"'),
    target_fixture="customer",
)
def register_customer(email, first, last, error):
    try:
        return Customer.register(email=email, password_hash="hashed", first_name=first, last_name=last)
    except ValidationError as exc:
        error["exc"] = exc
        return None


@when(parsers.cfparse('the customer adds an address in "{city}"'))
def add_address(customer, city):
    _add(customer, city)


@when(parsers.cfparse('the customer removes the address in "{city}"'))
def remove_address(customer, city):
    address = next(a for a in customer.addresses if a.city == city)
    customer.remove_address(address.id)


@when("the customer is deactivated again")
def deactivate_again(customer, error):
    try:
        customer.deactivate()
    except ValidationError as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the registration succeeds")
def registration_succeeds(customer, error):
    assert error["exc"] is None
    assert customer is not None


@then(parsers.cfparse('the customer email is "{email}"'))
def customer_email_is(customer, email):
    assert customer.email == email


@then("a CustomerRegistered event is raised")
def registered_event_raised(customer):
    assert any(isinstance(e, CustomerRegistered) for e in customer._events)


@then("the registration fails with a validation error")
@then("the operation fails with a validation error")
def fails_with_validation_error(error):
    assert isinstance(error["exc"], ValidationError)
