"""Shared BDD fixtures and step definitions for the Customer service."""

import pytest
from customers.customer.customer import Customer
from pytest_bdd import given, parsers, then


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@given("a registered customer", target_fixture="customer")
def registered_customer():
    customer = Customer.register(
        email="bdd@example.com",
        password_hash="hashed",
        first_name="Test",
        last_name="User",
    )
    customer._events.clear()
    return customer


@then(parsers.cfparse("the customer has {count:d} address"))
@then(parsers.cfparse("the customer has {count:d} addresses"))
def customer_has_addresses(customer, count):
    assert len(customer.addresses) == count


@then(parsers.cfparse('the address in "{city}" is the default'))
def address_is_default(customer, city):
    address = next(a for a in customer.addresses if a.city == city)
    assert address.is_default is True
