"""Application tests for profile, address, verification and account commands."""

import pytest
from customers.customer.account import ActivateCustomer, DeactivateCustomer, DeleteCustomer
from customers.customer.addresses import AddCustomerAddress, RemoveCustomerAddress, SetDefaultAddress
from customers.customer.customer import Customer
from customers.customer.profile import UpdateCustomerProfile
from customers.customer.queries import find_by_email, get_customer
from customers.customer.registration import RegisterCustomer
from customers.customer.verification import VerifyCustomerEmail
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError


@pytest.fixture()
def customer_id():
    command = RegisterCustomer(
        email="manage@example.com",
        password_hash="$2b$04$placeholderplaceholderplaceholderplaceholderpla",
        first_name="Grace",
        last_name="Hopper",
    )
    return current_domain.process(command, asynchronous=False)


def _add_address(customer_id, city="Arlington", is_default=False):
    return current_domain.process(
        AddCustomerAddress(
            customer_id=customer_id,
            address_line1="1 Navy Way",
            city=city,
            zip_code="22202",
            country="US",
            is_default=is_default,
        ),
        asynchronous=False,
    )


class TestUpdateProfile:
    def test_updates_names_and_phone(self, customer_id):
        current_domain.process(
            UpdateCustomerProfile(
                customer_id=customer_id,
                first_name="Amazing",
                last_name="Grace",
                phone_number="+1 555 0100",
                gender="Female",
            ),
            asynchronous=False,
        )
        customer = get_customer(customer_id)
        assert customer.full_name == "Amazing Grace"
        assert customer.phone_number == "+1 555 0100"
        assert customer.gender == "Female"

    def test_unknown_customer(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(
                UpdateCustomerProfile(customer_id="missing", first_name="A", last_name="B"),
                asynchronous=False,
            )


class TestAddresses:
    def test_add_address_returns_its_id(self, customer_id):
        address_id = _add_address(customer_id)
        customer = get_customer(customer_id)
        assert str(customer.addresses[0].id) == address_id
        assert customer.addresses[0].is_default is True

    def test_set_default_and_remove(self, customer_id):
        first = _add_address(customer_id)
        second = _add_address(customer_id, city="Boston")

        current_domain.process(SetDefaultAddress(customer_id=customer_id, address_id=second), asynchronous=False)
        customer = get_customer(customer_id)
        assert {str(a.id): a.is_default for a in customer.addresses} == {first: False, second: True}

        current_domain.process(RemoveCustomerAddress(customer_id=customer_id, address_id=second), asynchronous=False)
        customer = get_customer(customer_id)
        assert len(customer.addresses) == 1
        assert customer.addresses[0].is_default is True


class TestVerification:
    def test_verify_email(self, customer_id):
        token = get_customer(customer_id).email_verification_token
        current_domain.process(VerifyCustomerEmail(customer_id=customer_id, token=token), asynchronous=False)
        assert get_customer(customer_id).email_verified is True

    def test_wrong_token(self, customer_id):
        with pytest.raises(ValidationError):
            current_domain.process(VerifyCustomerEmail(customer_id=customer_id, token="nope"), asynchronous=False)


class TestAccount:
    def test_deactivate_then_activate(self, customer_id):
        current_domain.process(DeactivateCustomer(customer_id=customer_id), asynchronous=False)
        assert get_customer(customer_id).is_active is False

        current_domain.process(ActivateCustomer(customer_id=customer_id), asynchronous=False)
        assert get_customer(customer_id).is_active is True

    def test_soft_delete_hides_customer(self, customer_id):
        current_domain.process(DeleteCustomer(customer_id=customer_id), asynchronous=False)

        with pytest.raises(ObjectNotFoundError):
            get_customer(customer_id)
        assert find_by_email("manage@example.com") is None
        # Row is kept so the email stays reserved
        assert find_by_email("manage@example.com", include_deleted=True) is not None
        assert current_domain.repository_for(Customer).get(customer_id).is_deleted is True

    def test_deleting_twice_is_not_found(self, customer_id):
        current_domain.process(DeleteCustomer(customer_id=customer_id), asynchronous=False)
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(DeleteCustomer(customer_id=customer_id), asynchronous=False)
