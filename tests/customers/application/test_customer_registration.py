"""Application tests for customer registration and sign-in via domain.process()."""

import pytest
from customers.customer.authentication import (
    INACTIVE_ACCOUNT,
    INVALID_CREDENTIALS,
    RecordCustomerLogin,
    authenticate,
)
from customers.customer.customer import Customer
from customers.customer.registration import RegisterCustomer
from protean import current_domain
from protean.exceptions import ValidationError
from shared.errors import AuthenticationError, DuplicateEntityError
from shared.security import hash_password


def _register(email="john@example.com", password="Str0ng!Pass", **overrides):
    fields = {
        "email": email,
        "password_hash": hash_password(password),
        "first_name": "John",
        "last_name": "Doe",
    }
    fields.update(overrides)
    return current_domain.process(RegisterCustomer(**fields), asynchronous=False)


class TestRegisterCustomer:
    def test_happy_path(self):
        customer_id = _register()
        customer = current_domain.repository_for(Customer).get(customer_id)
        assert customer.email == "john@example.com"
        assert customer.full_name == "John Doe"

    def test_date_of_birth_is_parsed(self):
        customer_id = _register(date_of_birth="1990-05-15")
        customer = current_domain.repository_for(Customer).get(customer_id)
        assert str(customer.date_of_birth) == "1990-05-15"

    def test_malformed_date_of_birth(self):
        with pytest.raises(ValidationError):
            _register(date_of_birth="15/05/1990")

    def test_duplicate_email_is_rejected_case_insensitively(self):
        _register(email="dup@example.com")
        with pytest.raises(DuplicateEntityError):
            _register(email="DUP@example.com")

    def test_stores_registration_event(self):
        _register()
        messages = current_domain.event_store.store.read("customers::customer")
        registered = [
            m
            for m in messages
            if m.metadata and m.metadata.headers and m.metadata.headers.type == "Customers.CustomerRegistered.v1"
        ]
        assert len(registered) == 1


class TestAuthentication:
    def test_valid_credentials(self):
        customer_id = _register(email="login@example.com", password="Str0ng!Pass")
        customer = authenticate("LOGIN@example.com", "Str0ng!Pass")
        assert str(customer.id) == customer_id

    def test_wrong_password(self):
        _register(email="login@example.com", password="Str0ng!Pass")
        with pytest.raises(AuthenticationError) as exc:
            authenticate("login@example.com", "Wr0ng!Pass")
        assert exc.value.message == INVALID_CREDENTIALS

    def test_unknown_email(self):
        with pytest.raises(AuthenticationError) as exc:
            authenticate("nobody@example.com", "Str0ng!Pass")
        assert exc.value.message == INVALID_CREDENTIALS

    def test_inactive_account(self):
        customer_id = _register(email="inactive@example.com", password="Str0ng!Pass")
        repo = current_domain.repository_for(Customer)
        customer = repo.get(customer_id)
        customer.deactivate()
        repo.add(customer)

        with pytest.raises(AuthenticationError) as exc:
            authenticate("inactive@example.com", "Str0ng!Pass")
        assert exc.value.message == INACTIVE_ACCOUNT

    def test_record_login_stamps_last_login(self):
        customer_id = _register()
        current_domain.process(RecordCustomerLogin(customer_id=customer_id), asynchronous=False)
        customer = current_domain.repository_for(Customer).get(customer_id)
        assert customer.last_login_at is not None
