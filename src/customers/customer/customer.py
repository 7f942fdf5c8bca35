"""Customer aggregate root with its CustomerAddress entity."""

import re
import uuid
from datetime import date, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, Date, DateTime, HasMany, String, Text

from customers.customer.events import (
    AddressAdded,
    AddressRemoved,
    CustomerActivated,
    CustomerDeactivated,
    CustomerDeleted,
    CustomerLoggedIn,
    CustomerRegistered,
    DefaultAddressChanged,
    EmailVerified,
    ProfileUpdated,
)
from customers.domain import customers

MAX_ADDRESSES = 10
MAX_AGE_YEARS = 120

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_NAME_PATTERN = re.compile(r"^[a-zA-ZÀ-ÿ\s]+$")
_PHONE_PATTERN = re.compile(r"^\+?[\d\s\-()]+$")
_PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[\W_]).{8,}$")


class Gender(Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"
    PREFER_NOT_TO_SAY = "PreferNotToSay"


class AddressType(Enum):
    """Enumeration of address usages."""

    BILLING = "Billing"
    SHIPPING = "Shipping"
    BOTH = "Both"


def validate_password(password):
    """Reject passwords that do not meet the strength policy."""
    if not password or len(password) < 8 or len(password) > 100:
        raise ValidationError({"password": ["Password must be between 8 and 100 characters"]})
    if not _PASSWORD_PATTERN.match(password):
        raise ValidationError(
            {
                "password": [
                    "Password must contain at least one lowercase letter, one uppercase letter, "
                    "one number and one special character"
                ]
            }
        )


def normalize_email(email):
    return email.strip().lower() if email else email


@customers.entity(part_of="Customer")
class CustomerAddress:
    """A postal address in a customer's address book.

    A customer holds at most ten addresses; when any exist, exactly one is the
    default used for billing and shipping.
    """

    address_type: String(choices=AddressType, default=AddressType.BOTH.value)
    address_line1: String(required=True, max_length=255)
    address_line2: String(max_length=255)
    city: String(required=True, max_length=100)
    state: String(max_length=100)
    zip_code: String(required=True, max_length=20)
    country: String(required=True, max_length=100)
    is_default: Boolean(default=False)
    delivery_instructions: String(max_length=500)
    created_at: DateTime(default=datetime.now)


@customers.aggregate
class Customer:
    """A registered shopper who can sign in and place orders.

    Customers are soft deleted: a deleted customer keeps its row (so the email
    stays reserved) but is invisible to every query and cannot sign in.
    """

    email: String(required=True, max_length=255)
    password_hash: String(required=True, max_length=255)
    first_name: String(required=True, max_length=100)
    last_name: String(required=True, max_length=100)
    phone_number: String(max_length=20)
    date_of_birth: Date()
    gender: String(choices=Gender)
    is_active: Boolean(default=True)
    email_verified: Boolean(default=False)
    email_verified_at: DateTime()
    email_verification_token: String(max_length=64)
    last_login_at: DateTime()
    preferences: Text()
    internal_notes: Text()
    addresses: HasMany(CustomerAddress)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)
    is_deleted: Boolean(default=False)
    deleted_at: DateTime()

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"

    @invariant.post
    def email_must_be_well_formed(self):
        if self.email and not _EMAIL_PATTERN.match(self.email):
            raise ValidationError({"email": ["Invalid email format"]})

    @invariant.post
    def names_must_contain_only_letters(self):
        for field in ("first_name", "last_name"):
            value = getattr(self, field)
            if value and not _NAME_PATTERN.match(value):
                raise ValidationError({field: ["Name can only contain letters and spaces"]})

    @invariant.post
    def phone_number_must_be_dialable(self):
        if self.phone_number and not _PHONE_PATTERN.match(self.phone_number):
            raise ValidationError({"phone_number": ["Invalid phone number format"]})

    @invariant.post
    def date_of_birth_must_be_plausible(self):
        if self.date_of_birth is None:
            return
        today = date.today()
        if self.date_of_birth >= today:
            raise ValidationError({"date_of_birth": ["Date of birth must be in the past"]})
        if today.year - self.date_of_birth.year > MAX_AGE_YEARS:
            raise ValidationError({"date_of_birth": [f"Date of birth cannot be more than {MAX_AGE_YEARS} years ago"]})

    @invariant.post
    def text_fields_within_limits(self):
        if self.preferences and len(self.preferences) > 1000:
            raise ValidationError({"preferences": ["Preferences cannot exceed 1000 characters"]})
        if self.internal_notes and len(self.internal_notes) > 1000:
            raise ValidationError({"internal_notes": ["Notes cannot exceed 1000 characters"]})

    @invariant.post
    def addresses_cannot_exceed_maximum(self):
        if len(self.addresses) > MAX_ADDRESSES:
            raise ValidationError({"addresses": [f"Cannot have more than {MAX_ADDRESSES} addresses"]})

    @invariant.post
    def exactly_one_default_address_when_addresses_exist(self):
        if not self.addresses:
            return
        defaults = [a for a in self.addresses if a.is_default]
        if len(defaults) != 1:
            raise ValidationError({"addresses": ["Exactly one address must be marked as default"]})

    @classmethod
    def register(
        cls,
        email,
        password_hash,
        first_name,
        last_name,
        phone_number=None,
        date_of_birth=None,
        gender=None,
    ):
        now = datetime.now()
        customer = cls(
            email=normalize_email(email),
            password_hash=password_hash,
            first_name=first_name.strip() if first_name else first_name,
            last_name=last_name.strip() if last_name else last_name,
            phone_number=phone_number,
            date_of_birth=date_of_birth,
            gender=gender,
            email_verification_token=uuid.uuid4().hex,
            created_at=now,
            updated_at=now,
        )
        customer.raise_(
            CustomerRegistered(
                customer_id=customer.id,
                email=customer.email,
                full_name=customer.full_name,
                registered_at=now,
            )
        )
        return customer

    def record_login(self):
        now = datetime.now()
        self.last_login_at = now
        self.raise_(CustomerLoggedIn(customer_id=self.id, logged_in_at=now))

    def update_profile(
        self,
        first_name,
        last_name,
        phone_number=None,
        date_of_birth=None,
        gender=None,
        preferences=None,
    ):
        with atomic_change(self):
            self.first_name = first_name.strip()
            self.last_name = last_name.strip()
            self.phone_number = phone_number
            self.date_of_birth = date_of_birth
            self.gender = gender
            if preferences is not None:
                self.preferences = preferences
            self.updated_at = datetime.now()

        self.raise_(
            ProfileUpdated(
                customer_id=self.id,
                first_name=self.first_name,
                last_name=self.last_name,
                phone_number=self.phone_number,
                date_of_birth=str(self.date_of_birth) if self.date_of_birth else None,
            )
        )

    def add_address(
        self,
        address_line1,
        city,
        zip_code,
        country,
        address_type=AddressType.BOTH.value,
        address_line2=None,
        state=None,
        is_default=False,
        delivery_instructions=None,
    ):
        # First address is always default
        if not self.addresses:
            is_default = True

        with atomic_change(self):
            if is_default:
                for addr in self.addresses:
                    if addr.is_default:
                        addr.is_default = False

            address = CustomerAddress(
                address_type=address_type,
                address_line1=address_line1,
                address_line2=address_line2,
                city=city,
                state=state,
                zip_code=zip_code,
                country=country,
                is_default=is_default,
                delivery_instructions=delivery_instructions,
            )
            self.add_addresses(address)
            self.updated_at = datetime.now()

        self.raise_(
            AddressAdded(
                customer_id=self.id,
                address_id=address.id,
                address_type=address_type,
                city=city,
                country=country,
                is_default=is_default,
            )
        )
        return address

    def _address(self, address_id):
        address = next((a for a in self.addresses if str(a.id) == str(address_id)), None)
        if address is None:
            raise ValidationError({"addresses": [f"Address {address_id} not found"]})
        return address

    def remove_address(self, address_id):
        address = self._address(address_id)
        was_default = address.is_default

        with atomic_change(self):
            self.remove_addresses(address)

            # Removed default passes to the first remaining address
            if was_default and self.addresses:
                self.addresses[0].is_default = True
            self.updated_at = datetime.now()

        self.raise_(AddressRemoved(customer_id=self.id, address_id=address_id))

    def set_default_address(self, address_id):
        address = self._address(address_id)

        previous_default = next((a for a in self.addresses if a.is_default), None)
        previous_default_id = previous_default.id if previous_default else None

        with atomic_change(self):
            for addr in self.addresses:
                if addr.is_default:
                    addr.is_default = False
            address.is_default = True
            self.updated_at = datetime.now()

        self.raise_(
            DefaultAddressChanged(
                customer_id=self.id,
                address_id=address_id,
                previous_default_address_id=previous_default_id,
            )
        )

    def verify_email(self, token):
        if self.email_verified:
            return
        if not token or token != self.email_verification_token:
            raise ValidationError({"token": ["Invalid email verification token"]})

        now = datetime.now()
        self.email_verified = True
        self.email_verified_at = now
        self.email_verification_token = None
        self.updated_at = now
        self.raise_(EmailVerified(customer_id=self.id, email=self.email, verified_at=now))

    def deactivate(self):
        if not self.is_active:
            raise ValidationError({"is_active": ["Customer is already inactive"]})
        self.is_active = False
        self.updated_at = datetime.now()
        self.raise_(CustomerDeactivated(customer_id=self.id, deactivated_at=self.updated_at))

    def activate(self):
        if self.is_active:
            raise ValidationError({"is_active": ["Customer is already active"]})
        self.is_active = True
        self.updated_at = datetime.now()
        self.raise_(CustomerActivated(customer_id=self.id, activated_at=self.updated_at))

    def soft_delete(self):
        now = datetime.now()
        with atomic_change(self):
            self.is_deleted = True
            self.deleted_at = now
            self.updated_at = now
        self.raise_(CustomerDeleted(customer_id=self.id, email=self.email, deleted_at=now))
