"""Pydantic request/response schemas for the Customer API."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field

# --- Request Schemas ---


class RegisterCustomerRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "email": "jane.doe@example.com",
                    "password": "Str0ng!Passw0rd",
                    "first_name": "Jane",
                    "last_name": "Doe",
                    "phone_number": "+1 555 0123",
                    "date_of_birth": "1990-03-15",
                    "gender": "Female",
                }
            ]
        }
    }

    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=100)
    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)
    phone_number: str | None = Field(None, max_length=20)
    date_of_birth: str | None = Field(None, max_length=10)
    gender: str | None = Field(None, max_length=20)


class LoginRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"email": "jane.doe@example.com", "password": "Str0ng!Passw0rd"}]}}

    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=100)


class UpdateProfileRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "first_name": "Jane",
                    "last_name": "Smith",
                    "phone_number": "+1 555 0456",
                    "date_of_birth": "1990-03-15",
                    "gender": "Female",
                    "preferences": '{"newsletter": true}',
                }
            ]
        }
    }

    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)
    phone_number: str | None = Field(None, max_length=20)
    date_of_birth: str | None = Field(None, max_length=10)
    gender: str | None = Field(None, max_length=20)
    preferences: str | None = Field(None, max_length=1000)


class AddAddressRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "address_type": "Shipping",
                    "address_line1": "123 Elm Street",
                    "city": "Springfield",
                    "state": "IL",
                    "zip_code": "62701",
                    "country": "US",
                    "is_default": False,
                }
            ]
        }
    }

    address_type: str | None = Field(None, max_length=20)
    address_line1: str = Field(..., max_length=255)
    address_line2: str | None = Field(None, max_length=255)
    city: str = Field(..., max_length=100)
    state: str | None = Field(None, max_length=100)
    zip_code: str = Field(..., max_length=20)
    country: str = Field(..., max_length=100)
    is_default: bool = False
    delivery_instructions: str | None = Field(None, max_length=500)


class VerifyEmailRequest(BaseModel):
    token: str = Field(..., max_length=64)


# --- Response Schemas ---


class AuthenticatedCustomerResponse(BaseModel):
    id: str
    email: str
    full_name: str
    token: str
    token_expires: datetime
    email_verified: bool


class AddressResponse(BaseModel):
    id: str
    address_type: str | None = None
    address_line1: str
    address_line2: str | None = None
    city: str
    state: str | None = None
    zip_code: str
    country: str
    is_default: bool
    delivery_instructions: str | None = None


class CustomerSummaryResponse(BaseModel):
    id: str
    email: str
    full_name: str
    phone_number: str | None = None
    is_active: bool
    email_verified: bool
    last_login_at: datetime | None = None
    created_at: datetime | None = None


class CustomerDetailResponse(CustomerSummaryResponse):
    first_name: str
    last_name: str
    date_of_birth: date | None = None
    gender: str | None = None
    preferences: str | None = None
    updated_at: datetime | None = None
    addresses: list[AddressResponse] = []


class CustomerPageResponse(BaseModel):
    items: list[CustomerSummaryResponse]
    total_count: int
    current_page: int
    page_size: int
    total_pages: int
    has_previous: bool
    has_next: bool


class IdResponse(BaseModel):
    id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class HealthResponse(BaseModel):
    status: str = "healthy"
    service: str
    timestamp: datetime
