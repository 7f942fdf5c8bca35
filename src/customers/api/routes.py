"""FastAPI endpoints for the Customer service."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends, Query, Response
from protean.utils.globals import current_domain

from customers.api.schemas import (
    AddAddressRequest,
    AddressResponse,
    AuthenticatedCustomerResponse,
    CustomerDetailResponse,
    CustomerPageResponse,
    CustomerSummaryResponse,
    HealthResponse,
    IdResponse,
    LoginRequest,
    RegisterCustomerRequest,
    StatusResponse,
    UpdateProfileRequest,
    VerifyEmailRequest,
)
from customers.customer.account import ActivateCustomer, DeactivateCustomer, DeleteCustomer
from customers.customer.addresses import AddCustomerAddress, RemoveCustomerAddress, SetDefaultAddress
from customers.customer.authentication import RecordCustomerLogin, authenticate
from customers.customer.customer import AddressType, validate_password
from customers.customer.profile import UpdateCustomerProfile
from customers.customer.queries import get_customer, list_customers
from customers.customer.registration import RegisterCustomer
from customers.customer.verification import VerifyCustomerEmail
from shared.security import TokenUser, create_access_token, get_current_user, hash_password

router = APIRouter(prefix="/api/customers", tags=["customers"])


def _summary(customer) -> CustomerSummaryResponse:
    return CustomerSummaryResponse(
        id=str(customer.id),
        email=customer.email,
        full_name=customer.full_name,
        phone_number=customer.phone_number,
        is_active=customer.is_active,
        email_verified=customer.email_verified,
        last_login_at=customer.last_login_at,
        created_at=customer.created_at,
    )


def _detail(customer) -> CustomerDetailResponse:
    return CustomerDetailResponse(
        **_summary(customer).model_dump(),
        first_name=customer.first_name,
        last_name=customer.last_name,
        date_of_birth=customer.date_of_birth,
        gender=customer.gender,
        preferences=customer.preferences,
        updated_at=customer.updated_at,
        addresses=[
            AddressResponse(
                id=str(a.id),
                address_type=a.address_type,
                address_line1=a.address_line1,
                address_line2=a.address_line2,
                city=a.city,
                state=a.state,
                zip_code=a.zip_code,
                country=a.country,
                is_default=a.is_default,
                delivery_instructions=a.delivery_instructions,
            )
            for a in customer.addresses
        ],
    )


def _authenticated(customer) -> AuthenticatedCustomerResponse:
    issued = create_access_token(
        user_id=str(customer.id),
        email=customer.email,
        full_name=customer.full_name,
        roles=["customer"],
    )
    return AuthenticatedCustomerResponse(
        id=str(customer.id),
        email=customer.email,
        full_name=customer.full_name,
        token=issued.token,
        token_expires=issued.expires_at,
        email_verified=customer.email_verified,
    )


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(service="CustomerService", timestamp=datetime.now(UTC))


@router.post("/register", status_code=201, response_model=AuthenticatedCustomerResponse)
async def register_customer(body: RegisterCustomerRequest) -> AuthenticatedCustomerResponse:
    # Plain passwords never enter the command stream
    validate_password(body.password)
    command = RegisterCustomer(
        email=body.email,
        password_hash=hash_password(body.password),
        first_name=body.first_name,
        last_name=body.last_name,
        phone_number=body.phone_number,
        date_of_birth=body.date_of_birth,
        gender=body.gender,
    )
    customer_id = current_domain.process(command, asynchronous=False)
    return _authenticated(get_customer(customer_id))


@router.post("/login", response_model=AuthenticatedCustomerResponse)
async def login(body: LoginRequest) -> AuthenticatedCustomerResponse:
    customer = authenticate(body.email, body.password)
    current_domain.process(RecordCustomerLogin(customer_id=str(customer.id)), asynchronous=False)
    return _authenticated(get_customer(customer.id))


@router.get("", response_model=CustomerPageResponse)
async def get_customers(
    page: int = Query(1, alias="page"),
    page_size: int = Query(10, alias="pageSize"),
    search_term: str | None = Query(None, alias="searchTerm"),
    is_active: bool | None = Query(None, alias="isActive"),
    user: TokenUser = Depends(get_current_user),
) -> CustomerPageResponse:
    result = list_customers(page=page, page_size=page_size, search_term=search_term, is_active=is_active)
    return CustomerPageResponse(
        items=[_summary(c) for c in result.items],
        total_count=result.total_count,
        current_page=result.current_page,
        page_size=result.page_size,
        total_pages=result.total_pages,
        has_previous=result.has_previous,
        has_next=result.has_next,
    )


@router.get("/profile", response_model=CustomerDetailResponse)
async def get_profile(user: TokenUser = Depends(get_current_user)) -> CustomerDetailResponse:
    return _detail(get_customer(user.id))


@router.put("/profile", response_model=CustomerDetailResponse)
async def update_profile(
    body: UpdateProfileRequest,
    user: TokenUser = Depends(get_current_user),
) -> CustomerDetailResponse:
    command = UpdateCustomerProfile(
        customer_id=user.id,
        first_name=body.first_name,
        last_name=body.last_name,
        phone_number=body.phone_number,
        date_of_birth=body.date_of_birth,
        gender=body.gender,
        preferences=body.preferences,
    )
    current_domain.process(command, asynchronous=False)
    return _detail(get_customer(user.id))


@router.get("/{customer_id}", response_model=CustomerDetailResponse)
async def get_customer_by_id(customer_id: str, user: TokenUser = Depends(get_current_user)) -> CustomerDetailResponse:
    return _detail(get_customer(customer_id))


@router.delete("/{customer_id}", status_code=204)
async def delete_customer(customer_id: str, user: TokenUser = Depends(get_current_user)) -> Response:
    current_domain.process(DeleteCustomer(customer_id=customer_id), asynchronous=False)
    return Response(status_code=204)


@router.post("/{customer_id}/addresses", status_code=201, response_model=IdResponse)
async def add_address(
    customer_id: str,
    body: AddAddressRequest,
    user: TokenUser = Depends(get_current_user),
) -> IdResponse:
    command = AddCustomerAddress(
        customer_id=customer_id,
        address_type=body.address_type or AddressType.BOTH.value,
        address_line1=body.address_line1,
        address_line2=body.address_line2,
        city=body.city,
        state=body.state,
        zip_code=body.zip_code,
        country=body.country,
        is_default=body.is_default,
        delivery_instructions=body.delivery_instructions,
    )
    address_id = current_domain.process(command, asynchronous=False)
    return IdResponse(id=address_id)


@router.delete("/{customer_id}/addresses/{address_id}", response_model=StatusResponse)
async def remove_address(
    customer_id: str,
    address_id: str,
    user: TokenUser = Depends(get_current_user),
) -> StatusResponse:
    command = RemoveCustomerAddress(customer_id=customer_id, address_id=address_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@router.put("/{customer_id}/addresses/{address_id}/default", response_model=StatusResponse)
async def set_default_address(
    customer_id: str,
    address_id: str,
    user: TokenUser = Depends(get_current_user),
) -> StatusResponse:
    command = SetDefaultAddress(customer_id=customer_id, address_id=address_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@router.post("/{customer_id}/verify-email", response_model=StatusResponse)
async def verify_email(
    customer_id: str,
    body: VerifyEmailRequest,
    user: TokenUser = Depends(get_current_user),
) -> StatusResponse:
    current_domain.process(VerifyCustomerEmail(customer_id=customer_id, token=body.token), asynchronous=False)
    return StatusResponse()


@router.put("/{customer_id}/deactivate", response_model=StatusResponse)
async def deactivate_customer(customer_id: str, user: TokenUser = Depends(get_current_user)) -> StatusResponse:
    current_domain.process(DeactivateCustomer(customer_id=customer_id), asynchronous=False)
    return StatusResponse()


@router.put("/{customer_id}/activate", response_model=StatusResponse)
async def activate_customer(customer_id: str, user: TokenUser = Depends(get_current_user)) -> StatusResponse:
    current_domain.process(ActivateCustomer(customer_id=customer_id), asynchronous=False)
    return StatusResponse()
