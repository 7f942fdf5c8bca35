"""Pydantic request/response schemas for the Order API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Request Schemas ---


class OrderItemRequest(BaseModel):
    product_id: str
    quantity: int = Field(..., ge=1, le=1000)
    notes: str | None = Field(None, max_length=500)


class CreateOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "customer_id": "5b0f2c1e-3c1d-4c33-9a57-4f3c1f0f2b10",
                    "items": [{"product_id": "e2a6...", "quantity": 2}],
                    "notes": "Leave at reception",
                    "shipping_address": "Av. Siempre Viva 742",
                    "shipping_city": "Springfield",
                    "shipping_zip_code": "12345",
                    "shipping_country": "USA",
                }
            ]
        }
    }

    customer_id: str
    items: list[OrderItemRequest] = Field(..., min_length=1, max_length=50)
    notes: str | None = Field(None, max_length=500)
    shipping_address: str | None = Field(None, max_length=255)
    shipping_city: str | None = Field(None, max_length=100)
    shipping_zip_code: str | None = Field(None, max_length=20)
    shipping_country: str | None = Field(None, max_length=100)


class UpdateOrderItemRequest(OrderItemRequest):
    id: str | None = None


class UpdateOrderRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "Confirmed", "reason": "Payment received"}]}}

    status: str | None = None
    notes: str | None = Field(None, max_length=500)
    items: list[UpdateOrderItemRequest] | None = Field(None, max_length=50)
    reason: str | None = Field(None, max_length=255)
    comments: str | None = None


# --- Response Schemas ---


class ShippingAddressResponse(BaseModel):
    address: str | None = None
    city: str | None = None
    zip_code: str | None = None
    country: str | None = None


class OrderItemResponse(BaseModel):
    id: str
    product_id: str
    product_name: str
    product_sku: str | None = None
    quantity: int
    unit_price: float
    discount: float = 0.0
    total_price: float
    notes: str | None = None


class StatusChangeResponse(BaseModel):
    previous_status: str
    new_status: str
    changed_at: datetime | None = None
    changed_by: str | None = None
    reason: str | None = None
    comments: str | None = None


class OrderResponse(BaseModel):
    id: str
    order_number: str
    customer_id: str
    status: str
    order_date: datetime | None = None
    sub_total: float
    tax_amount: float
    shipping_cost: float
    total_amount: float
    shipping_address: ShippingAddressResponse | None = None
    notes: str | None = None
    items: list[OrderItemResponse] = []
    status_history: list[StatusChangeResponse] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OrderPageResponse(BaseModel):
    items: list[OrderResponse]
    total_count: int
    current_page: int
    page_size: int
    total_pages: int
    has_previous: bool
    has_next: bool


class HealthResponse(BaseModel):
    status: str = "healthy"
    service: str
    timestamp: datetime
