"""Pydantic request/response schemas for the Product API."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

# --- Request Schemas ---


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Laptop Dell XPS 13",
                    "sku": "DELL-XPS13-001",
                    "price": 1299.99,
                    "stock": 25,
                    "minimum_stock": 5,
                    "category": "Electronics",
                    "brand": "Dell",
                    "description": "Ultrabook with InfinityEdge display",
                }
            ]
        }
    }

    name: str = Field(..., max_length=255)
    sku: str = Field(..., max_length=100)
    price: float = Field(..., ge=0)
    category: str = Field(..., max_length=100)
    stock: int = Field(0, ge=0)
    minimum_stock: int = Field(0, ge=0)
    description: str | None = Field(None, max_length=1000)
    brand: str | None = Field(None, max_length=100)
    weight: float | None = Field(None, ge=0)
    dimensions: str | None = Field(None, max_length=50)
    image_url: str | None = Field(None, max_length=500)
    tags: str | None = Field(None, max_length=500)


class UpdateProductRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"price": 1249.99, "reason": "Seasonal discount"}]}}

    name: str | None = Field(None, max_length=255)
    sku: str | None = Field(None, max_length=100)
    price: float | None = Field(None, ge=0)
    stock: int | None = Field(None, ge=0)
    minimum_stock: int | None = Field(None, ge=0)
    category: str | None = Field(None, max_length=100)
    description: str | None = Field(None, max_length=1000)
    brand: str | None = Field(None, max_length=100)
    weight: float | None = Field(None, ge=0)
    dimensions: str | None = Field(None, max_length=50)
    image_url: str | None = Field(None, max_length=500)
    tags: str | None = Field(None, max_length=500)
    is_active: bool | None = None
    reason: str | None = Field(None, max_length=255)


class UpdateStockRequest(BaseModel):
    model_config = {
        "json_schema_extra": {"examples": [{"quantity": -2, "reason": "Damaged in warehouse", "external_reference": "RMA-77"}]}
    }

    quantity: int
    reason: str = Field(..., max_length=255)
    external_reference: str | None = Field(None, max_length=100)


class ValidateStockRequest(BaseModel):
    product_id: str
    required_quantity: int = Field(..., ge=1)


class BatchProductsRequest(BaseModel):
    product_ids: list[str]


# --- Response Schemas ---


class ProductResponse(BaseModel):
    id: str
    name: str
    sku: str
    description: str | None = None
    price: float
    stock: int
    minimum_stock: int
    category: str
    brand: str | None = None
    weight: float | None = None
    dimensions: str | None = None
    image_url: str | None = None
    tags: str | None = None
    is_active: bool
    is_low_stock: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductPageResponse(BaseModel):
    items: list[ProductResponse]
    total_count: int
    current_page: int
    page_size: int
    total_pages: int
    has_previous: bool
    has_next: bool


class StockUpdateResponse(BaseModel):
    product_id: str
    new_stock: int


class StockMovementResponse(BaseModel):
    id: str
    product_id: str
    movement_type: str
    quantity: int
    previous_stock: int
    new_stock: int
    reason: str
    external_reference: str | None = None
    user_id: str | None = None
    created_at: datetime | None = None


class StockMovementPageResponse(BaseModel):
    items: list[StockMovementResponse]
    total_count: int
    current_page: int
    page_size: int
    total_pages: int
    has_previous: bool
    has_next: bool


class ValidationResponse(BaseModel):
    is_valid: bool
    message: str
    data: Any = None


class HealthResponse(BaseModel):
    status: str = "healthy"
    service: str
    timestamp: datetime
