"""Pydantic request/response schemas for the Logging API."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class CreateLogEntryRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "level": "Warning",
                    "message": "Payment provider slow to respond",
                    "service_name": "OrderService",
                    "category": "Payments",
                    "correlation_id": "b7c1e0f2",
                    "properties": {"latency_ms": 2300},
                }
            ]
        }
    }

    level: str = Field(..., max_length=20)
    message: str = Field(..., max_length=2000)
    service_name: str = Field(..., max_length=100)
    category: str = Field(..., max_length=100)
    correlation_id: str | None = Field(None, max_length=100)
    user_id: str | None = None
    exception: str | None = Field(None, max_length=4000)
    stack_trace: str | None = Field(None, max_length=8000)
    properties: dict[str, Any] | None = None
    timestamp: datetime | None = None
    machine_name: str | None = Field(None, max_length=100)
    environment: str | None = Field(None, max_length=50)
    application_version: str | None = Field(None, max_length=50)


class LogEntryResponse(BaseModel):
    id: str
    level: str
    message: str
    service_name: str
    category: str
    correlation_id: str | None = None
    user_id: str | None = None
    exception: str | None = None
    stack_trace: str | None = None
    properties: str | None = None
    timestamp: datetime | None = None
    machine_name: str | None = None
    environment: str | None = None
    application_version: str | None = None
    created_at: datetime | None = None


class LogEntryPage(BaseModel):
    items: list[LogEntryResponse]
    total_count: int
    current_page: int
    page_size: int
    total_pages: int
    has_previous: bool
    has_next: bool


class ApiResponse(BaseModel, Generic[T]):
    """Envelope returned by every Logging endpoint."""

    success: bool = True
    message: str | None = None
    data: T | None = None


class PurgeResult(BaseModel):
    purged: int
    older_than: datetime


class HealthResponse(BaseModel):
    status: str = "healthy"
    service: str
    timestamp: datetime
