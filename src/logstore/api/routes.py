"""FastAPI endpoints for the Logging service."""

import json
from datetime import UTC, datetime, timedelta

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from logstore.api.schemas import (
    ApiResponse,
    CreateLogEntryRequest,
    HealthResponse,
    LogEntryPage,
    LogEntryResponse,
    PurgeResult,
)
from logstore.entry.queries import get_entry, list_entries, search_entries
from logstore.entry.recording import RecordLogEntry
from logstore.entry.retention import PurgeLogEntries
from shared.security import TokenUser, get_current_user, require_roles

router = APIRouter(prefix="/api/logs", tags=["logs"])


def _entry(entry) -> LogEntryResponse:
    return LogEntryResponse(
        id=str(entry.id),
        level=entry.level,
        message=entry.message,
        service_name=entry.service_name,
        category=entry.category,
        correlation_id=entry.correlation_id,
        user_id=str(entry.user_id) if entry.user_id else None,
        exception=entry.exception,
        stack_trace=entry.stack_trace,
        properties=entry.properties,
        timestamp=entry.timestamp,
        machine_name=entry.machine_name,
        environment=entry.environment,
        application_version=entry.application_version,
        created_at=entry.created_at,
    )


def _page(result, message) -> ApiResponse[LogEntryPage]:
    return ApiResponse[LogEntryPage](
        message=message,
        data=LogEntryPage(
            items=[_entry(e) for e in result.items],
            total_count=result.total_count,
            current_page=result.current_page,
            page_size=result.page_size,
            total_pages=result.total_pages,
            has_previous=result.has_previous,
            has_next=result.has_next,
        ),
    )


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(service="LoggingService", timestamp=datetime.now(UTC))


@router.get("", response_model=ApiResponse[LogEntryPage])
async def get_logs(
    page: int = Query(1),
    page_size: int = Query(20, alias="pageSize"),
    user: TokenUser = Depends(get_current_user),
) -> ApiResponse[LogEntryPage]:
    result = list_entries(page=page, page_size=page_size)
    return _page(result, f"Retrieved {len(result.items)} log entries")


@router.get("/search", response_model=ApiResponse[LogEntryPage])
async def search_logs(
    service_name: str | None = Query(None, alias="serviceName"),
    level: str | None = Query(None),
    from_date: datetime | None = Query(None, alias="fromDate"),
    to_date: datetime | None = Query(None, alias="toDate"),
    category: str | None = Query(None),
    correlation_id: str | None = Query(None, alias="correlationId"),
    user_id: str | None = Query(None, alias="userId"),
    page: int = Query(1),
    page_size: int = Query(20, alias="pageSize"),
    user: TokenUser = Depends(get_current_user),
) -> ApiResponse[LogEntryPage]:
    result = search_entries(
        service_name=service_name,
        level=level,
        from_date=from_date,
        to_date=to_date,
        category=category,
        correlation_id=correlation_id,
        user_id=user_id,
        page=page,
        page_size=page_size,
    )
    return _page(result, f"Found {result.total_count} log entries")


@router.get("/service/{service_name}", response_model=ApiResponse[LogEntryPage])
async def get_logs_by_service(
    service_name: str,
    page: int = Query(1),
    page_size: int = Query(20, alias="pageSize"),
    user: TokenUser = Depends(get_current_user),
) -> ApiResponse[LogEntryPage]:
    result = search_entries(service_name=service_name, page=page, page_size=page_size)
    return _page(result, f"Retrieved {len(result.items)} log entries for service {service_name}")


@router.get("/correlation/{correlation_id}", response_model=ApiResponse[LogEntryPage])
async def get_logs_by_correlation(
    correlation_id: str,
    page: int = Query(1),
    page_size: int = Query(20, alias="pageSize"),
    user: TokenUser = Depends(get_current_user),
) -> ApiResponse[LogEntryPage]:
    result = search_entries(correlation_id=correlation_id, page=page, page_size=page_size)
    return _page(result, f"Retrieved {len(result.items)} log entries for correlation {correlation_id}")


@router.get("/user/{user_id}", response_model=ApiResponse[LogEntryPage])
async def get_logs_by_user(
    user_id: str,
    page: int = Query(1),
    page_size: int = Query(20, alias="pageSize"),
    user: TokenUser = Depends(get_current_user),
) -> ApiResponse[LogEntryPage]:
    result = search_entries(user_id=user_id, page=page, page_size=page_size)
    return _page(result, f"Retrieved {len(result.items)} log entries for user {user_id}")


@router.post("", status_code=201, response_model=ApiResponse[LogEntryResponse])
async def create_log(
    body: CreateLogEntryRequest,
    user: TokenUser = Depends(get_current_user),
) -> ApiResponse[LogEntryResponse]:
    command = RecordLogEntry(
        **body.model_dump(exclude={"properties"}, exclude_none=True),
        properties=json.dumps(body.properties) if body.properties else None,
    )
    entry_id = current_domain.process(command, asynchronous=False)
    return ApiResponse[LogEntryResponse](message="Log entry created", data=_entry(get_entry(entry_id)))


@router.delete("/purge", response_model=ApiResponse[PurgeResult])
async def purge_logs(
    days: int = Query(30, ge=1),
    user: TokenUser = Depends(require_roles("admin")),
) -> ApiResponse[PurgeResult]:
    older_than = datetime.now() - timedelta(days=days)
    purged = current_domain.process(PurgeLogEntries(older_than=older_than), asynchronous=False)
    return ApiResponse[PurgeResult](
        message=f"Purged {purged} log entries", data=PurgeResult(purged=purged, older_than=older_than)
    )
