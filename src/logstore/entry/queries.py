"""Read-side access to log entries. Newest entries come first."""

from datetime import datetime

from protean.utils.globals import current_domain

from logstore.entry.log_entry import LogEntry, naive_local
from shared.paging import PagedResult, normalize_paging, paginate


def _entries():
    return current_domain.repository_for(LogEntry)._dao.query


def get_entry(entry_id) -> LogEntry:
    return current_domain.repository_for(LogEntry).get(str(entry_id))


def list_entries(page: int | None = 1, page_size: int | None = 20) -> PagedResult:
    page, page_size = normalize_paging(page, page_size, default_size=20)
    return paginate(_entries().order_by("-timestamp"), page, page_size)


def search_entries(
    service_name: str | None = None,
    level: str | None = None,
    from_date: datetime | None = None,
    to_date: datetime | None = None,
    category: str | None = None,
    correlation_id: str | None = None,
    user_id: str | None = None,
    page: int | None = 1,
    page_size: int | None = 20,
) -> PagedResult:
    page, page_size = normalize_paging(page, page_size, default_size=20)

    query = _entries()
    if service_name:
        query = query.filter(service_name__icontains=service_name)
    if level:
        query = query.filter(level=level)
    if from_date:
        query = query.filter(timestamp__gte=naive_local(from_date))
    if to_date:
        query = query.filter(timestamp__lte=naive_local(to_date))
    if category:
        query = query.filter(category=category)
    if correlation_id:
        query = query.filter(correlation_id=correlation_id)
    if user_id:
        query = query.filter(user_id=str(user_id))

    return paginate(query.order_by("-timestamp"), page, page_size)
