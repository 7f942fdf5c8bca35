"""Page arithmetic shared by every list endpoint."""

import math
from dataclasses import dataclass, field
from typing import Any

from protean.exceptions import ValidationError

MAX_PAGE_SIZE = 100


@dataclass
class PagedResult:
    """One page of a filtered, ordered query."""

    items: list[Any] = field(default_factory=list)
    total_count: int = 0
    current_page: int = 1
    page_size: int = 10

    @property
    def total_pages(self) -> int:
        if self.total_count == 0:
            return 0
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    def map(self, func) -> "PagedResult":
        """Return the same page with every item transformed by ``func``."""
        return PagedResult(
            items=[func(item) for item in self.items],
            total_count=self.total_count,
            current_page=self.current_page,
            page_size=self.page_size,
        )


def normalize_paging(page: int | None, page_size: int | None, default_size: int = 10) -> tuple[int, int]:
    """Clamp out-of-range paging arguments to safe defaults."""
    page = page if page and page >= 1 else 1
    if not page_size or page_size < 1 or page_size > MAX_PAGE_SIZE:
        page_size = default_size
    return page, page_size


def require_valid_paging(page: int, page_size: int) -> None:
    """Reject out-of-range paging arguments instead of clamping them."""
    errors = {}
    if page < 1:
        errors["page"] = ["Page must be greater than 0"]
    if page_size < 1 or page_size > MAX_PAGE_SIZE:
        errors["page_size"] = [f"Page size must be between 1 and {MAX_PAGE_SIZE}"]
    if errors:
        raise ValidationError(errors)


def paginate(query, page: int, page_size: int) -> PagedResult:
    """Run a Protean queryset for one page and wrap it with its total count."""
    result = query.offset((page - 1) * page_size).limit(page_size).all()
    return PagedResult(
        items=list(result.items),
        total_count=result.total,
        current_page=page,
        page_size=page_size,
    )


def scan(query, batch_size: int = MAX_PAGE_SIZE):
    """Yield every record of an ordered queryset, fetching ``batch_size`` at a time."""
    offset = 0
    while True:
        batch = list(query.offset(offset).limit(batch_size).all().items)
        yield from batch
        if len(batch) < batch_size:
            return
        offset += batch_size
