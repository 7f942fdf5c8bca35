"""Read-side access to orders."""

from datetime import datetime

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from orders.order.order import Order
from shared.paging import PagedResult, normalize_paging, paginate

_SORT_FIELDS = {
    "ordernumber": "order_number",
    "orderdate": "order_date",
    "totalamount": "total_amount",
    "status": "status",
}


def get_order(order_id) -> Order:
    """Return the order, treating soft-deleted records as missing."""
    try:
        order = current_domain.repository_for(Order).get(str(order_id))
    except ObjectNotFoundError:
        order = None
    if order is None or order.is_deleted:
        raise ObjectNotFoundError(f"Order with id {order_id} was not found")
    return order


def _ordering(sort_by, sort_direction):
    if not sort_by:
        return "-created_at"
    field = _SORT_FIELDS.get(sort_by.replace("_", "").lower())
    if field is None:
        raise ValidationError({"sort_by": [f"Cannot sort orders by {sort_by}"]})
    return f"-{field}" if (sort_direction or "asc").lower() == "desc" else field


def list_orders(
    page: int | None = 1,
    page_size: int | None = 10,
    customer_id: str | None = None,
    status: str | None = None,
    from_date: datetime | None = None,
    to_date: datetime | None = None,
    order_number: str | None = None,
    sort_by: str | None = None,
    sort_direction: str | None = "asc",
) -> PagedResult:
    page, page_size = normalize_paging(page, page_size)

    query = current_domain.repository_for(Order)._dao.query.filter(is_deleted=False)
    if customer_id:
        query = query.filter(customer_id=str(customer_id))
    if status:
        query = query.filter(status=status)
    if from_date:
        query = query.filter(order_date__gte=from_date)
    if to_date:
        query = query.filter(order_date__lte=to_date)
    if order_number and order_number.strip():
        query = query.filter(order_number__icontains=order_number.strip())

    return paginate(query.order_by(_ordering(sort_by, sort_direction)), page, page_size)
