"""Read-side access to customers for the API layer and other handlers."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.query import Q

from customers.customer.customer import Customer, normalize_email
from shared.paging import PagedResult, paginate, require_valid_paging


def _live_customers():
    return current_domain.repository_for(Customer)._dao.query.filter(is_deleted=False)


def get_customer(customer_id) -> Customer:
    """Return the customer, treating soft-deleted records as missing."""
    try:
        customer = current_domain.repository_for(Customer).get(str(customer_id))
    except ObjectNotFoundError:
        customer = None
    if customer is None or customer.is_deleted:
        raise ObjectNotFoundError(f"Customer with id {customer_id} was not found")
    return customer


def find_by_email(email, include_deleted=False) -> Customer | None:
    query = current_domain.repository_for(Customer)._dao.query.filter(email=normalize_email(email))
    if not include_deleted:
        query = query.filter(is_deleted=False)
    matches = query.all().items
    return matches[0] if matches else None


def list_customers(
    page: int = 1,
    page_size: int = 10,
    search_term: str | None = None,
    is_active: bool | None = None,
) -> PagedResult:
    require_valid_paging(page, page_size)

    query = _live_customers()
    if search_term and search_term.strip():
        term = search_term.strip()
        query = query.filter(
            Q(email__icontains=term) | Q(first_name__icontains=term) | Q(last_name__icontains=term)
        )
    if is_active is not None:
        query = query.filter(is_active=is_active)

    return paginate(query.order_by(["last_name", "first_name"]), page, page_size)


def customers_by_ids(customer_ids) -> list[Customer]:
    ids = [str(cid) for cid in customer_ids]
    if not ids:
        return []
    return _live_customers().filter(id__in=ids).limit(len(ids)).all().items
