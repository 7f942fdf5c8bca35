"""Read-side access to products and their stock ledger."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.query import Q

from products.product.product import Product
from products.product.stock_movement import StockMovement
from shared.paging import PagedResult, normalize_paging, paginate, scan

# Rows fetched per round trip by queries that filter in memory
_SCAN_BATCH = 100


def _live_products():
    return current_domain.repository_for(Product)._dao.query.filter(is_deleted=False)


def get_product(product_id) -> Product:
    """Return the product, treating soft-deleted records as missing."""
    try:
        product = current_domain.repository_for(Product).get(str(product_id))
    except ObjectNotFoundError:
        product = None
    if product is None or product.is_deleted:
        raise ObjectNotFoundError(f"Product with id {product_id} was not found")
    return product


def find_by_sku(sku) -> Product | None:
    matches = _live_products().filter(sku=sku.strip().upper()).all().items
    return matches[0] if matches else None


def list_products(
    page: int | None = 1,
    page_size: int | None = 10,
    category: str | None = None,
    search_term: str | None = None,
    is_active: bool | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
    low_stock: bool | None = None,
) -> PagedResult:
    page, page_size = normalize_paging(page, page_size)

    query = _live_products()
    if category:
        query = query.filter(category__icontains=category.strip())
    if search_term and search_term.strip():
        term = search_term.strip()
        query = query.filter(Q(name__icontains=term) | Q(sku__icontains=term) | Q(category__icontains=term))
    if is_active is not None:
        query = query.filter(is_active=is_active)
    if min_price is not None:
        query = query.filter(price__gte=min_price)
    if max_price is not None:
        query = query.filter(price__lte=max_price)

    query = query.order_by("name")

    if low_stock:
        # stock <= minimum_stock compares two columns, so it is applied after fetching
        matches = [p for p in scan(query, _SCAN_BATCH) if p.is_low_stock]
        start = (page - 1) * page_size
        return PagedResult(
            items=matches[start : start + page_size],
            total_count=len(matches),
            current_page=page,
            page_size=page_size,
        )

    return paginate(query, page, page_size)


def products_by_ids(product_ids) -> list[Product]:
    ids = [str(pid) for pid in product_ids]
    if not ids:
        return []
    return _live_products().filter(id__in=ids).limit(len(ids)).all().items


def low_stock_products() -> list[Product]:
    """Active products at or below their minimum stock, lowest stock first."""
    query = _live_products().filter(is_active=True).order_by(["stock", "name"])
    return [p for p in scan(query, _SCAN_BATCH) if p.is_low_stock]


def stock_movements(product_id, page: int | None = 1, page_size: int | None = 20) -> PagedResult:
    page, page_size = normalize_paging(page, page_size, default_size=20)
    get_product(product_id)
    query = (
        current_domain.repository_for(StockMovement)
        ._dao.query.filter(product_id=str(product_id))
        .order_by("-created_at")
    )
    return paginate(query, page, page_size)
