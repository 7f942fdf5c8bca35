"""FastAPI endpoints for the Product service."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends, Query, Response
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from products.api.schemas import (
    BatchProductsRequest,
    CreateProductRequest,
    HealthResponse,
    ProductPageResponse,
    ProductResponse,
    StockMovementPageResponse,
    StockMovementResponse,
    StockUpdateResponse,
    UpdateProductRequest,
    UpdateStockRequest,
    ValidateStockRequest,
    ValidationResponse,
)
from products.product.creation import CreateProduct
from products.product.details import UpdateProduct
from products.product.queries import (
    get_product,
    list_products,
    low_stock_products,
    products_by_ids,
    stock_movements,
)
from products.product.removal import DeleteProduct
from products.product.stock import UpdateStock
from shared.security import TokenUser, get_current_user

router = APIRouter(prefix="/api/products", tags=["products"])


def _product(product) -> ProductResponse:
    return ProductResponse(
        id=str(product.id),
        name=product.name,
        sku=product.sku,
        description=product.description,
        price=product.price,
        stock=product.stock,
        minimum_stock=product.minimum_stock,
        category=product.category,
        brand=product.brand,
        weight=product.weight,
        dimensions=product.dimensions,
        image_url=product.image_url,
        tags=product.tags,
        is_active=product.is_active,
        is_low_stock=product.is_low_stock,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def _movement(movement) -> StockMovementResponse:
    return StockMovementResponse(
        id=str(movement.id),
        product_id=str(movement.product_id),
        movement_type=movement.movement_type,
        quantity=movement.quantity,
        previous_stock=movement.previous_stock,
        new_stock=movement.new_stock,
        reason=movement.reason,
        external_reference=movement.external_reference,
        user_id=movement.user_id,
        created_at=movement.created_at,
    )


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(service="ProductService", timestamp=datetime.now(UTC))


@router.get("", response_model=ProductPageResponse)
async def get_products(
    page: int = Query(1),
    page_size: int = Query(10, alias="pageSize"),
    category: str | None = Query(None),
    search_term: str | None = Query(None, alias="searchTerm"),
    is_active: bool | None = Query(None, alias="isActive"),
    min_price: float | None = Query(None, alias="minPrice"),
    max_price: float | None = Query(None, alias="maxPrice"),
    low_stock: bool | None = Query(None, alias="lowStock"),
    user: TokenUser = Depends(get_current_user),
) -> ProductPageResponse:
    result = list_products(
        page=page,
        page_size=page_size,
        category=category,
        search_term=search_term,
        is_active=is_active,
        min_price=min_price,
        max_price=max_price,
        low_stock=low_stock,
    )
    return ProductPageResponse(
        items=[_product(p) for p in result.items],
        total_count=result.total_count,
        current_page=result.current_page,
        page_size=result.page_size,
        total_pages=result.total_pages,
        has_previous=result.has_previous,
        has_next=result.has_next,
    )


@router.post("", status_code=201, response_model=ProductResponse)
async def create_product(body: CreateProductRequest, user: TokenUser = Depends(get_current_user)) -> ProductResponse:
    command = CreateProduct(
        name=body.name,
        sku=body.sku,
        price=body.price,
        category=body.category,
        stock=body.stock,
        minimum_stock=body.minimum_stock,
        description=body.description,
        brand=body.brand,
        weight=body.weight,
        dimensions=body.dimensions,
        image_url=body.image_url,
        tags=body.tags,
        user_id=user.id,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return _product(get_product(product_id))


@router.get("/low-stock", response_model=list[ProductResponse])
async def get_low_stock(user: TokenUser = Depends(get_current_user)) -> list[ProductResponse]:
    return [_product(p) for p in low_stock_products()]


@router.post("/validate-stock", response_model=ValidationResponse)
async def validate_stock(body: ValidateStockRequest, user: TokenUser = Depends(get_current_user)) -> ValidationResponse:
    try:
        product = get_product(body.product_id)
    except ObjectNotFoundError:
        return ValidationResponse(is_valid=False, message="Product not found")

    if not product.has_sufficient_stock(body.required_quantity):
        return ValidationResponse(
            is_valid=False,
            message=f"Insufficient stock. Available: {product.stock}, Required: {body.required_quantity}",
            data={"available": product.stock, "required": body.required_quantity},
        )
    return ValidationResponse(
        is_valid=True,
        message=f"Stock available: {product.stock}",
        data={"available": product.stock, "required": body.required_quantity},
    )


@router.post("/batch", response_model=list[ProductResponse])
async def get_products_batch(
    body: BatchProductsRequest,
    user: TokenUser = Depends(get_current_user),
) -> list[ProductResponse]:
    return [_product(p) for p in products_by_ids(body.product_ids)]


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product_by_id(product_id: str, user: TokenUser = Depends(get_current_user)) -> ProductResponse:
    return _product(get_product(product_id))


@router.get("/{product_id}/validate", response_model=ValidationResponse)
async def validate_product(product_id: str, user: TokenUser = Depends(get_current_user)) -> ValidationResponse:
    try:
        product = get_product(product_id)
    except ObjectNotFoundError:
        return ValidationResponse(is_valid=False, message="Product not found")
    return ValidationResponse(is_valid=True, message="Product exists", data=_product(product).model_dump(mode="json"))


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    body: UpdateProductRequest,
    user: TokenUser = Depends(get_current_user),
) -> ProductResponse:
    command = UpdateProduct(
        product_id=product_id,
        **body.model_dump(exclude_none=True),
        user_id=user.id,
    )
    current_domain.process(command, asynchronous=False)
    return _product(get_product(product_id))


@router.delete("/{product_id}", status_code=204)
async def delete_product(product_id: str, user: TokenUser = Depends(get_current_user)) -> Response:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return Response(status_code=204)


@router.put("/{product_id}/stock", response_model=StockUpdateResponse)
async def update_stock(
    product_id: str,
    body: UpdateStockRequest,
    user: TokenUser = Depends(get_current_user),
) -> StockUpdateResponse:
    command = UpdateStock(
        product_id=product_id,
        quantity=body.quantity,
        reason=body.reason,
        external_reference=body.external_reference,
        user_id=user.id,
    )
    new_stock = current_domain.process(command, asynchronous=False)
    return StockUpdateResponse(product_id=product_id, new_stock=new_stock)


@router.get("/{product_id}/stock-movements", response_model=StockMovementPageResponse)
async def get_stock_movements(
    product_id: str,
    page: int = Query(1),
    page_size: int = Query(20, alias="pageSize"),
    user: TokenUser = Depends(get_current_user),
) -> StockMovementPageResponse:
    result = stock_movements(product_id, page=page, page_size=page_size)
    return StockMovementPageResponse(
        items=[_movement(m) for m in result.items],
        total_count=result.total_count,
        current_page=result.current_page,
        page_size=result.page_size,
        total_pages=result.total_pages,
        has_previous=result.has_previous,
        has_next=result.has_next,
    )
