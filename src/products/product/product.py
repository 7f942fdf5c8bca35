"""Product aggregate root with its price history."""

import re
from datetime import datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Integer, String

from products.domain import products
from products.product.events import (
    LowStockDetected,
    ProductCreated,
    ProductDeleted,
    ProductPriceChanged,
    ProductStockUpdated,
    ProductUpdated,
)
from shared.errors import BusinessRuleError

_SKU_PATTERN = re.compile(r"^[A-Za-z0-9-]+$")

# Attributes UpdateProduct may overwrite directly
EDITABLE_FIELDS = (
    "name",
    "sku",
    "description",
    "category",
    "brand",
    "weight",
    "dimensions",
    "image_url",
    "tags",
    "minimum_stock",
    "is_active",
)


@products.entity(part_of="Product")
class PriceChange:
    """One entry in a product's price history."""

    previous_price: Float(required=True)
    new_price: Float(required=True)
    effective_date: DateTime(default=datetime.now)
    user_id: String(max_length=50)
    reason: String(max_length=255)


@products.aggregate
class Product:
    """A sellable item with its price and on-hand stock.

    Stock never goes negative; every change to it is mirrored by a
    StockMovement record written in the same unit of work.
    """

    name: String(required=True, max_length=255)
    sku: String(required=True, max_length=100)
    description: String(max_length=1000)
    price: Float(required=True, min_value=0.0)
    stock: Integer(default=0, min_value=0)
    minimum_stock: Integer(default=0, min_value=0)
    category: String(required=True, max_length=100)
    brand: String(max_length=100)
    weight: Float(min_value=0.0)
    dimensions: String(max_length=50)
    image_url: String(max_length=500)
    tags: String(max_length=500)
    is_active: Boolean(default=True)
    price_history: HasMany(PriceChange)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)
    is_deleted: Boolean(default=False)
    deleted_at: DateTime()

    @invariant.post
    def sku_must_be_alphanumeric(self):
        if self.sku and not _SKU_PATTERN.match(self.sku):
            raise ValidationError({"sku": ["SKU can only contain letters, numbers and hyphens"]})

    @invariant.post
    def price_has_at_most_two_decimals(self):
        if self.price is not None and round(self.price, 2) != self.price:
            raise ValidationError({"price": ["Price can have at most 2 decimal places"]})

    @property
    def is_low_stock(self):
        return self.stock <= self.minimum_stock

    @classmethod
    def create(
        cls,
        name,
        sku,
        price,
        category,
        stock=0,
        minimum_stock=0,
        description=None,
        brand=None,
        weight=None,
        dimensions=None,
        image_url=None,
        tags=None,
    ):
        now = datetime.now()
        product = cls(
            name=name,
            sku=sku.strip().upper() if sku else sku,
            price=price,
            stock=stock,
            minimum_stock=minimum_stock,
            category=category,
            description=description,
            brand=brand,
            weight=weight,
            dimensions=dimensions,
            image_url=image_url,
            tags=tags,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=product.name,
                sku=product.sku,
                category=product.category,
                price=product.price,
                stock=product.stock,
                created_at=now,
            )
        )
        return product

    def update_details(self, **changes):
        """Apply the provided attribute changes. Unknown keys are ignored."""
        changes = {k: v for k, v in changes.items() if k in EDITABLE_FIELDS and v is not None}
        if "sku" in changes:
            changes["sku"] = changes["sku"].strip().upper()
        if not changes:
            return

        with atomic_change(self):
            for field, value in changes.items():
                setattr(self, field, value)
            self.updated_at = datetime.now()

        self.raise_(
            ProductUpdated(
                product_id=self.id,
                name=self.name,
                sku=self.sku,
                category=self.category,
                is_active=str(self.is_active),
                updated_at=self.updated_at,
            )
        )

    def change_price(self, new_price, user_id=None, reason=None):
        if new_price == self.price:
            return

        previous_price = self.price
        now = datetime.now()
        with atomic_change(self):
            self.price = new_price
            self.add_price_history(
                PriceChange(
                    previous_price=previous_price,
                    new_price=new_price,
                    effective_date=now,
                    user_id=user_id,
                    reason=reason,
                )
            )
            self.updated_at = now

        self.raise_(
            ProductPriceChanged(
                product_id=self.id,
                previous_price=previous_price,
                new_price=new_price,
                reason=reason,
                changed_at=now,
            )
        )

    def adjust_stock(self, quantity, reason, order_id=None):
        """Move stock by ``quantity`` (negative to remove). Returns ``(previous, new)``."""
        previous_stock = self.stock
        new_stock = previous_stock + quantity
        if new_stock < 0:
            raise BusinessRuleError(
                f"Insufficient stock for product {self.id}. Available: {previous_stock}, Requested: {-quantity}"
            )

        now = datetime.now()
        self.stock = new_stock
        self.updated_at = now

        self.raise_(
            ProductStockUpdated(
                product_id=self.id,
                previous_stock=previous_stock,
                new_stock=new_stock,
                quantity=quantity,
                reason=reason,
                order_id=order_id,
                updated_at=now,
            )
        )
        if quantity < 0 and self.is_low_stock:
            self.raise_(
                LowStockDetected(
                    product_id=self.id,
                    sku=self.sku,
                    current_stock=new_stock,
                    minimum_stock=self.minimum_stock,
                    detected_at=now,
                )
            )
        return previous_stock, new_stock

    def has_sufficient_stock(self, quantity):
        return self.stock >= quantity

    def soft_delete(self):
        now = datetime.now()
        with atomic_change(self):
            self.is_deleted = True
            self.is_active = False
            self.deleted_at = now
            self.updated_at = now
        self.raise_(ProductDeleted(product_id=self.id, sku=self.sku, deleted_at=now))
