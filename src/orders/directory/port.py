"""Lookup ports for the services an order depends on.

Orders never reads another service's storage. Customer existence and product
prices and stock come through these interfaces, so the adapters can be swapped
between in-memory (tests), in-process (single deployment) and HTTP (separate
services) without touching the command handlers.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class CustomerSnapshot:
    """What the Order service needs to know about a customer."""

    id: str
    email: str
    full_name: str
    is_active: bool = True


@dataclass(frozen=True)
class ProductSnapshot:
    """Catalog view of a product at lookup time."""

    id: str
    name: str
    sku: str
    price: float
    stock: int
    is_active: bool = True


class CustomerDirectory(ABC):
    @abstractmethod
    def find(self, customer_id: str) -> CustomerSnapshot | None:
        """Return the customer, or None when it does not exist."""
        ...


class ProductCatalog(ABC):
    @abstractmethod
    def find(self, product_id: str) -> ProductSnapshot | None:
        """Return the product, or None when it does not exist."""
        ...

    def find_many(self, product_ids) -> dict[str, ProductSnapshot]:
        """Look up several products at once, keyed by id. Missing ids are omitted."""
        found = {}
        for product_id in dict.fromkeys(str(pid) for pid in product_ids):
            snapshot = self.find(product_id)
            if snapshot is not None:
                found[product_id] = snapshot
        return found
