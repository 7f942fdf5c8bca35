"""Application tests for product list and lookup queries."""

import pytest
from products.product.creation import CreateProduct
from products.product.details import UpdateProduct
from products.product.queries import list_products, low_stock_products, products_by_ids
from products.product.removal import DeleteProduct
from protean import current_domain

_CATALOG = [
    ("Laptop Dell XPS 13", "DELL-XPS13-001", 1299.99, 25, 5, "Electronics"),
    ("iPhone 15 Pro", "APPLE-IP15P-256", 1199.99, 3, 3, "Electronics"),
    ("Mesa de Oficina", "FURNITURE-DESK-001", 299.99, 8, 2, "Furniture"),
    ("Office Chair", "FURNITURE-CHAIR-001", 149.5, 1, 4, "Furniture"),
]


@pytest.fixture()
def product_ids():
    ids = []
    for name, sku, price, stock, minimum, category in _CATALOG:
        command = CreateProduct(
            name=name, sku=sku, price=price, stock=stock, minimum_stock=minimum, category=category
        )
        ids.append(current_domain.process(command, asynchronous=False))
    return ids


class TestListProducts:
    def test_ordered_by_name(self, product_ids):
        names = [p.name for p in list_products().items]
        assert names == sorted(names)
        assert names[0] == "Laptop Dell XPS 13"

    def test_category_filter_is_case_insensitive(self, product_ids):
        result = list_products(category="furn")
        assert result.total_count == 2

    def test_search_over_name_and_sku(self, product_ids):
        assert [p.sku for p in list_products(search_term="xps").items] == ["DELL-XPS13-001"]
        assert [p.name for p in list_products(search_term="apple").items] == ["iPhone 15 Pro"]

    def test_price_range(self, product_ids):
        result = list_products(min_price=200, max_price=1250)
        assert sorted(p.sku for p in result.items) == ["APPLE-IP15P-256", "FURNITURE-DESK-001"]

    def test_low_stock(self, product_ids):
        result = list_products(low_stock=True)
        assert sorted(p.sku for p in result.items) == ["APPLE-IP15P-256", "FURNITURE-CHAIR-001"]
        assert result.total_count == 2

    def test_active_filter_and_deleted_hidden(self, product_ids):
        current_domain.process(UpdateProduct(product_id=product_ids[0], is_active=False), asynchronous=False)
        current_domain.process(DeleteProduct(product_id=product_ids[1]), asynchronous=False)

        assert list_products().total_count == 3
        assert list_products(is_active=True).total_count == 2

    @pytest.mark.parametrize("page,page_size", [(0, 10), (-3, 0), (1, 500)])
    def test_out_of_range_paging_is_normalized(self, product_ids, page, page_size):
        result = list_products(page=page, page_size=page_size)
        assert result.current_page == 1
        assert result.page_size == 10
        assert result.total_count == 4

    def test_pages_cover_every_product_once(self, product_ids):
        seen = []
        for page in (1, 2):
            seen.extend(p.id for p in list_products(page=page, page_size=3).items)
        assert sorted(seen) == sorted(product_ids)


class TestLookups:
    def test_products_by_ids_skips_unknown(self, product_ids):
        found = products_by_ids([product_ids[2], "unknown"])
        assert [p.sku for p in found] == ["FURNITURE-DESK-001"]

    def test_low_stock_products_ordered_by_stock(self, product_ids):
        assert [p.sku for p in low_stock_products()] == ["FURNITURE-CHAIR-001", "APPLE-IP15P-256"]


class TestLowStockBeyondOneBatch:
    """Low-stock filtering happens in memory, so it must walk every batch."""

    @pytest.fixture(autouse=True)
    def small_batches(self, monkeypatch):
        monkeypatch.setattr("products.product.queries._SCAN_BATCH", 2)

    @pytest.fixture()
    def bulk_catalog(self, product_ids):
        for index in range(5):
            current_domain.process(
                CreateProduct(
                    name=f"Cable {index}", sku=f"CABLE-{index}", price=5.0, stock=1, minimum_stock=2, category="Cables"
                ),
                asynchronous=False,
            )
        # Plenty on hand but below a high minimum: sorts last by stock
        current_domain.process(
            CreateProduct(name="Pallet", sku="PALLET-1", price=50.0, stock=400, minimum_stock=500, category="Bulk"),
            asynchronous=False,
        )

    def test_list_counts_every_low_stock_product(self, bulk_catalog):
        result = list_products(low_stock=True, page=2, page_size=3)
        assert result.total_count == 8
        assert result.total_pages == 3
        assert len(result.items) == 3

    def test_low_stock_products_include_high_stock_with_higher_minimum(self, bulk_catalog):
        found = [p.sku for p in low_stock_products()]
        assert len(found) == 8
        assert found[-1] == "PALLET-1"
