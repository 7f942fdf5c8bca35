"""Tests for the customer/product lookup ports and their adapters."""

from unittest.mock import MagicMock

import pytest
import requests
from orders.directory import (
    get_customer_directory,
    get_product_catalog,
    reset_customer_directory,
    reset_product_catalog,
    set_product_catalog,
)
from orders.directory.http_adapter import HttpCustomerDirectory, HttpProductCatalog
from orders.directory.memory_adapter import InMemoryCustomerDirectory, InMemoryProductCatalog
from orders.directory.port import ProductSnapshot
from shared.security import decode_access_token


def _response(status_code, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.json.return_value = payload
    if not response.ok:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} error")
    return response


class TestFactory:
    def test_defaults_to_in_memory(self):
        assert isinstance(get_customer_directory(), InMemoryCustomerDirectory)
        assert isinstance(get_product_catalog(), InMemoryProductCatalog)

    def test_set_and_reset(self):
        custom = InMemoryProductCatalog()
        set_product_catalog(custom)
        assert get_product_catalog() is custom

        reset_product_catalog()
        assert get_product_catalog() is not custom

    def test_http_adapter_when_url_configured(self, monkeypatch):
        from shared.config import get_settings

        monkeypatch.setenv("CUSTOMER_SERVICE_URL", "http://customers.local")
        get_settings.cache_clear()
        try:
            reset_customer_directory()
            assert isinstance(get_customer_directory(), HttpCustomerDirectory)
        finally:
            get_settings.cache_clear()
            reset_customer_directory()


class TestInMemoryAdapters:
    def test_unregistered_lookups_return_none(self):
        assert InMemoryCustomerDirectory().find("nobody") is None
        assert InMemoryProductCatalog().find("nothing") is None

    def test_find_many_skips_missing(self):
        catalog = InMemoryProductCatalog()
        catalog.register("p-1", name="Mouse", price=25.5)
        found = catalog.find_many(["p-1", "p-2", "p-1"])
        assert list(found) == ["p-1"]
        assert isinstance(found["p-1"], ProductSnapshot)


class TestHttpAdapters:
    def test_customer_lookup(self):
        session = MagicMock()
        session.get.return_value = _response(
            200, {"id": "c-1", "email": "ana@example.com", "full_name": "Ana Lopez", "is_active": True}
        )
        directory = HttpCustomerDirectory("http://customers.local/", session=session)

        snapshot = directory.find("c-1")

        assert snapshot.email == "ana@example.com"
        url = session.get.call_args.args[0]
        assert url == "http://customers.local/api/customers/c-1"
        token = session.get.call_args.kwargs["headers"]["Authorization"].removeprefix("Bearer ")
        assert "service" in decode_access_token(token)["roles"]

    def test_product_lookup(self):
        session = MagicMock()
        session.get.return_value = _response(
            200, {"id": "p-1", "name": "Mouse", "sku": "LOGI-MX-001", "price": 25.5, "stock": 3, "is_active": True}
        )
        snapshot = HttpProductCatalog("http://products.local", session=session).find("p-1")
        assert snapshot == ProductSnapshot(id="p-1", name="Mouse", sku="LOGI-MX-001", price=25.5, stock=3)

    def test_not_found_maps_to_none(self):
        session = MagicMock()
        session.get.return_value = _response(404)
        assert HttpProductCatalog("http://products.local", session=session).find("missing") is None

    def test_server_error_propagates(self):
        session = MagicMock()
        session.get.return_value = _response(503)
        with pytest.raises(requests.HTTPError):
            HttpCustomerDirectory("http://customers.local", session=session).find("c-1")
