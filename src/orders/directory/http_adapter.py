"""HTTP directory adapters calling the Customer and Product services.

Requests carry a short-lived service token. A 404 from the remote service
means the record does not exist; any other failure propagates.
"""

import requests
import structlog

from orders.directory.port import CustomerDirectory, CustomerSnapshot, ProductCatalog, ProductSnapshot
from shared.security import issue_service_token

logger = structlog.get_logger(__name__)

SERVICE_NAME = "OrderService"


class _ServiceClient:
    def __init__(self, base_url: str, timeout: float = 10.0, session: requests.Session | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def get_json(self, path: str) -> dict | None:
        url = f"{self.base_url}{path}"
        headers = {"Authorization": f"Bearer {issue_service_token(SERVICE_NAME).token}"}
        response = self.session.get(url, headers=headers, timeout=self.timeout)
        if response.status_code == 404:
            return None
        if not response.ok:
            logger.error("Service lookup failed", url=url, status_code=response.status_code)
        response.raise_for_status()
        return response.json()


class HttpCustomerDirectory(CustomerDirectory):
    def __init__(self, base_url, timeout=10.0, session=None):
        self._client = _ServiceClient(base_url, timeout, session)

    def find(self, customer_id):
        data = self._client.get_json(f"/api/customers/{customer_id}")
        if data is None:
            return None
        return CustomerSnapshot(
            id=data["id"],
            email=data["email"],
            full_name=data.get("full_name", ""),
            is_active=data.get("is_active", True),
        )


class HttpProductCatalog(ProductCatalog):
    def __init__(self, base_url, timeout=10.0, session=None):
        self._client = _ServiceClient(base_url, timeout, session)

    def find(self, product_id):
        data = self._client.get_json(f"/api/products/{product_id}")
        if data is None:
            return None
        return ProductSnapshot(
            id=data["id"],
            name=data["name"],
            sku=data["sku"],
            price=float(data["price"]),
            stock=int(data["stock"]),
            is_active=data.get("is_active", True),
        )
