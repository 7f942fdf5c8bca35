"""Mixed workload across all four services.

A single user type whose tasks are weighted toward reads, with a steady
trickle of writes: new customers, stock movements, orders and log entries.
"""

import random

from locust import HttpUser, between, task

from loadtests.data_generators import log_entry_data, order_data, stock_adjustment
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import SessionState
from loadtests.scenarios.products import authenticate, create_product


class MixedWorkloadUser(HttpUser):
    """Realistic blend of reads and writes."""

    wait_time = between(0.5, 2)

    def on_start(self):
        self.state = SessionState()
        if authenticate(self.client, self.state):
            create_product(self.client, self.state, stock=10000)

    @task(5)
    def browse_products(self):
        self.client.get(
            f"/api/products?page={random.randint(1, 3)}&pageSize=20",
            headers=self.state.headers,
            name="GET /api/products",
        )

    @task(3)
    def browse_orders(self):
        self.client.get(
            f"/api/orders?customerId={self.state.customer_id}",
            headers=self.state.headers,
            name="GET /api/orders?customerId",
        )

    @task(2)
    def place_order(self):
        if not self.state.product_ids:
            return
        with self.client.post(
            "/api/orders",
            json=order_data(self.state.customer_id, self.state.product_ids),
            headers=self.state.headers,
            catch_response=True,
            name="POST /api/orders",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["id"]
            else:
                resp.failure(f"Place order failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task(1)
    def adjust_stock(self):
        if not self.state.product_ids:
            return
        self.client.put(
            f"/api/products/{random.choice(self.state.product_ids)}/stock",
            json=stock_adjustment(),
            headers=self.state.headers,
            name="PUT /api/products/{id}/stock",
        )

    @task(2)
    def write_log(self):
        self.client.post("/api/logs", json=log_entry_data(), headers=self.state.headers, name="POST /api/logs")

    @task(2)
    def search_logs(self):
        service = random.choice(["CustomerService", "OrderService", "ProductService"])
        self.client.get(
            f"/api/logs/search?serviceName={service}&pageSize=20",
            headers=self.state.headers,
            name="GET /api/logs/search",
        )

    @task(1)
    def health(self):
        self.client.get("/health", name="GET /health")
