"""Product Service load test scenarios.

CatalogueJourney: create product → adjust stock → read movements →
change price → validate stock → low-stock report.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import product_data, registration_data, stock_adjustment
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import SessionState


def authenticate(client, state: SessionState) -> bool:
    """Register a throwaway customer and keep its bearer token."""
    with client.post(
        "/api/customers/register",
        json=registration_data(),
        catch_response=True,
        name="POST /api/customers/register",
    ) as resp:
        if resp.status_code != 201:
            resp.failure(f"Register failed: {resp.status_code} - {extract_error_detail(resp)}")
            return False
        body = resp.json()
        state.customer_id = body["id"]
        state.token = body["token"]
        return True


def create_product(client, state: SessionState, stock: int | None = None) -> str | None:
    with client.post(
        "/api/products",
        json=product_data(stock=stock),
        headers=state.headers,
        catch_response=True,
        name="POST /api/products",
    ) as resp:
        if resp.status_code != 201:
            resp.failure(f"Create product failed: {resp.status_code} - {extract_error_detail(resp)}")
            return None
        product_id = resp.json()["id"]
        state.product_ids.append(product_id)
        return product_id


class CatalogueJourney(SequentialTaskSet):
    """Product maintenance through the Product Service."""

    def on_start(self):
        self.state = SessionState()
        if not authenticate(self.client, self.state):
            self.interrupt()

    @task
    def create(self):
        if not create_product(self.client, self.state):
            self.interrupt()

    @task
    def adjust_stock(self):
        product_id = self.state.product_ids[-1]
        with self.client.put(
            f"/api/products/{product_id}/stock",
            json=stock_adjustment(),
            headers=self.state.headers,
            catch_response=True,
            name="PUT /api/products/{id}/stock",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Stock update failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def read_movements(self):
        product_id = self.state.product_ids[-1]
        with self.client.get(
            f"/api/products/{product_id}/stock-movements",
            headers=self.state.headers,
            catch_response=True,
            name="GET /api/products/{id}/stock-movements",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Movements failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def change_price(self):
        product_id = self.state.product_ids[-1]
        with self.client.put(
            f"/api/products/{product_id}",
            json={"price": round(random.uniform(5.0, 500.0), 2), "reason": "Load test repricing"},
            headers=self.state.headers,
            catch_response=True,
            name="PUT /api/products/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Update failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def validate_stock(self):
        with self.client.post(
            "/api/products/validate-stock",
            json={"product_id": self.state.product_ids[-1], "required_quantity": random.randint(1, 20)},
            headers=self.state.headers,
            catch_response=True,
            name="POST /api/products/validate-stock",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Validate stock failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def low_stock(self):
        with self.client.get(
            "/api/products/low-stock",
            headers=self.state.headers,
            catch_response=True,
            name="GET /api/products/low-stock",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Low stock failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class ProductUser(HttpUser):
    """Simulates back-office staff maintaining the catalogue."""

    tasks = [CatalogueJourney]
    wait_time = between(1, 3)
