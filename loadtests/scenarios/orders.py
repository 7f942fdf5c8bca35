"""Order Service load test scenarios.

OrderLifecycleJourney: register → create products → place order →
Confirmed → Processing → Shipped → Delivered.

OrderCancellationJourney: register → create product → place order →
edit items → Cancelled → delete.
"""

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import order_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import SessionState
from loadtests.scenarios.products import authenticate, create_product


def place_order(client, state: SessionState) -> bool:
    with client.post(
        "/api/orders",
        json=order_data(state.customer_id, state.product_ids),
        headers=state.headers,
        catch_response=True,
        name="POST /api/orders",
    ) as resp:
        if resp.status_code != 201:
            resp.failure(f"Place order failed: {resp.status_code} - {extract_error_detail(resp)}")
            return False
        body = resp.json()
        state.order_id = body["id"]
        state.order_status = body["status"]
        return True


def move_order(client, state: SessionState, status: str) -> None:
    with client.put(
        f"/api/orders/{state.order_id}",
        json={"status": status, "reason": f"Load test: {status}"},
        headers=state.headers,
        catch_response=True,
        name=f"PUT /api/orders/{{id}} [{status}]",
    ) as resp:
        if resp.status_code == 200:
            state.order_status = resp.json()["status"]
        else:
            resp.failure(f"{status} failed: {resp.status_code} - {extract_error_detail(resp)}")


class OrderLifecycleJourney(SequentialTaskSet):
    """Happy-path order from placement to delivery."""

    def on_start(self):
        self.state = SessionState()
        if not authenticate(self.client, self.state):
            self.interrupt()
        for _ in range(2):
            create_product(self.client, self.state, stock=1000)
        if not self.state.product_ids:
            self.interrupt()

    @task
    def place(self):
        if not place_order(self.client, self.state):
            self.interrupt()

    @task
    def view(self):
        with self.client.get(
            f"/api/orders/{self.state.order_id}",
            headers=self.state.headers,
            catch_response=True,
            name="GET /api/orders/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Get order failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def confirm(self):
        move_order(self.client, self.state, "Confirmed")

    @task
    def process(self):
        move_order(self.client, self.state, "Processing")

    @task
    def ship(self):
        move_order(self.client, self.state, "Shipped")

    @task
    def deliver(self):
        move_order(self.client, self.state, "Delivered")

    @task
    def list_mine(self):
        with self.client.get(
            f"/api/orders?customerId={self.state.customer_id}",
            headers=self.state.headers,
            catch_response=True,
            name="GET /api/orders?customerId",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"List orders failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class OrderCancellationJourney(SequentialTaskSet):
    """Order that is edited, cancelled and then removed."""

    def on_start(self):
        self.state = SessionState()
        if not authenticate(self.client, self.state):
            self.interrupt()
        if not create_product(self.client, self.state, stock=1000):
            self.interrupt()

    @task
    def place(self):
        if not place_order(self.client, self.state):
            self.interrupt()

    @task
    def edit_items(self):
        with self.client.put(
            f"/api/orders/{self.state.order_id}",
            json={"items": [{"product_id": self.state.product_ids[0], "quantity": 5}]},
            headers=self.state.headers,
            catch_response=True,
            name="PUT /api/orders/{id} [items]",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Edit items failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def cancel(self):
        move_order(self.client, self.state, "Cancelled")

    @task
    def delete(self):
        with self.client.delete(
            f"/api/orders/{self.state.order_id}",
            headers=self.state.headers,
            catch_response=True,
            name="DELETE /api/orders/{id}",
        ) as resp:
            if resp.status_code != 204:
                resp.failure(f"Delete failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class OrderUser(HttpUser):
    """Simulates customers placing and following orders."""

    tasks = {OrderLifecycleJourney: 3, OrderCancellationJourney: 1}
    wait_time = between(1, 3)
