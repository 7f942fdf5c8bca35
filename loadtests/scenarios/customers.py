"""Customer Service load test scenarios.

CustomerJourney: register → profile → update profile → add address →
set default → login again.
"""

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import PASSWORD, address_data, customer_name, registration_data, valid_phone
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import SessionState


class CustomerJourney(SequentialTaskSet):
    """Full customer lifecycle through the Customer Service."""

    def on_start(self):
        self.state = SessionState()
        self.email = None
        self.address_id = None

    @task
    def register(self):
        payload = registration_data()
        self.email = payload["email"]
        with self.client.post(
            "/api/customers/register",
            json=payload,
            catch_response=True,
            name="POST /api/customers/register",
        ) as resp:
            if resp.status_code == 201:
                body = resp.json()
                self.state.customer_id = body["id"]
                self.state.token = body["token"]
            else:
                resp.failure(f"Register failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def view_profile(self):
        with self.client.get(
            "/api/customers/profile",
            headers=self.state.headers,
            catch_response=True,
            name="GET /api/customers/profile",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Profile failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def update_profile(self):
        first, last = customer_name()
        with self.client.put(
            "/api/customers/profile",
            json={"first_name": first, "last_name": last, "phone_number": valid_phone()},
            headers=self.state.headers,
            catch_response=True,
            name="PUT /api/customers/profile",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Update profile failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def add_address(self):
        with self.client.post(
            f"/api/customers/{self.state.customer_id}/addresses",
            json=address_data(),
            headers=self.state.headers,
            catch_response=True,
            name="POST /api/customers/{id}/addresses",
        ) as resp:
            if resp.status_code == 201:
                self.address_id = resp.json()["id"]
            else:
                resp.failure(f"Add address failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def set_default_address(self):
        if not self.address_id:
            return
        with self.client.put(
            f"/api/customers/{self.state.customer_id}/addresses/{self.address_id}/default",
            headers=self.state.headers,
            catch_response=True,
            name="PUT /api/customers/{id}/addresses/{address_id}/default",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Set default failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def login(self):
        with self.client.post(
            "/api/customers/login",
            json={"email": self.email, "password": PASSWORD},
            catch_response=True,
            name="POST /api/customers/login",
        ) as resp:
            if resp.status_code == 200:
                self.state.token = resp.json()["token"]
            else:
                resp.failure(f"Login failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class CustomerUser(HttpUser):
    """Simulates customers signing up and maintaining their profile."""

    tasks = [CustomerJourney]
    wait_time = between(1, 3)
