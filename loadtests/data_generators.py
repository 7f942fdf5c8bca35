"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the services' validation rules
(email format, name characters, password policy, SKU pattern) and match the
field names of the API's Pydantic request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker()

PASSWORD = "LoadT3st!Passw0rd"

# ---------- Customer Service ----------


def valid_email() -> str:
    local = fake.user_name()[:20]
    return f"{local}.{uuid.uuid4().hex[:6]}@{fake.free_email_domain()}"


def valid_phone() -> str:
    """Generate phones matching ^\\+?[\\d\\s\\-()]+$"""
    return f"+1-{random.randint(200, 999)}-{random.randint(200, 999)}-{random.randint(1000, 9999)}"


def customer_name() -> tuple[str, str]:
    """Letters and spaces only, as the name rule requires."""
    first = "".join(c for c in fake.first_name() if c.isalpha() or c == " ")[:100] or "Load"
    last = "".join(c for c in fake.last_name() if c.isalpha() or c == " ")[:100] or "Tester"
    return first, last


def registration_data() -> dict:
    first, last = customer_name()
    return {
        "email": valid_email(),
        "password": PASSWORD,
        "first_name": first,
        "last_name": last,
        "phone_number": valid_phone(),
        "date_of_birth": fake.date_of_birth(minimum_age=18, maximum_age=80).isoformat(),
    }


def address_data(is_default: bool = False) -> dict:
    return {
        "address_type": random.choice(["Billing", "Shipping", "Both"]),
        "address_line1": fake.street_address()[:255],
        "city": fake.city()[:100],
        "state": fake.state_abbr(),
        "zip_code": fake.zipcode()[:20],
        "country": "US",
        "is_default": is_default,
    }


# ---------- Product Service ----------


def valid_sku(prefix: str = "LT") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8].upper()}"


def product_data(stock: int | None = None) -> dict:
    word = fake.word().capitalize()
    return {
        "name": f"{word} {fake.word()}"[:255],
        "sku": valid_sku("PROD"),
        "price": round(random.uniform(5.0, 500.0), 2),
        "stock": stock if stock is not None else random.randint(50, 500),
        "minimum_stock": random.randint(1, 10),
        "category": random.choice(["Electronics", "Accessories", "Furniture", "Books"]),
        "brand": fake.company()[:100],
        "description": fake.sentence()[:1000],
    }


def stock_adjustment() -> dict:
    quantity = random.choice([-3, -2, -1, 5, 10, 20])
    return {"quantity": quantity, "reason": "Sale" if quantity < 0 else "Restock"}


# ---------- Order Service ----------


def order_data(customer_id: str, product_ids: list[str]) -> dict:
    chosen = random.sample(product_ids, k=min(len(product_ids), random.randint(1, 3)))
    return {
        "customer_id": customer_id,
        "items": [{"product_id": pid, "quantity": random.randint(1, 3)} for pid in chosen],
        "notes": fake.sentence()[:500],
        "shipping_address": fake.street_address()[:255],
        "shipping_city": fake.city()[:100],
        "shipping_zip_code": fake.zipcode()[:20],
        "shipping_country": "US",
    }


# ---------- Logging Service ----------


def log_entry_data() -> dict:
    return {
        "level": random.choice(["Debug", "Information", "Warning", "Error"]),
        "message": fake.sentence()[:2000],
        "service_name": random.choice(["CustomerService", "OrderService", "ProductService"]),
        "category": random.choice(["Http", "Database", "Events"]),
        "correlation_id": uuid.uuid4().hex,
        "properties": {"latency_ms": random.randint(1, 2000)},
    }
