"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance keeps its own state so follow-up requests can
reference the ids and token returned by earlier ones.
"""

from dataclasses import dataclass, field


@dataclass
class SessionState:
    """An authenticated customer and what they created."""

    customer_id: str | None = None
    token: str | None = None
    product_ids: list[str] = field(default_factory=list)
    order_id: str | None = None
    order_status: str = "Pending"

    @property
    def headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}
