"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance keeps its own state; nothing is shared across
users.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """Tracks a simulated customer from registration to checkout."""

    email: str | None = None
    password: str | None = None
    token: str | None = None
    book_ids: list[str] = field(default_factory=list)
    cart_item_ids: list[str] = field(default_factory=list)
    order_id: str | None = None

    @property
    def headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"}
