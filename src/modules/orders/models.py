"""Order model.

Business rules implemented:
- ``freight_value`` always belongs to the current ``origin``/``destination``
  pair; the route is only ever written together with a fresh quote.
- ``created_at`` is set once on insert and never rewritten.
- Customer FK uses PROTECT so a customer with orders cannot be removed.
- Status transitions follow ``VALID_TRANSITIONS`` (enforced at service layer).
"""

from __future__ import annotations

from decimal import Decimal

from django.db import models

from modules.core.models import VersionedModel
from modules.orders.constants import TERMINAL_STATES, VALID_TRANSITIONS, OrderStatus


class Order(VersionedModel):
    """Shipment order: a customer, a route between two CEPs and its freight."""

    customer: models.ForeignKey = models.ForeignKey(
        "customers.Customer",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    origin: models.CharField = models.CharField(max_length=8)
    destination: models.CharField = models.CharField(max_length=8)
    status: models.PositiveSmallIntegerField = models.PositiveSmallIntegerField(
        choices=OrderStatus.choices,
        default=OrderStatus.PROCESSING,
    )
    freight_value: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="orders_created_idx"),
            models.Index(fields=["customer"], name="orders_customer_idx"),
        ]

    # ------------------------------------------------------------------
    # State Machine helpers
    # ------------------------------------------------------------------

    @property
    def is_terminal(self) -> bool:
        """Return ``True`` if the order is in a terminal state."""
        return self.status in TERMINAL_STATES

    def can_transition_to(self, new_status: int) -> bool:
        """Check whether transitioning to *new_status* is valid."""
        allowed = VALID_TRANSITIONS.get(self.status, set())
        return new_status in allowed

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"Order {self.pk} {self.origin}->{self.destination} ({self.get_status_display()})"
