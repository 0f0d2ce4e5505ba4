"""Order repository interface.

Extends ``IRepository[Order]`` with the reads and conditional writes
needed by ``OrderService``.

The Service Layer depends exclusively on this contract (DIP).  Look-ups
return ``None`` or an empty list for unknown IDs; deciding what a missing
order means is left to the service.  Implementations never call the
freight API: the price they write is the one they are given.
"""

from __future__ import annotations

from abc import abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from modules.core.repositories.interfaces import IRepository
from modules.orders.constants import RECENT_ORDERS_LIMIT

if TYPE_CHECKING:
    from modules.orders.constants import OrderStatus
    from modules.orders.models import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root."""

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Order:
        """Insert an order.

        ``data`` must include ``customer_id``, ``origin``, ``destination``
        and ``freight_value``; ``status`` defaults to ``PROCESSING``.
        """

    @abstractmethod
    def get_recent(self, limit: int = RECENT_ORDERS_LIMIT) -> List[Order]:
        """Return the ``limit`` most recent orders, newest first."""

    @abstractmethod
    def get_by_customer_id(self, customer_id: int) -> List[Order]:
        """Return every order of a customer, newest first."""

    @abstractmethod
    def update_route(
        self,
        id: int,
        origin: str,
        destination: str,
        freight_value: Decimal,
        expected_version: Optional[int] = None,
    ) -> Optional[Order]:
        """Write a new route and its price; status and ``created_at`` are kept."""

    @abstractmethod
    def update_status(
        self,
        id: int,
        status: OrderStatus,
        expected_version: Optional[int] = None,
    ) -> Optional[Order]:
        """Write only the status of an order."""
