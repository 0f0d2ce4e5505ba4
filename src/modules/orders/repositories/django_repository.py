"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.

Writes on an existing order are conditional on its ``version`` column
(``UPDATE ... WHERE id = %s AND version = %s``).  When ``expected_version``
is given it is the version the caller read; otherwise the current row is
read first.  A write matching zero rows raises ``ConcurrencyConflict``.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional

import structlog
from django.db import transaction

from modules.core.exceptions import ConcurrencyConflict
from modules.orders.constants import RECENT_ORDERS_LIMIT, OrderStatus
from modules.orders.models import Order
from modules.orders.repositories.interfaces import IOrderRepository


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    def __init__(self, logger: Any = None) -> None:
        self._log = logger or structlog.get_logger(__name__)

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    @transaction.atomic
    def create(self, data: Dict[str, Any]) -> Order:
        """Insert an order; the database assigns ``id`` and ``created_at``."""
        order = Order(
            customer_id=data["customer_id"],
            origin=data["origin"],
            destination=data["destination"],
            freight_value=data["freight_value"],
            status=data.get("status", OrderStatus.PROCESSING),
        )
        order.save()
        self._log.info("order.inserted", order_id=order.id)
        return order

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: int) -> Optional[Order]:
        """Retrieve an order with its customer (single JOIN).

        Returns ``None`` for non-existent or malformed IDs.
        """
        try:
            return Order.objects.select_related("customer").filter(id=id).first()
        except (TypeError, ValueError):
            return None

    def get_recent(self, limit: int = RECENT_ORDERS_LIMIT) -> List[Order]:
        queryset = Order.objects.select_related("customer").order_by(
            "-created_at", "-id"
        )
        return list(queryset[:limit])

    def get_by_customer_id(self, customer_id: int) -> List[Order]:
        try:
            queryset = (
                Order.objects.select_related("customer")
                .filter(customer_id=customer_id)
                .order_by("-created_at", "-id")
            )
            return list(queryset)
        except (TypeError, ValueError):
            return []

    # ------------------------------------------------------------------
    # Conditional writes
    # ------------------------------------------------------------------

    def update_route(
        self,
        id: int,
        origin: str,
        destination: str,
        freight_value: Decimal,
        expected_version: Optional[int] = None,
    ) -> Optional[Order]:
        return self._versioned_write(
            id,
            expected_version,
            origin=origin,
            destination=destination,
            freight_value=freight_value,
        )

    def update_status(
        self,
        id: int,
        status: OrderStatus,
        expected_version: Optional[int] = None,
    ) -> Optional[Order]:
        return self._versioned_write(id, expected_version, status=status)

    @transaction.atomic
    def delete(self, entity: Order) -> None:
        """Hard-delete an order.

        Raises:
            ConcurrencyConflict: the row was modified or removed concurrently.
        """
        deleted = Order.versioned_delete(entity.pk, entity.version)
        if not deleted:
            self._log.warning("order.concurrent_delete", order_id=entity.pk)
            raise ConcurrencyConflict(
                "Delete failed due to a concurrent modification. Try again."
            )
        self._log.info("order.deleted", order_id=entity.pk)

    @transaction.atomic
    def _versioned_write(
        self, id: int, expected_version: Optional[int], **fields: Any
    ) -> Optional[Order]:
        if expected_version is None:
            current = self.get_by_id(id)
            if current is None:
                return None
            expected_version = current.version

        updated = Order.versioned_update(id, expected_version, **fields)
        if not updated:
            self._log.warning(
                "order.concurrent_update",
                order_id=id,
                expected_version=expected_version,
                fields=sorted(fields),
            )
            raise ConcurrencyConflict(
                f"Order {id} was modified by another request. Try again."
            )
        self._log.info("order.updated", order_id=id, fields=sorted(fields))
        return self.get_by_id(id)
