"""Order service layer (Use Cases).

Orchestrates order creation, route changes, status management and
removal.  The service is the only place where a freight quote is
requested; repositories just write the price they are handed.

Business rules enforced:
- An order can only be created for an existing customer.
- Every route written (create or update) carries a freshly quoted price;
  a failed quote raises ``FreightCalculationFailed`` and nothing is written.
- Route changes never touch ``status`` or ``created_at``.
- Status transitions are validated against ``VALID_TRANSITIONS``.
- Writes lost to a concurrent request surface as ``ConcurrencyConflict``.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any, List, Optional

import structlog

from modules.orders.constants import RECENT_ORDERS_LIMIT, OrderStatus
from modules.orders.exceptions import (
    CustomerNotFound,
    FreightCalculationFailed,
    InvalidOrderStatus,
    OrderNotFound,
)
from modules.shipping.dtos import FreightQuoteRequestDTO

if TYPE_CHECKING:
    from modules.customers.repositories.interfaces import ICustomerRepository
    from modules.orders.dtos import CreateOrderDTO, UpdateOrderDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.shipping.client import ShippingClient

CENTS = Decimal("0.01")


class OrderService:
    """Application service for Order use-cases.

    Receives repositories, the freight client and a logger via
    constructor injection (DIP).  Queries and status changes never quote,
    so a service without a freight client can serve them.
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        customer_repository: ICustomerRepository,
        shipping_client: Optional[ShippingClient] = None,
        logger: Any = None,
    ) -> None:
        self._order_repo = order_repository
        self._customer_repo = customer_repository
        self._shipping = shipping_client
        self._log = logger or structlog.get_logger(__name__)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_order(
        self, dto: CreateOrderDTO, *, timeout: Optional[float] = None
    ) -> Order:
        """Create a new order priced with a fresh freight quote.

        Steps:
        1. Validate the customer exists.
        2. Quote the freight for ``origin`` → ``destination``.
        3. Persist the order as ``PROCESSING`` with the quoted price.

        Raises:
            CustomerNotFound: customer does not exist.
            FreightCalculationFailed: the quote failed (nothing is persisted).
        """
        log = self._log.bind(customer_id=dto.customer_id)
        log.info("order.creation_started")

        customer = self._customer_repo.get_by_id(dto.customer_id)
        if not customer:
            log.warning("order.customer_not_found")
            raise CustomerNotFound(f"Customer {dto.customer_id} not found.")

        freight_value = self._quote(dto.origin, dto.destination, log, timeout)

        order = self._order_repo.create(
            {
                "customer_id": customer.id,
                "origin": dto.origin,
                "destination": dto.destination,
                "status": OrderStatus.PROCESSING,
                "freight_value": freight_value,
            }
        )
        log.info(
            "order.created",
            order_id=order.id,
            freight_value=str(freight_value),
        )
        return order

    def update_order(
        self,
        order_id: int,
        dto: UpdateOrderDTO,
        *,
        timeout: Optional[float] = None,
    ) -> Order:
        """Move an order to a new route and re-price it.

        The version read before quoting guards the write, so a concurrent
        change made while the quote was in flight is not overwritten.

        Raises:
            OrderNotFound: order does not exist (no quote is requested).
            FreightCalculationFailed: the quote failed (order unchanged).
            ConcurrencyConflict: the order changed while being updated.
        """
        log = self._log.bind(order_id=order_id)
        order = self._order_repo.get_by_id(order_id)
        if not order:
            log.warning("order.not_found")
            raise OrderNotFound(f"Order {order_id} not found.")

        freight_value = self._quote(dto.origin, dto.destination, log, timeout)

        updated = self._order_repo.update_route(
            order.id,
            dto.origin,
            dto.destination,
            freight_value,
            expected_version=order.version,
        )
        if updated is None:
            raise OrderNotFound(f"Order {order_id} not found.")

        log.info(
            "order.route_updated",
            origin=dto.origin,
            destination=dto.destination,
            freight_value=str(freight_value),
        )
        return updated

    def update_status(self, order_id: int, new_status: int) -> Order:
        """Transition an order to a new status.

        Only ``status`` is written; route and price are left untouched.

        Raises:
            OrderNotFound: order does not exist.
            InvalidOrderStatus: unknown status or transition not allowed.
            ConcurrencyConflict: the order changed while being updated.
        """
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")

        log = self._log.bind(
            order_id=order_id,
            current_status=order.status,
            new_status=new_status,
        )

        try:
            target = OrderStatus(new_status)
        except ValueError:
            log.warning("order.unknown_status")
            raise InvalidOrderStatus(f"Unknown order status {new_status}.")

        if not order.can_transition_to(target):
            log.warning("order.invalid_transition")
            raise InvalidOrderStatus(
                f"Cannot transition from {OrderStatus(order.status).label} "
                f"to {target.label}."
            )

        updated = self._order_repo.update_status(
            order.id, target, expected_version=order.version
        )
        if updated is None:
            raise OrderNotFound(f"Order {order_id} not found.")

        log.info("order.status_updated")
        return updated

    def delete_order(self, order_id: int) -> None:
        """Delete an order.

        Raises:
            OrderNotFound: order does not exist.
            ConcurrencyConflict: the order was modified or removed concurrently.
        """
        log = self._log.bind(order_id=order_id)
        order = self._order_repo.get_by_id(order_id)
        if not order:
            log.warning("order.delete_not_found")
            raise OrderNotFound(f"Order {order_id} not found.")
        self._order_repo.delete(order)
        log.info("order.removed")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_orders(self, limit: int = RECENT_ORDERS_LIMIT) -> List[Order]:
        """Return the most recent orders (newest first, capped at ``limit``)."""
        return self._order_repo.get_recent(limit)

    def get_order_by_id(self, order_id: int) -> Optional[Order]:
        """Return the order or ``None``; never raises for unknown IDs."""
        return self._order_repo.get_by_id(order_id)

    def get_orders_by_customer_id(self, customer_id: int) -> List[Order]:
        """Return every order of a customer.

        Raises:
            CustomerNotFound: customer does not exist.
        """
        if not self._customer_repo.get_by_id(customer_id):
            raise CustomerNotFound(f"Customer {customer_id} not found.")
        return self._order_repo.get_by_customer_id(customer_id)

    # ------------------------------------------------------------------
    # Freight
    # ------------------------------------------------------------------

    def _quote(
        self,
        origin: str,
        destination: str,
        log: Any,
        timeout: Optional[float] = None,
    ) -> Decimal:
        if self._shipping is None:
            raise RuntimeError("OrderService was built without a shipping client.")
        result = self._shipping.calculate_freight(
            FreightQuoteRequestDTO(origin=origin, destination=destination),
            timeout=timeout,
        )
        if result.is_failure:
            log.warning(
                "order.freight_calculation_failed",
                status_code=result.status_code,
                error=result.error_message,
            )
            raise FreightCalculationFailed(result.status_code, result.error_message)
        return result.value.shipping_price.quantize(CENTS)
