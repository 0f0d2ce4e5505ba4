"""Customer service layer (Use Cases).

Orchestrates business logic for the Customer aggregate, delegating
persistence to the injected ``ICustomerRepository``.

Business rules enforced here:
- Update replaces every writable field.
- Deleting an unknown customer raises ``CustomerNotFound`` (never a no-op).
- A customer that still owns orders cannot be deleted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.db import transaction

from modules.customers.exceptions import CustomerHasOrders, CustomerNotFound
from modules.customers.models import Customer

if TYPE_CHECKING:
    from modules.customers.dtos import CustomerDataDTO
    from modules.customers.repositories.interfaces import ICustomerRepository


class CustomerService:
    """Application service for Customer use-cases.

    Receives an ``ICustomerRepository`` (and optionally a logger) via
    constructor injection (DIP).
    """

    def __init__(self, repository: ICustomerRepository, logger: Any = None) -> None:
        self._repo = repository
        self._log = logger or structlog.get_logger(__name__)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_customer(self, dto: CustomerDataDTO) -> Customer:
        """Create a new customer."""
        customer = Customer(
            name=dto.name,
            address=dto.address,
            phone=dto.phone,
            email=dto.email,
        )
        customer = self._repo.save(customer)
        self._log.info("customer.created", customer_id=customer.id)
        return customer

    @transaction.atomic
    def update_customer(self, id: int, dto: CustomerDataDTO) -> Customer:
        """Replace all writable fields of an existing customer.

        Raises:
            CustomerNotFound: if the customer does not exist.
            ConcurrencyConflict: if the customer changed concurrently.
        """
        customer = self._repo.get_by_id(id)
        if not customer:
            raise CustomerNotFound(f"Customer {id} not found.")

        customer.name = dto.name
        customer.address = dto.address
        customer.phone = dto.phone
        customer.email = dto.email

        customer = self._repo.save(customer)
        self._log.info("customer.updated", customer_id=id)
        return customer

    @transaction.atomic
    def delete_customer(self, id: int) -> None:
        """Delete a customer.

        Raises:
            CustomerNotFound: if the customer does not exist.
            CustomerHasOrders: if orders still reference the customer.
            ConcurrencyConflict: if the customer changed concurrently.
        """
        log = self._log.bind(customer_id=id)
        customer = self._repo.get_by_id(id)
        if not customer:
            log.warning("customer.delete_not_found")
            raise CustomerNotFound(f"Customer {id} not found.")
        if self._repo.has_orders(customer):
            log.warning("customer.delete_has_orders")
            raise CustomerHasOrders(f"Customer {id} has orders and cannot be deleted.")
        self._repo.delete(customer)
        log.info("customer.deleted")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_customers(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> List[Customer]:
        """Return a list of customers, optionally filtered."""
        return self._repo.list(filters)

    def get_customer(self, id: int) -> Customer:
        """Retrieve a single customer by ID.

        Raises:
            CustomerNotFound: if the customer does not exist.
        """
        customer = self._repo.get_by_id(id)
        if not customer:
            raise CustomerNotFound(f"Customer {id} not found.")
        return customer
