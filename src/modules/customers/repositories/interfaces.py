"""Customer repository interface.

Extends ``IRepository[Customer]`` with the listing and persistence
operations needed by ``CustomerService``.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.customers.models import Customer


class ICustomerRepository(IRepository["Customer"]):
    """Repository contract for the Customer aggregate."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Customer]:
        """List customers with optional filters."""

    @abstractmethod
    def save(self, entity: Customer) -> Customer:
        """Persist (create or update) a customer."""

    @abstractmethod
    def has_orders(self, entity: Customer) -> bool:
        """Return ``True`` if any order references the customer."""
