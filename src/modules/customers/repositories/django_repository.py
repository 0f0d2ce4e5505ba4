"""Django ORM implementation of the Customer repository.

Satisfies ``ICustomerRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: look-ups return ``None``
instead of raising; the Service Layer decides how to translate a missing
entity into an API response.  Writes on an existing row are conditional
on its ``version`` and raise ``ConcurrencyConflict`` when they lose a race.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.db import transaction

from modules.core.exceptions import ConcurrencyConflict
from modules.customers.models import Customer
from modules.customers.repositories.interfaces import ICustomerRepository

_UPDATABLE_FIELDS = ("name", "address", "phone", "email")


class CustomerDjangoRepository(ICustomerRepository):
    """Concrete Customer repository backed by Django ORM."""

    def __init__(self, logger: Any = None) -> None:
        self._log = logger or structlog.get_logger(__name__)

    def get_by_id(self, id: int) -> Optional[Customer]:
        """Retrieve a customer by primary key.

        Returns ``None`` for non-existent or malformed IDs.
        """
        try:
            return Customer.objects.filter(id=id).first()
        except (TypeError, ValueError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Customer]:
        """List customers with optional Django ORM look-ups.

        Examples of valid filters::

            {"name__icontains": "silva"}
            {"email": "ana@example.com"}
        """
        queryset = Customer.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    @transaction.atomic
    def save(self, entity: Customer) -> Customer:
        """Persist a customer.

        New rows are inserted; existing rows are updated only if nobody
        else wrote them since ``entity`` was read.
        """
        if entity.pk is None:
            entity.save()
            self._log.info("customer.saved", customer_id=entity.id, is_new=True)
            return entity

        fields = {name: getattr(entity, name) for name in _UPDATABLE_FIELDS}
        updated = Customer.versioned_update(entity.pk, entity.version, **fields)
        if not updated:
            self._log.warning("customer.concurrent_update", customer_id=entity.pk)
            raise ConcurrencyConflict(
                f"Customer {entity.pk} was modified by another request. Try again."
            )
        entity.refresh_from_db()
        self._log.info("customer.saved", customer_id=entity.id, is_new=False)
        return entity

    @transaction.atomic
    def delete(self, entity: Customer) -> None:
        """Hard-delete a customer.

        Raises:
            ConcurrencyConflict: the row was modified or removed concurrently.
        """
        deleted = Customer.versioned_delete(entity.pk, entity.version)
        if not deleted:
            self._log.warning("customer.concurrent_delete", customer_id=entity.pk)
            raise ConcurrencyConflict(
                "Delete failed due to a concurrent modification. Try again."
            )
        self._log.info("customer.deleted", customer_id=entity.pk)

    def has_orders(self, entity: Customer) -> bool:
        return entity.orders.exists()
