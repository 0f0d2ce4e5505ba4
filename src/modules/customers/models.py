"""Customer model.

A customer places orders; the ``orders`` reverse relation is owned by
``Order.customer`` (the foreign key lives on the order).

Business rules implemented:
- Full-field update: name, address, phone and email are replaced together
  (enforced at service layer).
- Delete fails loudly for unknown ids (enforced at service layer).
- A customer with orders cannot be deleted (``PROTECT`` on the order FK).
"""

from __future__ import annotations

from django.db import models

from modules.core.models import VersionedModel


class Customer(VersionedModel):
    """Customer aggregate root."""

    name = models.CharField(max_length=255)
    address = models.CharField(max_length=500, blank=True, default="")
    phone = models.CharField(max_length=20, blank=True, default="")
    email = models.EmailField(max_length=254)

    class Meta:
        db_table = "customers"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="customers_created_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"
