"""Base abstract models for the shipment management system.

Provides:
- ``BaseModel``: auto-increment integer PK + created_at / updated_at timestamps.
- ``VersionedModel``: Extends BaseModel with a ``version`` row-version column
  used for optimistic concurrency control.

Design decisions:
- Primary keys are plain integers (``DEFAULT_AUTO_FIELD``); they are assigned
  by the database on first save and never change afterwards.
- ``created_at`` is written once (``auto_now_add``) and is never part of an
  update statement issued by the repositories.
- ``save()`` guard ensures ``updated_at`` is included when ``update_fields``
  is specified (Django skips ``auto_now`` fields otherwise).
"""

from __future__ import annotations

from django.db import models
from django.db.models import F
from django.utils import timezone

# ---------------------------------------------------------------------------
# BaseModel
# ---------------------------------------------------------------------------


class BaseModel(models.Model):
    """Abstract base with timestamp bookkeeping."""

    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs) -> None:
        """Ensure ``updated_at`` is refreshed even when ``update_fields`` is passed."""
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "updated_at" not in update_fields:
            kwargs["update_fields"] = list(update_fields) + ["updated_at"]
        super().save(*args, **kwargs)


# ---------------------------------------------------------------------------
# Optimistic concurrency
# ---------------------------------------------------------------------------


class VersionedModel(BaseModel):
    """Abstract model carrying a row version.

    Every conditional write issued by a repository matches on the version
    read beforehand and increments it.  A write that matches zero rows
    means another request changed (or removed) the row in between.
    """

    version = models.PositiveIntegerField(default=1, editable=False)

    class Meta:
        abstract = True

    @classmethod
    def versioned_update(cls, pk: int, expected_version: int, **fields) -> int:
        """Apply ``fields`` only if the stored version still matches.

        Returns the number of affected rows (0 or 1).
        """
        return cls.objects.filter(pk=pk, version=expected_version).update(
            version=F("version") + 1,
            updated_at=timezone.now(),
            **fields,
        )

    @classmethod
    def versioned_delete(cls, pk: int, expected_version: int) -> int:
        """Delete the row only if the stored version still matches."""
        _, per_model = cls.objects.filter(pk=pk, version=expected_version).delete()
        return per_model.get(cls._meta.label, 0)
