"""Exceptions shared by every module.

Raised by the Repository Layer and propagated unchanged through the
Service Layer.  The API layer (Views) maps them to HTTP 409.
"""

from __future__ import annotations


class ConcurrencyConflict(Exception):
    """A write lost an optimistic-concurrency race.

    The row was modified or removed by another request between the read
    and the conditional write.  Callers should re-read and retry.
    """
