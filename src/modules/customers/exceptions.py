"""Customer domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations


class CustomerNotFound(Exception):
    """The requested customer does not exist."""


class CustomerHasOrders(Exception):
    """The customer still owns orders and cannot be deleted."""
