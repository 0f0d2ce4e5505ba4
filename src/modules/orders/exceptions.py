"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations

from modules.customers.exceptions import CustomerNotFound

__all__ = [
    "CustomerNotFound",
    "FreightCalculationFailed",
    "InvalidOrderStatus",
    "OrderNotFound",
]


class OrderNotFound(Exception):
    """The requested order does not exist."""


class InvalidOrderStatus(Exception):
    """An invalid status transition was attempted."""


class FreightCalculationFailed(Exception):
    """The freight quote for an order route could not be obtained.

    Carries the failed quote's ``status_code`` so the API layer can
    answer with the same code.
    """

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
