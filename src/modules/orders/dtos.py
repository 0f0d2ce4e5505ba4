"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

CEP format is checked by ``ShippingClient`` when the route is quoted,
so these DTOs only normalise whitespace.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class OrderRouteDTO(BaseModel):
    """Origin and destination CEPs of an order."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    origin: str
    destination: str


class CreateOrderDTO(OrderRouteDTO):
    """Immutable DTO for order creation requests."""

    customer_id: int


class UpdateOrderDTO(OrderRouteDTO):
    """Immutable DTO for route changes; status is not part of it."""

