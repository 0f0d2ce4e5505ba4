"""Shipping DTOs.

Framework-agnostic data transfer objects using Pydantic v2.

- ``ShippingItemDTO``: one package of the shipment (cm / kg).
- ``FreightQuoteRequestDTO``: input for a freight quote (origin/destination CEP).
- ``ShippingQuote``: the domain value returned by a successful quote.
- ``ShippingServiceResponse`` / ``ShippingResponseWrapper``: upstream wire
  shapes of the freight API response.

CEPs are deliberately **not** validated here: ``ShippingClient`` owns that
check and reports it as a ``Result`` failure instead of an exception.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class ShippingItemDTO(BaseModel):
    """A single package declared to the freight API."""

    model_config = ConfigDict(frozen=True)

    height: float = Field(..., gt=0)
    length: float = Field(..., gt=0)
    width: float = Field(..., gt=0)
    weight: float = Field(..., gt=0)
    quantity: int = Field(default=1, ge=1)
    sku: Optional[str] = None
    category: Optional[str] = None

    def to_wire(self) -> Dict[str, Any]:
        """Serialise to the upstream ``ShippingItemArray`` element shape."""
        payload: Dict[str, Any] = {
            "Height": self.height,
            "Length": self.length,
            "Quantity": self.quantity,
            "Weight": self.weight,
            "Width": self.width,
        }
        if self.sku:
            payload["SKU"] = self.sku
        if self.category:
            payload["Category"] = self.category
        return payload


class FreightQuoteRequestDTO(BaseModel):
    """Immutable DTO for a freight quote.

    ``items`` and ``invoice_value`` are optional: when omitted the client
    falls back to its configured default package and declared value.
    """

    model_config = ConfigDict(frozen=True)

    origin: str
    destination: str
    items: Optional[List[ShippingItemDTO]] = None
    invoice_value: Optional[Decimal] = Field(default=None, ge=0)


# ---------------------------------------------------------------------------
# Output DTO
# ---------------------------------------------------------------------------


class ShippingQuote(BaseModel):
    """Immutable result of a successful freight quote."""

    model_config = ConfigDict(frozen=True)

    shipping_price: Decimal
    original_delivery_time: int


# ---------------------------------------------------------------------------
# Upstream wire shapes
# ---------------------------------------------------------------------------


class ShippingServiceResponse(BaseModel):
    """One carrier service offered by the freight API.

    Price and delivery time arrive as strings and are converted here.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    service_code: Optional[str] = Field(default=None, alias="ServiceCode")
    service_description: Optional[str] = Field(
        default=None, alias="ServiceDescription"
    )
    carrier: Optional[str] = Field(default=None, alias="Carrier")
    shipping_price: Decimal = Field(..., alias="ShippingPrice")
    delivery_time: int = Field(..., alias="DeliveryTime")
    error: bool = Field(default=False, alias="Error")
    msg: Optional[str] = Field(default=None, alias="Msg")

    @field_validator("shipping_price", mode="before")
    @classmethod
    def parse_price(cls, v: Any) -> Decimal:
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError("ShippingPrice is required.")
        try:
            price = Decimal(str(v).strip())
        except InvalidOperation as exc:
            raise ValueError(f"Invalid ShippingPrice: {v!r}") from exc
        if not price.is_finite():
            raise ValueError(f"Invalid ShippingPrice: {v!r}")
        return price

    @field_validator("delivery_time", mode="before")
    @classmethod
    def parse_delivery_time(cls, v: Any) -> int:
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError("DeliveryTime is required.")
        return int(str(v).strip())


class ShippingResponseWrapper(BaseModel):
    """Top-level freight API response.

    The upstream spells the key ``ShippingSevicesArray``; the corrected
    spelling is accepted as well.  Entries stay raw: only the first one is
    quoted, and later carriers may report errors without a price.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    services: Optional[List[Dict[str, Any]]] = Field(
        default=None,
        validation_alias=AliasChoices("ShippingSevicesArray", "ShippingServicesArray"),
    )
