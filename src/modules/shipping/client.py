"""HTTP client for the third-party freight quote API.

``ShippingClient.calculate_freight`` never raises for expected failure
modes: invalid input, transport errors, non-2xx responses and unusable
bodies all come back as ``Result.failure(status_code, message)``.

Each call performs exactly one ``POST {base_url}/shipping/quote``.
There are no retries and no caching; every call is a fresh quote.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

import requests
import structlog
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from pydantic import ValidationError

from modules.shipping.dtos import (
    FreightQuoteRequestDTO,
    ShippingItemDTO,
    ShippingQuote,
    ShippingResponseWrapper,
    ShippingServiceResponse,
)
from modules.shipping.validators import is_valid_cep
from shared.domain.result import Result

QUOTE_PATH = "/shipping/quote"
RECIPIENT_COUNTRY = "BR"

MSG_NULL_REQUEST = "Quote data cannot be null."
MSG_INVALID_CEP = "Invalid postal codes (CEP)."
MSG_NO_PACKAGES = "No package information available for the freight quote."
MSG_TRANSPORT_ERROR = "Error calculating freight: {error}"
MSG_UPSTREAM_ERROR = "Failed to query the freight API."
MSG_NO_SERVICE = "No freight service found."
MSG_INVALID_RESPONSE = "Invalid response from the freight API."


class ShippingClient:
    """Freight quote client.

    Receives its HTTP session and logger via constructor injection so tests
    can substitute both.  ``timeout`` is the default deadline for the
    outbound call; ``None`` leaves the ``requests`` default in place.

    A session the client creates itself is released by ``close()``;
    injected sessions belong to the caller.
    """

    def __init__(
        self,
        base_url: str,
        access_token: str,
        *,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        invoice_value: Decimal = Decimal("0"),
        default_items: Optional[Sequence[ShippingItemDTO]] = None,
        logger: Any = None,
    ) -> None:
        if not base_url:
            raise ImproperlyConfigured("FRETE_API_BASE_URL is not configured.")
        if not access_token:
            raise ImproperlyConfigured("FRETE_API_ACCESS_TOKEN is not configured.")
        self._base_url = base_url.rstrip("/")
        self._access_token = access_token
        self._owns_session = session is None
        self._session = session or requests.Session()
        self._timeout = timeout
        self._invoice_value = invoice_value
        self._default_items: List[ShippingItemDTO] = list(default_items or [])
        self._log = logger or structlog.get_logger(__name__)

    @classmethod
    def from_settings(cls, **overrides: Any) -> ShippingClient:
        """Build a client from ``settings.FRETE_API``."""
        conf: Dict[str, Any] = settings.FRETE_API
        package = conf.get("DEFAULT_PACKAGE")
        options: Dict[str, Any] = {
            "timeout": conf.get("TIMEOUT"),
            "invoice_value": conf.get("INVOICE_VALUE", Decimal("0")),
            "default_items": [ShippingItemDTO(**package)] if package else [],
        }
        options.update(overrides)
        return cls(conf.get("BASE_URL", ""), conf.get("ACCESS_TOKEN", ""), **options)

    def close(self) -> None:
        """Release the connection pool of a session this client created."""
        if self._owns_session:
            self._session.close()

    @property
    def quote_url(self) -> str:
        return f"{self._base_url}{QUOTE_PATH}"

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def calculate_freight(
        self,
        quote_request: Optional[FreightQuoteRequestDTO],
        *,
        timeout: Optional[float] = None,
    ) -> Result[ShippingQuote]:
        """Quote the freight for ``origin`` → ``destination``.

        Returns ``Result.success(ShippingQuote)`` with the first service
        offered by the API, or ``Result.failure`` with:

        - 400 for a null request or invalid CEPs (no HTTP call is made);
        - 500 for transport errors, empty service lists and unparseable bodies;
        - the upstream status code for non-2xx responses.
        """
        if quote_request is None:
            self._log.warning("shipping.quote_request_missing")
            return Result.failure(400, MSG_NULL_REQUEST)

        log = self._log.bind(
            origin=quote_request.origin,
            destination=quote_request.destination,
        )

        if not is_valid_cep(quote_request.origin) or not is_valid_cep(
            quote_request.destination
        ):
            log.warning("shipping.invalid_cep")
            return Result.failure(400, MSG_INVALID_CEP)

        items = quote_request.items or self._default_items
        if not items:
            log.warning("shipping.no_packages")
            return Result.failure(400, MSG_NO_PACKAGES)

        payload = self._build_payload(quote_request, items)
        headers = {
            "Accept": "application/json",
            "token": self._access_token,
        }
        deadline = timeout if timeout is not None else self._timeout

        log.info("shipping.quote_requested", url=self.quote_url)
        try:
            response = self._session.post(
                self.quote_url,
                json=payload,
                headers=headers,
                timeout=deadline,
            )
        except requests.RequestException as exc:
            log.error("shipping.transport_error", error=str(exc))
            return Result.failure(500, MSG_TRANSPORT_ERROR.format(error=exc))

        if not 200 <= response.status_code < 300:
            log.warning("shipping.upstream_error", status_code=response.status_code)
            return Result.failure(response.status_code, MSG_UPSTREAM_ERROR)

        return self._parse_response(response, log)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _build_payload(
        self,
        quote_request: FreightQuoteRequestDTO,
        items: Sequence[ShippingItemDTO],
    ) -> Dict[str, Any]:
        invoice_value = (
            quote_request.invoice_value
            if quote_request.invoice_value is not None
            else self._invoice_value
        )
        return {
            "SellerCEP": quote_request.origin,
            "RecipientCEP": quote_request.destination,
            "ShipmentInvoiceValue": float(invoice_value),
            "ShippingServiceCode": None,
            "RecipientCountry": RECIPIENT_COUNTRY,
            "ShippingItemArray": [item.to_wire() for item in items],
        }

    @staticmethod
    def _parse_response(
        response: requests.Response, log: Any
    ) -> Result[ShippingQuote]:
        try:
            wrapper = ShippingResponseWrapper.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            log.error("shipping.invalid_response", error=str(exc))
            return Result.failure(500, MSG_INVALID_RESPONSE)

        if not wrapper.services:
            log.warning("shipping.no_service_found")
            return Result.failure(500, MSG_NO_SERVICE)

        try:
            first = ShippingServiceResponse.model_validate(wrapper.services[0])
        except ValidationError as exc:
            log.error("shipping.invalid_response", error=str(exc))
            return Result.failure(500, MSG_INVALID_RESPONSE)

        quote = ShippingQuote(
            shipping_price=first.shipping_price,
            original_delivery_time=first.delivery_time,
        )
        log.info(
            "shipping.quote_calculated",
            shipping_price=str(quote.shipping_price),
            delivery_time=quote.original_delivery_time,
        )
        return Result.success(quote)
