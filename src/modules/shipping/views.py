"""Freight quote API view.

A thin passthrough to ``ShippingClient.calculate_freight``: a successful
``Result`` becomes a 200 body, a failed one becomes ``{"detail": ...}``
with the failure's status code.
"""

from __future__ import annotations

from contextlib import closing
from typing import Optional

from drf_spectacular.utils import extend_schema
from rest_framework.exceptions import ValidationError
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.shipping.client import ShippingClient
from modules.shipping.dtos import FreightQuoteRequestDTO, ShippingItemDTO
from modules.shipping.serializers import (
    FreightQuoteRequestSerializer,
    ShippingQuoteSerializer,
)


def request_timeout(request: Request) -> Optional[float]:
    """Read the optional ``?timeout=<seconds>`` deadline for the freight call."""
    raw = request.query_params.get("timeout")
    if raw in (None, ""):
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ValidationError({"timeout": "Must be a number of seconds."})
    if not value > 0:
        raise ValidationError({"timeout": "Must be greater than zero."})
    return value


class FreightQuoteView(APIView):
    """POST /api/v1/shipping/calcular/"""

    @extend_schema(
        request=FreightQuoteRequestSerializer,
        responses={200: ShippingQuoteSerializer},
    )
    def post(self, request: Request) -> Response:
        serializer = FreightQuoteRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        items = data.get("items")
        dto = FreightQuoteRequestDTO(
            origin=data["origin"],
            destination=data["destination"],
            items=[ShippingItemDTO(**item) for item in items] if items else None,
            invoice_value=data.get("invoice_value"),
        )

        timeout = request_timeout(request)
        with closing(ShippingClient.from_settings()) as client:
            result = client.calculate_freight(dto, timeout=timeout)
        if result.is_failure:
            return Response({"detail": result.error_message}, status=result.status_code)
        return Response(ShippingQuoteSerializer(result.value).data)
