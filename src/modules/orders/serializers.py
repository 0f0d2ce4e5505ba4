"""Order DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.constants import OrderStatus
from modules.orders.models import Order

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class OrderRouteSerializer(serializers.Serializer):
    """Validates the route of an order; CEP format is checked when quoting."""

    origin = serializers.CharField(max_length=32, trim_whitespace=True)
    destination = serializers.CharField(max_length=32, trim_whitespace=True)


class CreateOrderSerializer(OrderRouteSerializer):
    """Validates the order creation request payload."""

    customer_id = serializers.IntegerField(min_value=1)


class UpdateOrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderStatus.choices)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders.

    Fields whose value is ``None`` are left out of the payload.
    """

    status_display = serializers.CharField(
        source="get_status_display", read_only=True
    )

    class Meta:
        model = Order
        fields = [
            "id",
            "customer_id",
            "origin",
            "destination",
            "status",
            "status_display",
            "freight_value",
            "version",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def to_representation(self, instance: Order) -> dict:
        data = super().to_representation(instance)
        return {key: value for key, value in data.items() if value is not None}
