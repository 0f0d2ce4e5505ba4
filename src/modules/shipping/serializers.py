"""Shipping DRF serializers for the freight quote endpoint."""

from __future__ import annotations

from rest_framework import serializers


class ShippingItemSerializer(serializers.Serializer):
    height = serializers.FloatField(min_value=0.01)
    length = serializers.FloatField(min_value=0.01)
    width = serializers.FloatField(min_value=0.01)
    weight = serializers.FloatField(min_value=0.001)
    quantity = serializers.IntegerField(min_value=1, default=1)
    sku = serializers.CharField(required=False, allow_blank=True)
    category = serializers.CharField(required=False, allow_blank=True)


class FreightQuoteRequestSerializer(serializers.Serializer):
    """Validates a freight quote request.

    ``items`` and ``invoice_value`` are optional; the configured default
    package and declared value are used when they are omitted.
    """

    origin = serializers.CharField(max_length=32, trim_whitespace=True)
    destination = serializers.CharField(max_length=32, trim_whitespace=True)
    items = ShippingItemSerializer(many=True, required=False, allow_empty=False)
    invoice_value = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=0, required=False
    )


class ShippingQuoteSerializer(serializers.Serializer):
    shipping_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    original_delivery_time = serializers.IntegerField()
