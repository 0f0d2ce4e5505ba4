"""Shipping URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.shipping.views import FreightQuoteView

urlpatterns = [
    path("shipping/calcular/", FreightQuoteView.as_view(), name="shipping-quote"),
]
