from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from modules.customers.models import Customer
from modules.shipping.client import ShippingClient
from modules.shipping.dtos import ShippingQuote
from shared.domain.result import Result

User = get_user_model()


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def auth_client():
    """APIClient with a force-authenticated Django user."""
    client = APIClient()
    user = User.objects.create_user(username="testuser", password="testpass123")
    client.force_authenticate(user=user)
    return client


@pytest.fixture()
def customer():
    """A persisted Customer instance."""
    return Customer.objects.create(
        name="João Silva",
        address="Rua das Flores, 10 - São Paulo/SP",
        phone="11987654321",
        email="joao@example.com",
    )


@pytest.fixture()
def shipping_client():
    """ShippingClient double answering every quote with R$ 100.50 / 5 days."""
    client = MagicMock(spec=ShippingClient)
    client.calculate_freight.return_value = Result.success(
        ShippingQuote(shipping_price=Decimal("100.50"), original_delivery_time=5)
    )
    return client
