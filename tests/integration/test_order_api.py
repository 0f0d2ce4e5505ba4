"""Integration tests for Order API endpoints.

Covers:
- CRUD, status and by-customer endpoints via /api/v1/orders/.
- Domain exception mapping (400, 404, 409, freight status passthrough).
- Authentication enforcement (401 without token).

The freight client is replaced by a mock built in ``tests/conftest.py``.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal
from unittest.mock import patch

import pytest

from modules.core.exceptions import ConcurrencyConflict
from modules.customers.models import Customer
from modules.orders.constants import OrderStatus
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.shipping.client import ShippingClient
from modules.shipping.dtos import ShippingQuote
from shared.domain.result import Result

pytestmark = pytest.mark.integration

ORIGIN = "01310100"
DESTINATION = "20040002"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _freight(shipping_client):
    with patch.object(ShippingClient, "from_settings", return_value=shipping_client):
        yield shipping_client


@pytest.fixture()
def order(customer):
    return Order.objects.create(
        customer=customer,
        origin=ORIGIN,
        destination=DESTINATION,
        freight_value=Decimal("100.50"),
    )


def _payload(customer, **overrides):
    data = {"customer_id": customer.id, "origin": ORIGIN, "destination": DESTINATION}
    data.update(overrides)
    return data


# ===========================================================================
# Authentication
# ===========================================================================


class TestOrderAPIAuth:
    def test_unauthenticated_returns_401(self, api_client):
        response = api_client.get("/api/v1/orders/")
        assert response.status_code == 401


# ===========================================================================
# CREATE
# ===========================================================================


class TestOrderCreate:
    def test_create_returns_201_with_quoted_price(self, auth_client, customer):
        response = auth_client.post("/api/v1/orders/", _payload(customer), format="json")

        assert response.status_code == 201
        data = response.data
        assert data["customer_id"] == customer.id
        assert data["origin"] == ORIGIN
        assert data["destination"] == DESTINATION
        assert data["status"] == OrderStatus.PROCESSING
        assert data["status_display"] == "Processamento"
        assert data["freight_value"] == "100.50"
        assert "created_at" in data
        assert None not in data.values()
        assert Order.objects.count() == 1

    def test_freight_client_closed_after_create(self, auth_client, customer, _freight):
        auth_client.post("/api/v1/orders/", _payload(customer), format="json")

        _freight.close.assert_called_once_with()

    def test_freight_client_closed_when_quote_fails(self, auth_client, customer, _freight):
        _freight.calculate_freight.return_value = Result.failure(503, "down")

        response = auth_client.post("/api/v1/orders/", _payload(customer), format="json")

        assert response.status_code == 503
        _freight.close.assert_called_once_with()

    def test_unknown_customer_returns_404(self, auth_client, customer):
        response = auth_client.post(
            "/api/v1/orders/", _payload(customer, customer_id=999999), format="json"
        )

        assert response.status_code == 404
        assert Order.objects.count() == 0

    def test_freight_failure_status_passed_through(self, auth_client, customer, _freight):
        _freight.calculate_freight.return_value = Result.failure(
            400, "Invalid postal codes (CEP)."
        )

        response = auth_client.post(
            "/api/v1/orders/", _payload(customer, origin="123"), format="json"
        )

        assert response.status_code == 400
        assert response.data["detail"] == "Invalid postal codes (CEP)."
        assert Order.objects.count() == 0

    def test_upstream_outage_returns_upstream_status(self, auth_client, customer, _freight):
        _freight.calculate_freight.return_value = Result.failure(
            503, "Failed to query the freight API."
        )

        response = auth_client.post("/api/v1/orders/", _payload(customer), format="json")

        assert response.status_code == 503

    def test_missing_fields_return_400(self, auth_client):
        response = auth_client.post("/api/v1/orders/", {"origin": ORIGIN}, format="json")

        assert response.status_code == 400
        assert "customer_id" in response.data
        assert "destination" in response.data

    def test_timeout_query_param_reaches_freight_call(self, auth_client, customer, _freight):
        response = auth_client.post(
            "/api/v1/orders/?timeout=3", _payload(customer), format="json"
        )

        assert response.status_code == 201
        assert _freight.calculate_freight.call_args.kwargs["timeout"] == 3.0

    @pytest.mark.parametrize("timeout", ["abc", "0", "-1"])
    def test_invalid_timeout_returns_400(self, auth_client, customer, timeout):
        response = auth_client.post(
            f"/api/v1/orders/?timeout={timeout}", _payload(customer), format="json"
        )

        assert response.status_code == 400
        assert "timeout" in response.data


# ===========================================================================
# LIST / RETRIEVE / BY CUSTOMER
# ===========================================================================


class TestOrderRead:
    def test_list_returns_ten_most_recent(self, auth_client, customer):
        base = datetime(2026, 1, 1, tzinfo=dt_timezone.utc)
        created = [
            Order.objects.create(
                customer=customer,
                origin=ORIGIN,
                destination=DESTINATION,
                freight_value=Decimal("10.00"),
                created_at=base + timedelta(days=i),
            )
            for i in range(15)
        ]

        response = auth_client.get("/api/v1/orders/")

        assert response.status_code == 200
        assert [o["id"] for o in response.data] == [o.id for o in reversed(created[5:])]

    def test_reads_do_not_open_a_freight_client(self, auth_client, order):
        with patch.object(ShippingClient, "from_settings") as from_settings:
            auth_client.get("/api/v1/orders/")
            auth_client.get(f"/api/v1/orders/{order.id}/")

        from_settings.assert_not_called()

    def test_retrieve(self, auth_client, order):
        response = auth_client.get(f"/api/v1/orders/{order.id}/")

        assert response.status_code == 200
        assert response.data["id"] == order.id
        assert response.data["freight_value"] == "100.50"

    @pytest.mark.parametrize("order_id", ["999999", "abc"])
    def test_retrieve_missing_returns_404(self, auth_client, order_id):
        response = auth_client.get(f"/api/v1/orders/{order_id}/")
        assert response.status_code == 404

    def test_orders_by_customer(self, auth_client, customer, order):
        other = Customer.objects.create(name="Maria", email="maria@example.com")
        Order.objects.create(
            customer=other,
            origin=ORIGIN,
            destination=DESTINATION,
            freight_value=Decimal("1.00"),
        )

        response = auth_client.get(f"/api/v1/orders/customer/{customer.id}/")

        assert response.status_code == 200
        assert [o["id"] for o in response.data] == [order.id]

    def test_orders_by_customer_without_orders(self, auth_client, customer):
        response = auth_client.get(f"/api/v1/orders/customer/{customer.id}/")

        assert response.status_code == 200
        assert response.data == []

    def test_orders_by_unknown_customer_returns_404(self, auth_client):
        response = auth_client.get("/api/v1/orders/customer/999999/")
        assert response.status_code == 404


# ===========================================================================
# UPDATE (route) / STATUS
# ===========================================================================


class TestOrderUpdate:
    def test_put_reprices_route(self, auth_client, order, _freight):
        _freight.calculate_freight.return_value = Result.success(
            ShippingQuote(shipping_price=Decimal("250.00"), original_delivery_time=7)
        )

        response = auth_client.put(
            f"/api/v1/orders/{order.id}/",
            {"origin": "30140071", "destination": "40020000"},
            format="json",
        )

        assert response.status_code == 200
        assert response.data["origin"] == "30140071"
        assert response.data["destination"] == "40020000"
        assert response.data["freight_value"] == "250.00"
        assert response.data["status"] == OrderStatus.PROCESSING

    def test_put_missing_returns_404(self, auth_client):
        response = auth_client.put(
            "/api/v1/orders/999999/",
            {"origin": "30140071", "destination": "40020000"},
            format="json",
        )
        assert response.status_code == 404

    def test_put_conflict_returns_409(self, auth_client, order):
        with patch.object(
            OrderDjangoRepository,
            "update_route",
            side_effect=ConcurrencyConflict("Order was modified by another request."),
        ):
            response = auth_client.put(
                f"/api/v1/orders/{order.id}/",
                {"origin": "30140071", "destination": "40020000"},
                format="json",
            )

        assert response.status_code == 409

    def test_patch_on_order_is_not_allowed(self, auth_client, order):
        response = auth_client.patch(
            f"/api/v1/orders/{order.id}/", {"origin": "30140071"}, format="json"
        )
        assert response.status_code == 405

    def test_status_update(self, auth_client, order):
        response = auth_client.patch(
            f"/api/v1/orders/{order.id}/status/",
            {"status": OrderStatus.SHIPPED},
            format="json",
        )

        assert response.status_code == 200
        assert response.data["status"] == OrderStatus.SHIPPED
        assert response.data["status_display"] == "Enviado"
        assert response.data["freight_value"] == "100.50"
        assert response.data["origin"] == ORIGIN

    def test_invalid_transition_returns_400(self, auth_client, order):
        response = auth_client.patch(
            f"/api/v1/orders/{order.id}/status/",
            {"status": OrderStatus.DELIVERED},
            format="json",
        )

        assert response.status_code == 400
        assert Order.objects.get(id=order.id).status == OrderStatus.PROCESSING

    def test_unknown_status_value_returns_400(self, auth_client, order):
        response = auth_client.patch(
            f"/api/v1/orders/{order.id}/status/", {"status": 9}, format="json"
        )
        assert response.status_code == 400

    def test_status_of_missing_order_returns_404(self, auth_client):
        response = auth_client.patch(
            "/api/v1/orders/999999/status/",
            {"status": OrderStatus.SHIPPED},
            format="json",
        )
        assert response.status_code == 404


# ===========================================================================
# DELETE
# ===========================================================================


class TestOrderDelete:
    def test_delete_returns_204(self, auth_client, order):
        response = auth_client.delete(f"/api/v1/orders/{order.id}/")

        assert response.status_code == 204
        assert auth_client.get(f"/api/v1/orders/{order.id}/").status_code == 404

    def test_delete_missing_returns_404(self, auth_client):
        response = auth_client.delete("/api/v1/orders/999999/")
        assert response.status_code == 404

    def test_delete_conflict_returns_409(self, auth_client, order):
        with patch.object(
            OrderDjangoRepository,
            "delete",
            side_effect=ConcurrencyConflict(
                "Delete failed due to a concurrent modification. Try again."
            ),
        ):
            response = auth_client.delete(f"/api/v1/orders/{order.id}/")

        assert response.status_code == 409
        assert "concurrent modification" in response.data["detail"]
