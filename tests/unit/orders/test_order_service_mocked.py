"""Unit tests for OrderService with mocked repositories."""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from modules.core.exceptions import ConcurrencyConflict
from modules.orders.constants import OrderStatus
from modules.orders.dtos import CreateOrderDTO, UpdateOrderDTO
from modules.orders.exceptions import CustomerNotFound, OrderNotFound
from modules.orders.models import Order
from modules.orders.services import OrderService

pytestmark = pytest.mark.unit


@pytest.fixture()
def order_repo():
    return MagicMock()


@pytest.fixture()
def customer_repo():
    return MagicMock()


@pytest.fixture()
def logger():
    return MagicMock()


@pytest.fixture()
def service(order_repo, customer_repo, shipping_client, logger):
    return OrderService(order_repo, customer_repo, shipping_client, logger=logger)


def _stored_order(**overrides) -> Order:
    data = {
        "id": 7,
        "customer_id": 1,
        "origin": "01310100",
        "destination": "20040002",
        "status": OrderStatus.PROCESSING,
        "freight_value": Decimal("100.50"),
        "version": 3,
    }
    data.update(overrides)
    return Order(**data)


class TestCreateOrderWithMocks:
    def test_repository_receives_quoted_price(self, service, order_repo, customer_repo):
        customer_repo.get_by_id.return_value = MagicMock(id=1)

        service.create_order(
            CreateOrderDTO(customer_id=1, origin="01310100", destination="20040002")
        )

        order_repo.create.assert_called_once_with(
            {
                "customer_id": 1,
                "origin": "01310100",
                "destination": "20040002",
                "status": OrderStatus.PROCESSING,
                "freight_value": Decimal("100.50"),
            }
        )

    def test_missing_customer_is_logged(self, service, customer_repo, logger):
        customer_repo.get_by_id.return_value = None

        with pytest.raises(CustomerNotFound):
            service.create_order(
                CreateOrderDTO(customer_id=5, origin="01310100", destination="20040002")
            )

        logger.bind.assert_called_with(customer_id=5)
        logger.bind.return_value.warning.assert_called_once_with(
            "order.customer_not_found"
        )


class TestWritesUseVersionReadFirst:
    def test_update_order_passes_expected_version(self, service, order_repo):
        order_repo.get_by_id.return_value = _stored_order()

        service.update_order(7, UpdateOrderDTO(origin="30140071", destination="40020000"))

        order_repo.update_route.assert_called_once_with(
            7, "30140071", "40020000", Decimal("100.50"), expected_version=3
        )

    def test_update_status_passes_expected_version(self, service, order_repo):
        order_repo.get_by_id.return_value = _stored_order()

        service.update_status(7, OrderStatus.SHIPPED)

        order_repo.update_status.assert_called_once_with(
            7, OrderStatus.SHIPPED, expected_version=3
        )
        order_repo.update_route.assert_not_called()

    def test_update_status_missing_has_no_side_effects(self, service, order_repo):
        order_repo.get_by_id.return_value = None

        with pytest.raises(OrderNotFound):
            service.update_status(7, OrderStatus.SHIPPED)

        order_repo.update_status.assert_not_called()


class TestDeleteConflict:
    def test_conflict_from_repository_propagates(self, service, order_repo):
        order = _stored_order()
        order_repo.get_by_id.return_value = order
        order_repo.delete.side_effect = ConcurrencyConflict(
            "Delete failed due to a concurrent modification. Try again."
        )

        with pytest.raises(ConcurrencyConflict, match="concurrent modification"):
            service.delete_order(7)

        order_repo.delete.assert_called_once_with(order)

    def test_missing_order_never_deletes(self, service, order_repo):
        order_repo.get_by_id.return_value = None

        with pytest.raises(OrderNotFound):
            service.delete_order(7)

        order_repo.delete.assert_not_called()


class TestServiceWithoutFreightClient:
    def test_queries_work_without_client(self, order_repo, customer_repo):
        order_repo.get_recent.return_value = [_stored_order()]
        service = OrderService(order_repo, customer_repo)

        assert service.get_orders() == order_repo.get_recent.return_value

    def test_quoting_without_client_is_rejected(self, order_repo, customer_repo):
        customer_repo.get_by_id.return_value = MagicMock(id=1)
        service = OrderService(order_repo, customer_repo)

        with pytest.raises(RuntimeError):
            service.create_order(
                CreateOrderDTO(customer_id=1, origin="01310100", destination="20040002")
            )

        order_repo.create.assert_not_called()
