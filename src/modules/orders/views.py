"""Order API views.

Exposes the ``OrderService`` via HTTP using DRF ViewSets.
Domain exceptions are caught and translated into appropriate
HTTP status codes; unexpected errors propagate.
"""

from __future__ import annotations

from contextlib import closing
from typing import Optional

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import ConcurrencyConflict
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.orders.dtos import CreateOrderDTO, UpdateOrderDTO
from modules.orders.exceptions import (
    CustomerNotFound,
    FreightCalculationFailed,
    InvalidOrderStatus,
    OrderNotFound,
)
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import (
    CreateOrderSerializer,
    OrderRouteSerializer,
    OrderSerializer,
    UpdateOrderStatusSerializer,
)
from modules.orders.services import OrderService
from modules.shipping.client import ShippingClient
from modules.shipping.views import request_timeout


def _not_found() -> Response:
    return Response(
        {"detail": "Order not found."},
        status=status.HTTP_404_NOT_FOUND,
    )


def _freight_failed(exc: FreightCalculationFailed) -> Response:
    return Response({"detail": exc.message}, status=exc.status_code)


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Uses ``OrderService`` with injected repositories (DIP).  Only the
    actions that quote freight open a ``ShippingClient``, closed when the
    action returns.  Does **not** extend ``ModelViewSet``: all ORM access goes
    through the service/repository layer.
    """

    queryset = Order.objects.none()
    serializer_class = OrderSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = self._build_service()

    def _build_service(
        self, shipping_client: Optional[ShippingClient] = None
    ) -> OrderService:
        return OrderService(
            order_repository=OrderDjangoRepository(),
            customer_repository=CustomerDjangoRepository(),
            shipping_client=shipping_client,
        )

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/"""
        create_serializer = CreateOrderSerializer(data=request.data)
        create_serializer.is_valid(raise_exception=True)
        data = create_serializer.validated_data

        dto = CreateOrderDTO(
            customer_id=data["customer_id"],
            origin=data["origin"],
            destination=data["destination"],
        )

        timeout = request_timeout(request)
        with closing(ShippingClient.from_settings()) as shipping_client:
            service = self._build_service(shipping_client)
            try:
                order = service.create_order(dto, timeout=timeout)
            except CustomerNotFound:
                return Response(
                    {"detail": "Customer not found."},
                    status=status.HTTP_404_NOT_FOUND,
                )
            except FreightCalculationFailed as exc:
                return _freight_failed(exc)

        out = OrderSerializer(order)
        return Response(out.data, status=status.HTTP_201_CREATED)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/

        Returns the 10 most recent orders, newest first.
        """
        orders = self._service.get_orders()
        return Response(OrderSerializer(orders, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        order = self._service.get_order_by_id(pk)
        if order is None:
            return _not_found()
        return Response(OrderSerializer(order).data)

    @action(
        detail=False,
        methods=["get"],
        url_path=r"customer/(?P<customer_id>[^/.]+)",
        url_name="by-customer",
    )
    def by_customer(self, request: Request, customer_id: str | None = None) -> Response:
        """GET /api/v1/orders/customer/{customer_id}/"""
        try:
            orders = self._service.get_orders_by_customer_id(customer_id)
        except CustomerNotFound:
            return Response(
                {"detail": "Customer not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(OrderSerializer(orders, many=True).data)

    # ------------------------------------------------------------------
    # Update route / status
    # ------------------------------------------------------------------

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/orders/{pk}/

        Changes origin/destination and re-prices the order.
        """
        route_serializer = OrderRouteSerializer(data=request.data)
        route_serializer.is_valid(raise_exception=True)
        data = route_serializer.validated_data

        dto = UpdateOrderDTO(origin=data["origin"], destination=data["destination"])

        timeout = request_timeout(request)
        with closing(ShippingClient.from_settings()) as shipping_client:
            service = self._build_service(shipping_client)
            try:
                order = service.update_order(pk, dto, timeout=timeout)
            except OrderNotFound:
                return _not_found()
            except FreightCalculationFailed as exc:
                return _freight_failed(exc)
            except ConcurrencyConflict as exc:
                return Response(
                    {"detail": str(exc)},
                    status=status.HTTP_409_CONFLICT,
                )

        return Response(OrderSerializer(order).data)

    @action(detail=True, methods=["patch"], url_path="status")
    def update_status(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/orders/{pk}/status/"""
        status_serializer = UpdateOrderStatusSerializer(data=request.data)
        status_serializer.is_valid(raise_exception=True)

        try:
            order = self._service.update_status(
                pk, status_serializer.validated_data["status"]
            )
        except OrderNotFound:
            return _not_found()
        except InvalidOrderStatus as exc:
            return Response(
                {"detail": str(exc)},
                status=status.HTTP_400_BAD_REQUEST,
            )
        except ConcurrencyConflict as exc:
            return Response(
                {"detail": str(exc)},
                status=status.HTTP_409_CONFLICT,
            )

        return Response(OrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Destroy
    # ------------------------------------------------------------------

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/orders/{pk}/"""
        try:
            self._service.delete_order(pk)
        except OrderNotFound:
            return _not_found()
        except ConcurrencyConflict as exc:
            return Response(
                {"detail": str(exc)},
                status=status.HTTP_409_CONFLICT,
            )
        return Response(status=status.HTTP_204_NO_CONTENT)
