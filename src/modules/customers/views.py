"""Customer API views.

Exposes ``CustomerService`` over HTTP.  Each handler translates the
service's domain exceptions into a ``{"detail": ...}`` body; anything
else propagates to DRF.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.filters import OrderingFilter
from rest_framework.mixins import ListModelMixin
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import ConcurrencyConflict
from modules.customers.dtos import CustomerDataDTO
from modules.customers.exceptions import CustomerHasOrders, CustomerNotFound
from modules.customers.filters import CustomerFilter
from modules.customers.models import Customer
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.customers.serializers import CustomerSerializer
from modules.customers.services import CustomerService

CUSTOMER_NOT_FOUND = "Customer not found."


def _detail(message: str, code: int) -> Response:
    return Response({"detail": message}, status=code)


def _read_customer_data(request: Request) -> CustomerDataDTO:
    fields = ("name", "email", "address", "phone")
    return CustomerDataDTO(**{name: request.data.get(name, "") for name in fields})


class CustomerViewSet(ListModelMixin, GenericViewSet):
    """Customer CRUD.

    Listing uses the filtered, paginated queryset; every other action goes
    through ``CustomerService``.
    """

    queryset = Customer.objects.all()
    serializer_class = CustomerSerializer
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = CustomerFilter
    ordering_fields = ["created_at", "id", "name", "email"]
    ordering = ["-created_at", "-id"]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CustomerService(repository=CustomerDjangoRepository())

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/customers/{pk}/"""
        try:
            customer = self._service.get_customer(pk)
        except CustomerNotFound:
            return _detail(CUSTOMER_NOT_FOUND, status.HTTP_404_NOT_FOUND)
        return Response(CustomerSerializer(customer).data)

    def create(self, request: Request) -> Response:
        """POST /api/v1/customers/"""
        try:
            data = _read_customer_data(request)
        except (PydanticValidationError, ValueError) as exc:
            return _detail(str(exc), status.HTTP_400_BAD_REQUEST)

        customer = self._service.create_customer(data)
        return Response(
            CustomerSerializer(customer).data, status=status.HTTP_201_CREATED
        )

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/customers/{pk}/ (full replacement)"""
        try:
            data = _read_customer_data(request)
        except (PydanticValidationError, ValueError) as exc:
            return _detail(str(exc), status.HTTP_400_BAD_REQUEST)

        try:
            customer = self._service.update_customer(pk, data)
        except CustomerNotFound:
            return _detail(CUSTOMER_NOT_FOUND, status.HTTP_404_NOT_FOUND)
        except ConcurrencyConflict as exc:
            return _detail(str(exc), status.HTTP_409_CONFLICT)
        return Response(CustomerSerializer(customer).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/customers/{pk}/"""
        try:
            self._service.delete_customer(pk)
        except CustomerNotFound:
            return _detail(CUSTOMER_NOT_FOUND, status.HTTP_404_NOT_FOUND)
        except (CustomerHasOrders, ConcurrencyConflict) as exc:
            return _detail(str(exc), status.HTTP_409_CONFLICT)
        return Response(status=status.HTTP_204_NO_CONTENT)
