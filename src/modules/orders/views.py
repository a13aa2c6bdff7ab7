"""Order API views.

Exposes the ``OrderService`` via HTTP using DRF ViewSets.  Domain
exceptions propagate out of the actions; the API error boundary
(``modules.core.exceptions.api_exception_handler``) maps them to HTTP
statuses.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.filters import OrderingFilter
from rest_framework.permissions import BasePermission, IsAdminUser, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import GenericViewSet

from modules.orders.dtos import CreateOrderDTO, UpdateOrderDTO
from modules.orders.filters import OrderFilter
from modules.orders.models import Order
from modules.orders.serializers import (
    CreateOrderSerializer,
    OrderSerializer,
    UpdateOrderSerializer,
    UpdateOrderStatusSerializer,
)
from modules.orders.services import build_order_service

ADMIN_ACTIONS = {"list", "update", "destroy", "update_status"}


def ensure_owner_or_staff(request: Request, user_id: int) -> None:
    """Only staff may act on another user's orders."""
    if not (request.user.is_staff or request.user.pk == user_id):
        raise PermissionDenied("You may only access your own orders.")


class OrderViewSet(GenericViewSet):
    """ViewSet for pickup orders.

    Does **not** extend ``ModelViewSet``; all ORM access goes through
    the service/repository layer.
    """

    queryset = Order.objects.all()
    serializer_class = OrderSerializer
    filterset_class = OrderFilter
    ordering_fields = ["created_at", "pickup_date", "total_amount", "status"]
    ordering = ["-created_at"]
    filter_backends = [DjangoFilterBackend, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = build_order_service()

    def get_permissions(self) -> list[BasePermission]:
        if self.action in ADMIN_ACTIONS:
            return [IsAuthenticated(), IsAdminUser()]
        return [IsAuthenticated()]

    def get_throttles(self) -> list[BaseThrottle]:
        """Define throttling scopes per action."""
        self.throttle_scope = "order_creation" if self.action == "create" else None
        return super().get_throttles()

    def get_queryset(self):
        return Order.objects.select_related("user").prefetch_related(
            "services__service"
        )

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/"""
        serializer = CreateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        ensure_owner_or_staff(request, data["user"])

        dto = CreateOrderDTO(
            user_id=data["user"],
            pickup_date=data["pickup_date"],
            pickup_time=data["pickup_time"],
            address=data["formatted_address"],
            order_person_name=data["order_person_name"],
            phone_number=data["phone_number"],
        )
        order = self._service.create_order(dto)
        return Response(
            {"detail": "Order placed successfully.", "order": OrderSerializer(order).data},
            status=status.HTTP_201_CREATED,
        )

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/"""
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        if page is not None:
            return self.get_paginated_response(OrderSerializer(page, many=True).data)
        return Response(OrderSerializer(queryset, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        order = self._service.get_order(pk)
        ensure_owner_or_staff(request, order.user_id)
        return Response(OrderSerializer(order).data)

    @action(detail=False, methods=["get"], url_path=r"user/(?P<user_id>\d+)")
    def by_user(self, request: Request, user_id: str | None = None) -> Response:
        """GET /api/v1/orders/user/{user_id}/"""
        ensure_owner_or_staff(request, int(user_id))
        orders = self._service.list_user_orders(int(user_id))
        return Response(OrderSerializer(orders, many=True).data)

    # ------------------------------------------------------------------
    # Update / Delete
    # ------------------------------------------------------------------

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/orders/{pk}/ (admin, any updatable field)"""
        serializer = UpdateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = self._service.update_order(
            pk, UpdateOrderDTO(**serializer.validated_data)
        )
        return Response(OrderSerializer(order).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/orders/{pk}/"""
        self._service.delete_order(pk)
        return Response({"detail": "Order deleted successfully."})

    @action(detail=True, methods=["patch"], url_path="status")
    def update_status(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/orders/{pk}/status/"""
        serializer = UpdateOrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = self._service.update_status(pk, serializer.validated_data["status"])
        return Response(
            {
                "detail": "Order status updated successfully.",
                "order": OrderSerializer(order).data,
            }
        )
