"""Order service layer (Use Cases).

Orchestrates order admission, admin updates, status transitions and
deletion.

Admission runs resolver -> geofence -> cart snapshot -> user check and
stops at the first failure.  Nothing is written until every check has
passed; the only write is the repository's atomic ``create``.  No
database transaction is held across the external geocoding call.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.utils import timezone

from modules.core.exceptions import ValidationFailed
from modules.geo.exceptions import InvalidGeocodeResponse
from modules.orders.constants import ORDER_EXPIRY_WINDOW, OrderStatus
from modules.orders.exceptions import OrderNotFound, OutOfServiceArea
from modules.users.exceptions import UserNotFound

if TYPE_CHECKING:
    from modules.carts.snapshot import CartSnapshotter
    from modules.geo.geofence import GeofenceValidator
    from modules.geo.resolver import AddressResolver
    from modules.orders.dtos import CreateOrderDTO, UpdateOrderDTO
    from modules.orders.models import Order
    from modules.orders.notifications import OrderNotifier
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.users.repositories.interfaces import IUserRepository

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives its collaborators via constructor injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        user_repository: IUserRepository,
        cart_snapshotter: CartSnapshotter,
        address_resolver: AddressResolver,
        geofence: GeofenceValidator,
        notifier: OrderNotifier,
    ) -> None:
        self._order_repo = order_repository
        self._user_repo = user_repository
        self._snapshotter = cart_snapshotter
        self._resolver = address_resolver
        self._geofence = geofence
        self._notifier = notifier

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_order(self, dto: CreateOrderDTO) -> Order:
        """Admit a new order for ``dto.user_id``.

        Raises:
            GeocodingFailed: the address could not be resolved.
            InvalidGeocodeResponse: the provider answered without coordinates.
            OutOfServiceArea: the address is outside the serviceable radius.
            CartEmpty: the user has no cart or an empty one.
            UserNotFound: the user does not exist.
        """
        log = logger.bind(user_id=str(dto.user_id))
        log.info("order.creation_started")

        # 1. Resolve the address
        resolved = self._resolver.resolve(dto.address)
        if not resolved.has_coordinates:
            log.warning("order.invalid_geocode_response")
            raise InvalidGeocodeResponse("Invalid geocoding response.")

        # 2. Geofence
        if not self._geofence.is_serviceable(resolved.latitude, resolved.longitude):
            log.info(
                "order.out_of_service_area",
                latitude=resolved.latitude,
                longitude=resolved.longitude,
                radius_m=self._geofence.area.radius_m,
            )
            raise OutOfServiceArea("Service not available at this location.")

        # 3. Snapshot the cart
        snapshot = self._snapshotter.snapshot(dto.user_id)

        # 4. The user must exist
        user = self._user_repo.get_by_id(dto.user_id)
        if user is None:
            raise UserNotFound(f"User {dto.user_id} not found.")

        # 5. Persist
        now = timezone.now()
        components = resolved.components
        order = self._order_repo.create(
            {
                "user": user,
                "pickup_date": dto.pickup_date,
                "pickup_time": dto.pickup_time,
                "formatted_address": resolved.formatted_address,
                "street": components.road,
                "postal_code": components.postcode,
                "city": components.city,
                "country": components.country,
                "latitude": resolved.latitude,
                "longitude": resolved.longitude,
                "total_amount": snapshot.total_amount,
                "order_person_name": dto.order_person_name,
                "phone_number": dto.phone_number,
                "status": OrderStatus.PENDING,
                "created_at": now,
                "expires_at": now + ORDER_EXPIRY_WINDOW,
                "services": [
                    {"service_id": entry.service_id, "items": entry.as_items_list()}
                    for entry in snapshot.services
                ],
            }
        )

        log.info(
            "order.created",
            order_id=str(order.id),
            total_amount=str(order.total_amount),
            expires_at=order.expires_at.isoformat(),
        )
        return order

    def update_order(self, order_id: str, dto: UpdateOrderDTO) -> Order:
        """Apply an admin update; email the owner if the status changed.

        Raises:
            OrderNotFound: order does not exist.
            ValidationFailed: the result violates an entity constraint.
            NotificationFailed: the status email could not be sent.
        """
        existing = self._order_repo.get_by_id(order_id)
        if existing is None:
            raise OrderNotFound(f"Order {order_id} not found.")
        old_status = existing.status

        changes = dto.changes()
        order = self._order_repo.update(order_id, changes)
        if order is None:
            raise OrderNotFound(f"Order {order_id} not found.")

        if "status" in changes and order.status != old_status:
            logger.info(
                "order.status_updated",
                order_id=str(order.id),
                old_status=old_status,
                new_status=order.status,
            )
            self._notifier.send_status_update(order)
        return order

    def update_status(self, order_id: str, new_status: str) -> Order:
        """Set the order status, persist it, then email the owner.

        Raises:
            OrderNotFound: order does not exist.
            ValidationFailed: *new_status* is not a known status.
            NotificationFailed: the email could not be sent (the new
                status stays persisted).
        """
        try:
            status_value = OrderStatus(new_status)
        except ValueError as exc:
            raise ValidationFailed(
                f"Invalid status {new_status!r}.",
                {"status": [f'"{new_status}" is not a valid choice.']},
            ) from exc

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(f"Order {order_id} not found.")

        old_status = order.status
        order.status = status_value
        self._order_repo.save(order)
        logger.info(
            "order.status_updated",
            order_id=str(order.id),
            old_status=old_status,
            new_status=status_value,
        )

        self._notifier.send_status_update(order)
        return order

    def delete_order(self, order_id: str) -> None:
        """Raises ``OrderNotFound`` if there is nothing to delete."""
        if not self._order_repo.delete(order_id):
            raise OrderNotFound(f"Order {order_id} not found.")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: str) -> Order:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order

    def list_orders(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        return self._order_repo.list(filters)

    def list_user_orders(self, user_id: Any) -> List[Order]:
        """Return a user's orders.

        Raises:
            OrderNotFound: the user has no orders.
        """
        orders = self._order_repo.list_by_user(user_id)
        if not orders:
            raise OrderNotFound("No orders found for this user.")
        return orders


def build_order_service() -> OrderService:
    """Wire ``OrderService`` with its Django-backed collaborators."""
    from modules.carts.repositories.django_repository import CartDjangoRepository
    from modules.carts.snapshot import CartSnapshotter
    from modules.geo.geofence import GeofenceValidator, ServiceArea
    from modules.geo.resolver import AddressResolver
    from modules.orders.notifications import OrderNotifier
    from modules.orders.repositories.django_repository import OrderDjangoRepository
    from modules.users.repositories.django_repository import UserDjangoRepository

    return OrderService(
        order_repository=OrderDjangoRepository(),
        user_repository=UserDjangoRepository(),
        cart_snapshotter=CartSnapshotter(CartDjangoRepository()),
        address_resolver=AddressResolver(),
        geofence=GeofenceValidator(ServiceArea.from_settings()),
        notifier=OrderNotifier(),
    )
