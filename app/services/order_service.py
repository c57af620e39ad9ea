"""
app/services/order_service.py

Purpose: Order placement and tracking

- Places orders against catalog services (price snapshot)
- Per-user and admin-wide order listings
- Ownership checks for reads
- Processing and payment status updates (admin)
"""

from typing import List, Optional

from app.core.exceptions import PermissionDeniedError, ResourceNotFoundError
from app.core.logging import get_logger, LogContext
from app.db.storage import Storage
from app.models.order import NewOrder, Order
from app.models.user import User
from app.services.catalog_service import get_service_or_404

logger = get_logger(__name__)


async def place_order(storage: Storage, user: User, service_id: int, notes: Optional[str] = None) -> Order:
    """
    Creates a pending order for a catalog service.

    Raises:
        ResourceNotFoundError: If the service does not exist
    """
    service = await get_service_or_404(storage, service_id)

    order = await storage.create_order(NewOrder(
        user_id=user.id,
        service_id=service.id,
        amount=service.price,
        notes=notes,
    ))

    with LogContext(user_id=user.id, order_id=order.id, service_id=service.id):
        logger.info(f"Order placed for {service.name} (INR {service.price})")

    return order


async def list_orders_for(storage: Storage, user: User) -> List[Order]:
    """
    Admins see every order; everyone else sees their own.
    """
    if user.is_admin:
        return await storage.get_orders()
    return await storage.get_orders_by_user_id(user.id)


async def get_order_for(storage: Storage, user: User, order_id: int) -> Order:
    """
    Raises:
        ResourceNotFoundError: If the order does not exist
        PermissionDeniedError: If the order belongs to someone else
    """
    order = await storage.get_order(order_id)
    if not order:
        raise ResourceNotFoundError(f"Order {order_id} not found")

    if order.user_id != user.id and not user.is_admin:
        raise PermissionDeniedError("You do not have access to this order")

    return order


async def change_status(storage: Storage, order_id: int, status: str) -> Order:
    with LogContext(order_id=order_id):
        order = await storage.update_order_status(order_id, status)
        if not order:
            raise ResourceNotFoundError(f"Order {order_id} not found")

        logger.info(f"Order status set to {status}")
        return order


async def change_payment_status(storage: Storage, order_id: int, payment_status: str) -> Order:
    with LogContext(order_id=order_id):
        order = await storage.update_payment_status(order_id, payment_status)
        if not order:
            raise ResourceNotFoundError(f"Order {order_id} not found")

        logger.info(f"Payment status set to {payment_status}")
        return order
