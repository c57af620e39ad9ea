"""
app/api/orders.py

Purpose: Order endpoints

- POST  /orders                place an order for a service
- GET   /orders                own orders (all orders for admins)
- GET   /orders/{id}           one order (owner or admin)
- PATCH /orders/{id}/status    processing status (admin)
- PATCH /orders/{id}/payment   payment status (admin)
"""

from typing import List

from fastapi import APIRouter, Depends, status

from app.api.deps import get_current_user, require_admin
from app.db.provider import get_storage
from app.db.storage import Storage
from app.models.order import Order
from app.models.user import User
from app.schemas.order import OrderCreate, OrderStatusUpdate, PaymentStatusUpdate
from app.services import order_service

router = APIRouter()


@router.post("/orders", response_model=Order, status_code=status.HTTP_201_CREATED)
async def create_order(
    payload: OrderCreate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return await order_service.place_order(storage, user, payload.service_id, payload.notes)


@router.get("/orders", response_model=List[Order])
async def list_orders(
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return await order_service.list_orders_for(storage, user)


@router.get("/orders/{order_id}", response_model=Order)
async def get_order(
    order_id: int,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return await order_service.get_order_for(storage, user, order_id)


@router.patch("/orders/{order_id}/status", response_model=Order)
async def update_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    _: User = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    return await order_service.change_status(storage, order_id, payload.status)


@router.patch("/orders/{order_id}/payment", response_model=Order)
async def update_payment_status(
    order_id: int,
    payload: PaymentStatusUpdate,
    _: User = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    return await order_service.change_payment_status(storage, order_id, payload.payment_status)
