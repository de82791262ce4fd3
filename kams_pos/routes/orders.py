"""
Order Routes for KAMS POS
=========================

Endpoints:
----------
- POST /orders: Create an order with items and modifiers
- GET /orders: Order board (filters: status, type, from, to; paginated)
- GET /orders/{order_id}: Order detail for the receipt screen
- PATCH /orders/{order_id}: Advance status, record payment, edit notes

All endpoints require a logged-in employee. New orders are attributed to
that employee unless `placedByUserId` names another active employee of the
same store.

Order Status Flow:
------------------
NEW -> IN_PROGRESS -> READY -> COMPLETED, or CANCELLED at any point.
The board may move an order to any status; transitions are not enforced.
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from ..auth import AuthResult, require_employee
from ..db import get_db
from ..models import OrderStatus, OrderType
from ..schemas.orders import OrderCreate, OrderOut, OrderPage, OrderSummaryOut, OrderUpdate
from ..services import orders as order_service
from ..services.orders import (
    OrderNotFoundError,
    OrderReferenceNotFoundError,
    OrderValidationError,
)

logger = logging.getLogger(__name__)

orders_router = APIRouter(prefix="/orders", tags=["Orders"])


@orders_router.post("", response_model=OrderOut, status_code=status.HTTP_201_CREATED)
def create_order(
    payload: OrderCreate,
    auth: AuthResult = Depends(require_employee),
    db: Session = Depends(get_db),
) -> OrderOut:
    try:
        order = order_service.create_order(db, payload, placed_by=auth.employee)
    except OrderValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except OrderReferenceNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return OrderOut.model_validate(order_service.get_order(db, order.id))


@orders_router.get("", response_model=OrderPage)
def list_orders(
    status_filter: Optional[OrderStatus] = Query(None, alias="status"),
    type_filter: Optional[OrderType] = Query(None, alias="type"),
    created_from: Optional[datetime] = Query(None, alias="from"),
    created_to: Optional[datetime] = Query(None, alias="to"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100, alias="pageSize"),
    auth: AuthResult = Depends(require_employee),
    db: Session = Depends(get_db),
) -> OrderPage:
    orders, total = order_service.list_orders(
        db,
        status=status_filter.value if status_filter else None,
        order_type=type_filter.value if type_filter else None,
        created_from=created_from,
        created_to=created_to,
        page=page,
        page_size=page_size,
    )
    return OrderPage(
        items=[OrderSummaryOut.model_validate(o) for o in orders],
        total=total,
        page=page,
        page_size=page_size,
    )


@orders_router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: str,
    auth: AuthResult = Depends(require_employee),
    db: Session = Depends(get_db),
) -> OrderOut:
    try:
        order = order_service.get_order(db, order_id)
    except OrderNotFoundError:
        raise HTTPException(status_code=404, detail="Order not found")
    return OrderOut.model_validate(order)


@orders_router.patch("/{order_id}", response_model=OrderOut)
def update_order(
    order_id: str,
    payload: OrderUpdate,
    auth: AuthResult = Depends(require_employee),
    db: Session = Depends(get_db),
) -> OrderOut:
    try:
        order = order_service.update_order(
            db,
            order_id,
            status=payload.status,
            payment_status=payload.payment_status,
            notes=payload.notes,
            notes_set="notes" in payload.model_fields_set,
        )
    except OrderNotFoundError:
        raise HTTPException(status_code=404, detail="Order not found")
    return OrderOut.model_validate(order)
