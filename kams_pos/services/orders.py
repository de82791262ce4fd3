"""
Order Service for KAMS POS
==========================

Persistence for orders captured at the till.

Key Functions:
--------------
- create_order: Insert an order with its items and modifiers in one commit
- list_orders: Filtered, paginated order board
- get_order: Order with items, customer and delivery address
- update_order: Status / payment status / notes changes

Numbering:
----------
Each order gets two numbers:
- order_number: monotonically increasing (max + 1). The unique constraint
  on the column turns a concurrent duplicate into an integrity error rather
  than two orders with the same number.
- daily_sequence: a random 4-digit number (1000-9999) called out at the
  counter. It is short on purpose and may repeat across days.

Totals:
-------
The till computes subtotal, tax, fees and total and they are stored as
sent. Line items and modifiers store name and price snapshots.
"""

import logging
import random
from datetime import datetime
from decimal import Decimal
from typing import Optional, Tuple, List

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload, selectinload

from ..models import (
    Customer,
    CustomerAddress,
    Order,
    OrderItem,
    OrderItemModifier,
    OrderStatus,
    PaymentStatus,
    User,
)
from ..schemas.orders import OrderCreate

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


class OrderError(Exception):
    """Base class for order request errors."""


class OrderValidationError(OrderError):
    pass


class OrderNotFoundError(OrderError):
    pass


class OrderReferenceNotFoundError(OrderError):
    """A referenced customer or address does not exist."""


def next_order_number(db: Session) -> int:
    current = db.query(func.max(Order.order_number)).scalar()
    return (current or 0) + 1


def generate_daily_sequence() -> int:
    return random.randint(1000, 9999)


def create_order(
    db: Session,
    payload: OrderCreate,
    placed_by: User,
) -> Order:
    """
    Create an order and its line items.

    Args:
        payload: Validated request body.
        placed_by: The authenticated employee. Used unless the payload names
                   another active employee of the same store.

    Raises:
        OrderValidationError: Missing header fields or empty items, or an
                              unknown placedByUserId.
        OrderReferenceNotFoundError: Unknown customer or delivery address.
    """
    if (
        payload.type is None
        or payload.subtotal is None
        or payload.tax is None
        or payload.total is None
        or payload.payment_method is None
        or not payload.items
    ):
        raise OrderValidationError("Missing required order fields")

    placed_by_id = placed_by.id
    if payload.placed_by_user_id and payload.placed_by_user_id != placed_by.id:
        other = (
            db.query(User)
            .filter(
                User.id == payload.placed_by_user_id,
                User.store_account_id == placed_by.store_account_id,
                User.is_active.is_(True),
            )
            .first()
        )
        if other is None:
            raise OrderValidationError("Unknown placedByUserId")
        placed_by_id = other.id

    if payload.customer_id and db.get(Customer, payload.customer_id) is None:
        raise OrderReferenceNotFoundError("Customer not found")

    if payload.delivery_address_id:
        address = db.get(CustomerAddress, payload.delivery_address_id)
        if address is None:
            raise OrderReferenceNotFoundError("Delivery address not found")

    order = Order(
        order_number=next_order_number(db),
        daily_sequence=generate_daily_sequence(),
        customer_id=payload.customer_id,
        type=payload.type.value,
        status=(payload.status or OrderStatus.NEW).value,
        subtotal=payload.subtotal,
        tax=payload.tax,
        delivery_fee=payload.delivery_fee if payload.delivery_fee is not None else Decimal("0"),
        discount_total=payload.discount_total if payload.discount_total is not None else Decimal("0"),
        total=payload.total,
        payment_method=payload.payment_method.value,
        payment_status=(payload.payment_status or PaymentStatus.PAID).value,
        placed_by_user_id=placed_by_id,
        delivery_address_id=payload.delivery_address_id,
        notes=payload.notes,
    )

    for item in payload.items:
        line = OrderItem(
            menu_item_id=item.menu_item_id,
            name_snapshot=item.name_snapshot,
            unit_price_snapshot=item.unit_price_snapshot,
            quantity=item.quantity,
            line_total=item.line_total,
            special_instructions=item.special_instructions,
        )
        for mod in item.modifiers:
            line.modifiers.append(OrderItemModifier(
                modifier_id=mod.modifier_id,
                name_snapshot=mod.name_snapshot,
                price_snapshot=mod.price_snapshot,
            ))
        order.items.append(line)

    db.add(order)
    db.commit()
    db.refresh(order)

    logger.info(
        "Created order #%d (id=%s, type=%s, total=%s, items=%d)",
        order.order_number, order.id, order.type, order.total, len(order.items),
    )
    return order


def list_orders(
    db: Session,
    status: Optional[str] = None,
    order_type: Optional[str] = None,
    created_from: Optional[datetime] = None,
    created_to: Optional[datetime] = None,
    page: int = 1,
    page_size: int = 20,
) -> Tuple[List[Order], int]:
    """Orders matching the filters, newest first, with the total match count."""
    page = max(page, 1)
    page_size = min(max(page_size, 1), MAX_PAGE_SIZE)

    query = db.query(Order)
    if status:
        query = query.filter(Order.status == status)
    if order_type:
        query = query.filter(Order.type == order_type)
    if created_from is not None:
        query = query.filter(Order.created_at >= created_from)
    if created_to is not None:
        query = query.filter(Order.created_at <= created_to)

    total = query.count()
    orders = (
        query.options(joinedload(Order.customer).joinedload(Customer.default_address))
        .order_by(Order.created_at.desc(), Order.order_number.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return orders, total


def get_order(db: Session, order_id: str) -> Order:
    order = (
        db.query(Order)
        .options(
            selectinload(Order.items).selectinload(OrderItem.modifiers),
            joinedload(Order.customer),
            joinedload(Order.delivery_address),
        )
        .filter(Order.id == order_id)
        .first()
    )
    if order is None:
        raise OrderNotFoundError(order_id)
    return order


def update_order(
    db: Session,
    order_id: str,
    status: Optional[OrderStatus] = None,
    payment_status: Optional[PaymentStatus] = None,
    notes: Optional[str] = None,
    notes_set: bool = False,
) -> Order:
    """
    Update the mutable parts of an order.

    `notes_set` distinguishes "clear the notes" (notes=None, notes_set=True)
    from "leave the notes alone".
    """
    order = get_order(db, order_id)

    if status is not None and status.value != order.status:
        logger.info("Order #%d status %s -> %s", order.order_number, order.status, status.value)
        order.status = status.value
    if payment_status is not None:
        order.payment_status = payment_status.value
    if notes_set:
        order.notes = notes

    db.commit()
    return get_order(db, order_id)
