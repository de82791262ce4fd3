"""
Order Schemas for KAMS POS
==========================

This module defines Pydantic models for order capture and the order board.

Order Structure:
----------------
Order
 ├─ OrderItem (one per line on the ticket)
 │   └─ OrderItemModifier (options chosen for that line)
 ├─ Customer (optional, required in practice for delivery)
 └─ Delivery address (optional)

Line items and modifiers carry snapshots of the name and price at the time
of sale, so later menu edits never change an existing receipt. All totals
are computed by the till and stored as sent.

Endpoint Coverage:
------------------
- POST /api/orders: Create an order with its items and modifiers
- GET /api/orders: List orders (filters: status, type, from, to)
- GET /api/orders/{id}: Order detail
- PATCH /api/orders/{id}: Advance status, record payment, edit notes
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from ..models import OrderStatus, OrderType, PaymentMethod, PaymentStatus
from .common import CamelModel
from .customers import AddressOut, CustomerOut


class OrderItemModifierIn(CamelModel):
    modifier_id: Optional[str] = None
    name_snapshot: str
    price_snapshot: Decimal = Decimal("0")


class OrderItemIn(CamelModel):
    menu_item_id: Optional[str] = None
    name_snapshot: str
    unit_price_snapshot: Decimal
    quantity: int = Field(ge=1)
    line_total: Decimal
    special_instructions: Optional[str] = None
    modifiers: List[OrderItemModifierIn] = []


class OrderCreate(CamelModel):
    """
    Request model for creating an order.

    The header fields checked by the route are optional here so a missing
    one produces the single "Missing required order fields" message.
    """
    customer_id: Optional[str] = None
    type: Optional[OrderType] = None
    status: Optional[OrderStatus] = None
    subtotal: Optional[Decimal] = None
    tax: Optional[Decimal] = None
    delivery_fee: Optional[Decimal] = None
    discount_total: Optional[Decimal] = None
    total: Optional[Decimal] = None
    payment_method: Optional[PaymentMethod] = None
    payment_status: Optional[PaymentStatus] = None
    delivery_address_id: Optional[str] = None
    notes: Optional[str] = None
    placed_by_user_id: Optional[str] = None
    items: List[OrderItemIn] = []


class OrderUpdate(CamelModel):
    status: Optional[OrderStatus] = None
    payment_status: Optional[PaymentStatus] = None
    notes: Optional[str] = None


class OrderItemModifierOut(CamelModel):
    id: str
    modifier_id: Optional[str] = None
    name_snapshot: str
    price_snapshot: Decimal


class OrderItemOut(CamelModel):
    id: str
    menu_item_id: Optional[str] = None
    name_snapshot: str
    unit_price_snapshot: Decimal
    quantity: int
    line_total: Decimal
    special_instructions: Optional[str] = None
    modifiers: List[OrderItemModifierOut] = []


class OrderSummaryOut(CamelModel):
    """Order row for list views (no line items)."""
    id: str
    order_number: int
    daily_sequence: int
    customer_id: Optional[str] = None
    type: OrderType
    status: OrderStatus
    subtotal: Decimal
    tax: Decimal
    delivery_fee: Decimal
    discount_total: Decimal
    total: Decimal
    payment_method: PaymentMethod
    payment_status: PaymentStatus
    placed_by_user_id: Optional[str] = None
    delivery_address_id: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    customer: Optional[CustomerOut] = None


class OrderOut(OrderSummaryOut):
    items: List[OrderItemOut] = []
    delivery_address: Optional[AddressOut] = None


class OrderPage(CamelModel):
    items: List[OrderSummaryOut]
    total: int
    page: int
    page_size: int
