"""
Customer Schemas for KAMS POS
=============================

Customers are looked up at the till by phone number, so phones are stored
as bare digits (see services/customers.normalize_phone). Each customer has an
address book for delivery orders, with at most one default address.

Endpoint Coverage:
------------------
- GET /api/customers: Search by phone and/or name (paginated)
- POST /api/customers: Create (or update when an id is sent)
- GET /api/customers/{id}: Detail with addresses, recent orders and stats
- PATCH /api/customers/{id}: Partial update, optionally replacing addresses
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import EmailStr, field_validator

from .common import CamelModel, blank_to_none


class AddressIn(CamelModel):
    label: str = "Home"
    street: str
    city: str
    state: str
    zip: str
    extra_directions: Optional[str] = None
    is_default: Optional[bool] = None


class AddressOut(CamelModel):
    id: str
    customer_id: str
    label: str
    street: str
    city: str
    state: str
    zip: str
    extra_directions: Optional[str] = None
    is_default: bool


class CustomerCreate(CamelModel):
    id: Optional[str] = None
    full_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    image_url: Optional[str] = None
    notes: Optional[str] = None
    address: Optional[AddressIn] = None

    @field_validator("email", "image_url", mode="before")
    @classmethod
    def blank_optional(cls, value):
        return blank_to_none(value)


class CustomerUpdate(CamelModel):
    """
    Partial customer update.

    When `addresses` is present the whole address book is replaced and the
    entry marked default becomes the customer's default address.
    """
    full_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    image_url: Optional[str] = None
    notes: Optional[str] = None
    addresses: Optional[List[AddressIn]] = None

    @field_validator("email", "image_url", mode="before")
    @classmethod
    def blank_optional(cls, value):
        return blank_to_none(value)


class CustomerOut(CamelModel):
    id: str
    full_name: str
    phone: str
    email: Optional[str] = None
    image_url: Optional[str] = None
    notes: Optional[str] = None
    default_address_id: Optional[str] = None
    default_address: Optional[AddressOut] = None
    created_at: datetime


class CustomerOrderOut(CamelModel):
    """Order summary shown in a customer's history."""
    id: str
    order_number: int
    daily_sequence: int
    type: str
    status: str
    total: Decimal
    payment_method: str
    created_at: datetime


class CustomerStats(CamelModel):
    order_count: int
    total_spent: Decimal
    last_order_date: Optional[datetime] = None


class CustomerDetailOut(CustomerOut):
    addresses: List[AddressOut] = []
    orders: List[CustomerOrderOut] = []
    stats: CustomerStats


class CustomerPage(CamelModel):
    items: List[CustomerOut]
    total: int
    page: int
    page_size: int
