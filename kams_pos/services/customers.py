"""
Customer Service for KAMS POS
=============================

Customer records for phone and delivery orders.

Phone Numbers:
--------------
Cashiers type phone numbers in whatever format the caller dictates, and
look customers up by the same digits later. Numbers are therefore stored as
bare digits. A number that Google's phonenumbers library recognises as a
valid number (default region US) is stored as its national significant
number, so "+1 (650) 253-0000" and "650.253.0000" both become "6502530000".
Anything else keeps its digits as typed.

Address Book:
-------------
A customer owns any number of addresses. At most one is the default, and
`Customer.default_address_id` points at it. Replacing the address book
clears the pointer first, then re-points it at the entry marked default.
"""

import logging
import re
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

import phonenumbers
from phonenumbers.phonenumberutil import NumberParseException
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from ..models import Customer, CustomerAddress, Order
from ..schemas.customers import AddressIn, CustomerCreate

logger = logging.getLogger(__name__)

DEFAULT_REGION = "US"
RECENT_ORDER_LIMIT = 10
MAX_PAGE_SIZE = 100


class CustomerError(Exception):
    """Base class for customer request errors."""


class CustomerNotFoundError(CustomerError):
    pass


class CustomerValidationError(CustomerError):
    pass


# =============================================================================
# Phone Normalization
# =============================================================================

def digits_only(value: str) -> str:
    return re.sub(r"\D", "", value or "")


def normalize_phone(raw: str) -> str:
    """Normalize a phone number for storage and lookup (digits only)."""
    digits = digits_only(raw)
    if not digits:
        return ""

    try:
        parsed = phonenumbers.parse(raw, DEFAULT_REGION)
    except NumberParseException:
        return digits

    if phonenumbers.is_valid_number(parsed):
        return phonenumbers.national_significant_number(parsed)
    return digits


# =============================================================================
# Queries
# =============================================================================

def search_customers(
    db: Session,
    phone: Optional[str] = None,
    name: Optional[str] = None,
    page: int = 1,
    page_size: int = 20,
) -> Tuple[List[Customer], int]:
    """
    Search customers by phone digits and/or name, newest first.

    Returns:
        (customers on the requested page, total matching count)
    """
    page = max(page, 1)
    page_size = min(max(page_size, 1), MAX_PAGE_SIZE)

    query = db.query(Customer)
    if phone:
        # Full numbers match the stored national form; fragments fall back to digits
        phone_digits = normalize_phone(phone)
        if phone_digits:
            query = query.filter(Customer.phone.contains(phone_digits))
    if name and name.strip():
        query = query.filter(Customer.full_name.ilike(f"%{name.strip()}%"))

    total = query.count()
    customers = (
        query.options(joinedload(Customer.default_address))
        .order_by(Customer.created_at.desc(), Customer.id)
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return customers, total


def get_customer(db: Session, customer_id: str) -> Customer:
    customer = db.get(Customer, customer_id)
    if customer is None:
        raise CustomerNotFoundError(customer_id)
    return customer


def recent_orders(db: Session, customer_id: str, limit: int = RECENT_ORDER_LIMIT) -> List[Order]:
    return (
        db.query(Order)
        .filter(Order.customer_id == customer_id)
        .order_by(Order.created_at.desc())
        .limit(limit)
        .all()
    )


def customer_stats(db: Session, customer_id: str) -> Dict[str, Any]:
    """Lifetime order count, amount spent and last order date for a customer."""
    count, total_spent, last_order = (
        db.query(
            func.count(Order.id),
            func.coalesce(func.sum(Order.total), 0),
            func.max(Order.created_at),
        )
        .filter(Order.customer_id == customer_id)
        .one()
    )
    return {
        "order_count": count or 0,
        "total_spent": Decimal(str(total_spent or 0)).quantize(Decimal("0.01")),
        "last_order_date": last_order,
    }


def customer_detail(db: Session, customer_id: str) -> Dict[str, Any]:
    """Everything the customer screen shows, as a dict for CustomerDetailOut."""
    customer = get_customer(db, customer_id)
    return {
        "id": customer.id,
        "full_name": customer.full_name,
        "phone": customer.phone,
        "email": customer.email,
        "image_url": customer.image_url,
        "notes": customer.notes,
        "default_address_id": customer.default_address_id,
        "default_address": customer.default_address,
        "created_at": customer.created_at,
        "addresses": customer.addresses,
        "orders": recent_orders(db, customer.id),
        "stats": customer_stats(db, customer.id),
    }


# =============================================================================
# Mutations
# =============================================================================

def _build_address(data: AddressIn, default_when_unset: bool) -> CustomerAddress:
    return CustomerAddress(
        label=data.label,
        street=data.street,
        city=data.city,
        state=data.state,
        zip=data.zip,
        extra_directions=data.extra_directions,
        is_default=data.is_default if data.is_default is not None else default_when_unset,
    )


def save_customer(db: Session, payload: CustomerCreate) -> Tuple[Customer, bool]:
    """
    Create a customer, or update one when payload.id is set.

    Returns:
        (customer, created)
    """
    full_name = (payload.full_name or "").strip()
    phone = normalize_phone(payload.phone or "")
    if not full_name or not phone:
        raise CustomerValidationError("fullName and phone are required")

    if payload.id:
        customer = get_customer(db, payload.id)
        customer.full_name = full_name
        customer.phone = phone
        customer.email = payload.email
        customer.notes = payload.notes
        if payload.image_url is not None:
            customer.image_url = payload.image_url
        db.commit()
        db.refresh(customer)
        logger.info("Updated customer %s", customer.id)
        return customer, False

    customer = Customer(
        full_name=full_name,
        phone=phone,
        email=payload.email,
        image_url=payload.image_url,
        notes=payload.notes,
    )
    db.add(customer)

    if payload.address is not None:
        address = _build_address(payload.address, default_when_unset=True)
        customer.addresses.append(address)
        if address.is_default:
            customer.default_address = address

    db.commit()
    db.refresh(customer)
    logger.info("Created customer %s", customer.id)
    return customer, True


def replace_addresses(db: Session, customer: Customer, addresses: List[AddressIn]) -> None:
    """Replace the whole address book and re-point the default address."""
    customer.default_address = None
    db.flush()

    customer.addresses.clear()
    db.flush()

    new_addresses = [_build_address(a, default_when_unset=False) for a in addresses]
    customer.addresses.extend(new_addresses)
    customer.default_address = next((a for a in new_addresses if a.is_default), None)


def update_customer(db: Session, customer_id: str, changes: Dict[str, Any]) -> Customer:
    """
    Apply a partial update. `changes` holds only the fields the client sent;
    `addresses`, when present, is a list of AddressIn.
    """
    customer = get_customer(db, customer_id)

    if changes.get("full_name") is not None:
        full_name = changes["full_name"].strip()
        if not full_name:
            raise CustomerValidationError("fullName cannot be empty")
        customer.full_name = full_name

    if changes.get("phone") is not None:
        phone = normalize_phone(changes["phone"])
        if not phone:
            raise CustomerValidationError("phone cannot be empty")
        customer.phone = phone

    for field in ("email", "image_url", "notes"):
        if field in changes:
            setattr(customer, field, changes[field])

    if changes.get("addresses") is not None:
        replace_addresses(db, customer, changes["addresses"])

    db.commit()
    db.refresh(customer)
    logger.info("Updated customer %s", customer.id)
    return customer
