"""
Customer Routes for KAMS POS
============================

Endpoints:
----------
- GET /customers: Search by phone and/or name, newest first (paginated)
- POST /customers: Create a customer, or update one when `id` is sent
- GET /customers/{customer_id}: Detail with addresses, recent orders, stats
- PATCH /customers/{customer_id}: Partial update, optional address book
  replacement

All endpoints require a logged-in employee.

Usage:
------
    # Caller ID lookup while taking a phone order
    GET /api/customers?phone=650253

    # Quick-create with a delivery address (becomes the default)
    POST /api/customers
    {
        "fullName": "Maria Rossi",
        "phone": "(650) 253-0000",
        "address": {"street": "1 Main St", "city": "Springfield", "state": "IL", "zip": "62701"}
    }
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from ..auth import AuthResult, require_employee
from ..db import get_db
from ..schemas.customers import (
    CustomerCreate,
    CustomerDetailOut,
    CustomerOut,
    CustomerPage,
    CustomerUpdate,
)
from ..services import customers as customer_service
from ..services.customers import CustomerNotFoundError, CustomerValidationError

logger = logging.getLogger(__name__)

customers_router = APIRouter(prefix="/customers", tags=["Customers"])


@customers_router.get("", response_model=CustomerPage)
def search_customers(
    phone: Optional[str] = Query(None, description="Digits contained in the phone number"),
    name: Optional[str] = Query(None, description="Case-insensitive name fragment"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100, alias="pageSize"),
    auth: AuthResult = Depends(require_employee),
    db: Session = Depends(get_db),
) -> CustomerPage:
    customers, total = customer_service.search_customers(db, phone=phone, name=name, page=page, page_size=page_size)
    return CustomerPage(
        items=[CustomerOut.model_validate(c) for c in customers],
        total=total,
        page=page,
        page_size=page_size,
    )


@customers_router.post("", response_model=CustomerOut, status_code=status.HTTP_201_CREATED)
def save_customer(
    payload: CustomerCreate,
    response: Response,
    auth: AuthResult = Depends(require_employee),
    db: Session = Depends(get_db),
) -> CustomerOut:
    """Create a customer (201), or update the one named by `id` (200)."""
    try:
        customer, created = customer_service.save_customer(db, payload)
    except CustomerValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CustomerNotFoundError:
        raise HTTPException(status_code=404, detail="Customer not found")

    if not created:
        response.status_code = status.HTTP_200_OK
    return CustomerOut.model_validate(customer)


@customers_router.get("/{customer_id}", response_model=CustomerDetailOut)
def get_customer(
    customer_id: str,
    auth: AuthResult = Depends(require_employee),
    db: Session = Depends(get_db),
) -> CustomerDetailOut:
    try:
        detail = customer_service.customer_detail(db, customer_id)
    except CustomerNotFoundError:
        raise HTTPException(status_code=404, detail="Customer not found")
    return CustomerDetailOut.model_validate(detail)


@customers_router.patch("/{customer_id}", response_model=CustomerDetailOut)
def update_customer(
    customer_id: str,
    payload: CustomerUpdate,
    auth: AuthResult = Depends(require_employee),
    db: Session = Depends(get_db),
) -> CustomerDetailOut:
    changes = payload.model_dump(exclude_unset=True, exclude={"addresses"})
    if payload.addresses is not None:
        changes["addresses"] = payload.addresses

    try:
        customer_service.update_customer(db, customer_id, changes)
    except CustomerNotFoundError:
        raise HTTPException(status_code=404, detail="Customer not found")
    except CustomerValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return CustomerDetailOut.model_validate(customer_service.customer_detail(db, customer_id))
