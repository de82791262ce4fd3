"""
Store Profile Schemas for KAMS POS
==================================

The store profile holds the printable details of the pizzeria (name,
address, contact, logo) shown on receipts. There is one profile per store
account, keyed by the account id from the identity provider.

Endpoint Coverage:
------------------
- GET /api/store: Current store's profile (null until created)
- POST /api/store: Create or replace the current store's profile
"""

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, field_validator

from .common import CamelModel, blank_to_none


class StoreProfileIn(CamelModel):
    name: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    logo_url: Optional[str] = None

    @field_validator("email", "logo_url", mode="before")
    @classmethod
    def blank_optional(cls, value):
        return blank_to_none(value)


class StoreProfileOut(CamelModel):
    id: str
    owner_id: str
    name: str
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    logo_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime
