"""
Store Profile Routes for KAMS POS
=================================

Endpoints:
----------
- GET /store: The current store's profile, or null before onboarding
- POST /store: Create or replace the current store's profile

Both require only the store session: the profile is filled in during
onboarding, before any employee exists.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..auth import AuthResult, require_store_session
from ..db import get_db
from ..models import Store
from ..schemas.stores import StoreProfileIn, StoreProfileOut

logger = logging.getLogger(__name__)

store_router = APIRouter(prefix="/store", tags=["Store"])

PROFILE_FIELDS = ("street", "city", "state", "zip", "phone", "email", "logo_url")


@store_router.get("", response_model=Optional[StoreProfileOut])
def get_store(
    auth: AuthResult = Depends(require_store_session),
    db: Session = Depends(get_db),
) -> Optional[StoreProfileOut]:
    store = db.query(Store).filter(Store.owner_id == auth.store_account_id).first()
    if store is None:
        return None
    return StoreProfileOut.model_validate(store)


@store_router.post("", response_model=StoreProfileOut)
def save_store(
    payload: StoreProfileIn,
    auth: AuthResult = Depends(require_store_session),
    db: Session = Depends(get_db),
) -> StoreProfileOut:
    """Upsert the profile owned by the current store account."""
    name = (payload.name or "").strip()
    if not name:
        raise HTTPException(status_code=400, detail="Store name is required")

    store = db.query(Store).filter(Store.owner_id == auth.store_account_id).first()
    created = store is None
    if created:
        store = Store(owner_id=auth.store_account_id)
        db.add(store)

    store.name = name
    for field in PROFILE_FIELDS:
        setattr(store, field, getattr(payload, field))

    db.commit()
    db.refresh(store)

    logger.info("%s store profile for %s", "Created" if created else "Updated", auth.store_account_id)
    return StoreProfileOut.model_validate(store)
