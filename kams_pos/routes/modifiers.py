"""
Modifier Routes for KAMS POS
============================

Endpoints:
----------
- POST /menu/modifiers: Create a modifier in a group, with optional prices
- PATCH /menu/modifiers/{modifier_id}: Rename and/or replace all prices
- DELETE /menu/modifiers/{modifier_id}: Delete a modifier

All endpoints require an ADMIN employee.

Prices are always replaced as a whole: sending `prices` removes every
existing price of the modifier first. Omitting `prices` leaves them alone.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..auth import AuthResult, require_admin
from ..db import get_db
from ..models import Modifier, ModifierGroup, ModifierPrice
from ..schemas.common import SuccessResponse
from ..schemas.modifiers import ModifierCreate, ModifierOut, ModifierUpdate

logger = logging.getLogger(__name__)

modifiers_router = APIRouter(prefix="/menu/modifiers", tags=["Menu - Modifiers"])


def _get_modifier(db: Session, modifier_id: str) -> Modifier:
    modifier = db.get(Modifier, modifier_id)
    if modifier is None:
        raise HTTPException(status_code=404, detail="Modifier not found")
    return modifier


@modifiers_router.post("", response_model=ModifierOut)
def create_modifier(
    payload: ModifierCreate,
    auth: AuthResult = Depends(require_admin),
    db: Session = Depends(get_db),
) -> ModifierOut:
    name = (payload.name or "").strip()
    if not name or not payload.group_id:
        raise HTTPException(status_code=400, detail="Name and groupId are required")

    if db.get(ModifierGroup, payload.group_id) is None:
        raise HTTPException(status_code=404, detail="Modifier group not found")

    modifier = Modifier(
        name=name,
        group_id=payload.group_id,
        prices=[ModifierPrice(size_label=p.size_label, price=p.price) for p in payload.prices],
    )
    db.add(modifier)
    db.commit()
    db.refresh(modifier)
    logger.info("Created modifier: %s (id=%s, prices=%d)", modifier.name, modifier.id, len(modifier.prices))
    return ModifierOut.model_validate(modifier)


@modifiers_router.patch("/{modifier_id}", response_model=ModifierOut)
def update_modifier(
    modifier_id: str,
    payload: ModifierUpdate,
    auth: AuthResult = Depends(require_admin),
    db: Session = Depends(get_db),
) -> ModifierOut:
    modifier = _get_modifier(db, modifier_id)

    if payload.name is not None:
        name = payload.name.strip()
        if not name:
            raise HTTPException(status_code=400, detail="Name is required")
        modifier.name = name

    if payload.prices is not None:
        modifier.prices.clear()
        db.flush()
        modifier.prices.extend(
            ModifierPrice(size_label=p.size_label, price=p.price) for p in payload.prices
        )

    db.commit()
    db.refresh(modifier)
    logger.info("Updated modifier %s", modifier.id)
    return ModifierOut.model_validate(modifier)


@modifiers_router.delete("/{modifier_id}", response_model=SuccessResponse)
def delete_modifier(
    modifier_id: str,
    auth: AuthResult = Depends(require_admin),
    db: Session = Depends(get_db),
) -> SuccessResponse:
    modifier = _get_modifier(db, modifier_id)
    db.delete(modifier)
    db.commit()
    logger.info("Deleted modifier %s", modifier_id)
    return SuccessResponse(success=True)
