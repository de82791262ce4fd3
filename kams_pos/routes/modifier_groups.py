"""
Modifier Group Routes for KAMS POS
==================================

Endpoints:
----------
- GET /menu/modifier-groups: All groups by name, with modifiers and prices
- POST /menu/modifier-groups: Create a group
- PATCH /menu/modifier-groups/{group_id}: Update a group
- DELETE /menu/modifier-groups/{group_id}: Delete a group

All endpoints require an ADMIN employee. Deleting a group removes its
modifiers and detaches it from every menu item.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session, selectinload

from ..auth import AuthResult, require_admin
from ..db import get_db
from ..models import Modifier, ModifierGroup
from ..schemas.common import SuccessResponse
from ..schemas.modifiers import ModifierGroupCreate, ModifierGroupOut, ModifierGroupUpdate

logger = logging.getLogger(__name__)

modifier_groups_router = APIRouter(prefix="/menu/modifier-groups", tags=["Menu - Modifiers"])

GROUP_FLAGS = (
    "min_select",
    "max_select",
    "hide_order_section",
    "requires_size_first",
    "size_based_pricing",
    "is_optional",
)


def _get_group(db: Session, group_id: str) -> ModifierGroup:
    group = db.get(ModifierGroup, group_id)
    if group is None:
        raise HTTPException(status_code=404, detail="Modifier group not found")
    return group


@modifier_groups_router.get("", response_model=List[ModifierGroupOut])
def list_modifier_groups(
    auth: AuthResult = Depends(require_admin),
    db: Session = Depends(get_db),
) -> List[ModifierGroupOut]:
    groups = (
        db.query(ModifierGroup)
        .options(selectinload(ModifierGroup.modifiers).selectinload(Modifier.prices))
        .order_by(ModifierGroup.name)
        .all()
    )
    return [ModifierGroupOut.model_validate(g) for g in groups]


@modifier_groups_router.post("", response_model=ModifierGroupOut)
def create_modifier_group(
    payload: ModifierGroupCreate,
    auth: AuthResult = Depends(require_admin),
    db: Session = Depends(get_db),
) -> ModifierGroupOut:
    name = (payload.name or "").strip()
    if not name:
        raise HTTPException(status_code=400, detail="Name is required")

    group = ModifierGroup(name=name, **{flag: getattr(payload, flag) for flag in GROUP_FLAGS})
    db.add(group)
    db.commit()
    db.refresh(group)
    logger.info("Created modifier group: %s (id=%s)", group.name, group.id)
    return ModifierGroupOut.model_validate(group)


@modifier_groups_router.patch("/{group_id}", response_model=ModifierGroupOut)
def update_modifier_group(
    group_id: str,
    payload: ModifierGroupUpdate,
    auth: AuthResult = Depends(require_admin),
    db: Session = Depends(get_db),
) -> ModifierGroupOut:
    """Update only the fields that were sent."""
    group = _get_group(db, group_id)
    changes = payload.model_dump(exclude_unset=True)

    if "name" in changes:
        name = (changes["name"] or "").strip()
        if not name:
            raise HTTPException(status_code=400, detail="Name is required")
        group.name = name

    for flag in GROUP_FLAGS:
        if changes.get(flag) is not None:
            setattr(group, flag, changes[flag])

    db.commit()
    db.refresh(group)
    logger.info("Updated modifier group %s", group.id)
    return ModifierGroupOut.model_validate(group)


@modifier_groups_router.delete("/{group_id}", response_model=SuccessResponse)
def delete_modifier_group(
    group_id: str,
    auth: AuthResult = Depends(require_admin),
    db: Session = Depends(get_db),
) -> SuccessResponse:
    group = _get_group(db, group_id)
    db.delete(group)
    db.commit()
    logger.info("Deleted modifier group %s", group_id)
    return SuccessResponse(success=True)
