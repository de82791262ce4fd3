"""
Menu Item Routes for KAMS POS
=============================

Endpoints:
----------
- POST /menu/items: Create a menu item
- PATCH /menu/items/{item_id}: Update a menu item
- DELETE /menu/items/{item_id}: Delete a menu item
- POST /menu/items/{item_id}/modifier-groups: Attach a modifier group
- DELETE /menu/items/{item_id}/modifier-groups?groupId=...: Detach one

All endpoints require an ADMIN employee.

Sort Order:
-----------
A new item without an explicit sortOrder goes to the end of its category
(highest sort order in the category + 1, or 0 for an empty category).

Order History:
--------------
Deleting an item does not touch past orders; their lines keep the name and
price snapshots and lose only the link to the menu item.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func
from sqlalchemy.orm import Session

from ..auth import AuthResult, require_admin
from ..db import get_db
from ..models import MenuCategory, MenuItem, MenuItemModifierGroup, ModifierGroup
from ..schemas.common import SuccessResponse
from ..schemas.menu import (
    AttachModifierGroupRequest,
    MenuItemCreate,
    MenuItemOut,
    MenuItemUpdate,
)

logger = logging.getLogger(__name__)

menu_items_router = APIRouter(prefix="/menu/items", tags=["Menu - Items"])

ITEM_FIELDS = ("description", "image_url", "base_price", "tax_rate", "is_available", "sort_order", "sku")


# =============================================================================
# Helper Functions
# =============================================================================

def _get_item(db: Session, item_id: str) -> MenuItem:
    item = db.get(MenuItem, item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Menu item not found")
    return item


def _require_category(db: Session, category_id: str) -> MenuCategory:
    category = db.get(MenuCategory, category_id)
    if category is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


def next_sort_order(db: Session, category_id: str) -> int:
    current = (
        db.query(func.max(MenuItem.sort_order))
        .filter(MenuItem.category_id == category_id)
        .scalar()
    )
    return 0 if current is None else current + 1


# =============================================================================
# Item Endpoints
# =============================================================================

@menu_items_router.post("", response_model=MenuItemOut)
def create_menu_item(
    payload: MenuItemCreate,
    auth: AuthResult = Depends(require_admin),
    db: Session = Depends(get_db),
) -> MenuItemOut:
    name = (payload.name or "").strip()
    if not name or payload.base_price is None or not payload.category_id:
        raise HTTPException(status_code=400, detail="Name, price, and category are required")

    _require_category(db, payload.category_id)

    sort_order = payload.sort_order
    if sort_order is None:
        sort_order = next_sort_order(db, payload.category_id)

    item = MenuItem(
        category_id=payload.category_id,
        name=name,
        description=payload.description or None,
        image_url=payload.image_url,
        base_price=payload.base_price,
        tax_rate=payload.tax_rate,
        is_available=payload.is_available,
        sort_order=sort_order,
        sku=payload.sku,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    logger.info("Created menu item: %s (id=%s)", item.name, item.id)
    return MenuItemOut.model_validate(item)


@menu_items_router.patch("/{item_id}", response_model=MenuItemOut)
def update_menu_item(
    item_id: str,
    payload: MenuItemUpdate,
    auth: AuthResult = Depends(require_admin),
    db: Session = Depends(get_db),
) -> MenuItemOut:
    """Update only the fields that were sent."""
    item = _get_item(db, item_id)
    changes = payload.model_dump(exclude_unset=True)

    if "name" in changes:
        name = (changes["name"] or "").strip()
        if not name:
            raise HTTPException(status_code=400, detail="Name is required")
        item.name = name

    if changes.get("category_id"):
        _require_category(db, changes["category_id"])
        item.category_id = changes["category_id"]

    for field in ITEM_FIELDS:
        if field not in changes:
            continue
        value = changes[field]
        # Non-nullable columns ignore an explicit null
        if value is None and field in ("base_price", "tax_rate", "is_available", "sort_order"):
            continue
        setattr(item, field, value)

    db.commit()
    db.refresh(item)
    logger.info("Updated menu item %s", item.id)
    return MenuItemOut.model_validate(item)


@menu_items_router.delete("/{item_id}", response_model=SuccessResponse)
def delete_menu_item(
    item_id: str,
    auth: AuthResult = Depends(require_admin),
    db: Session = Depends(get_db),
) -> SuccessResponse:
    item = _get_item(db, item_id)
    db.delete(item)
    db.commit()
    logger.info("Deleted menu item %s", item_id)
    return SuccessResponse(success=True)


# =============================================================================
# Modifier Group Attachments
# =============================================================================

@menu_items_router.post("/{item_id}/modifier-groups", response_model=SuccessResponse)
def attach_modifier_group(
    item_id: str,
    payload: AttachModifierGroupRequest,
    auth: AuthResult = Depends(require_admin),
    db: Session = Depends(get_db),
) -> SuccessResponse:
    if not payload.modifier_group_id:
        raise HTTPException(status_code=400, detail="modifierGroupId is required")

    _get_item(db, item_id)
    if db.get(ModifierGroup, payload.modifier_group_id) is None:
        raise HTTPException(status_code=404, detail="Modifier group not found")

    existing = db.get(MenuItemModifierGroup, (item_id, payload.modifier_group_id))
    if existing is not None:
        raise HTTPException(status_code=400, detail="Modifier group already attached")

    db.add(MenuItemModifierGroup(menu_item_id=item_id, modifier_group_id=payload.modifier_group_id))
    db.commit()
    logger.info("Attached modifier group %s to item %s", payload.modifier_group_id, item_id)
    return SuccessResponse(success=True)


@menu_items_router.delete("/{item_id}/modifier-groups", response_model=SuccessResponse)
def detach_modifier_group(
    item_id: str,
    group_id: Optional[str] = Query(None, alias="groupId"),
    auth: AuthResult = Depends(require_admin),
    db: Session = Depends(get_db),
) -> SuccessResponse:
    if not group_id:
        raise HTTPException(status_code=400, detail="groupId is required")

    link = db.get(MenuItemModifierGroup, (item_id, group_id))
    if link is None:
        raise HTTPException(status_code=404, detail="Modifier group is not attached to this item")

    db.delete(link)
    db.commit()
    logger.info("Detached modifier group %s from item %s", group_id, item_id)
    return SuccessResponse(success=True)
