"""
Menu Category Routes for KAMS POS
=================================

Endpoints:
----------
- POST /menu/categories: Create a category
- PATCH /menu/categories/{category_id}: Update a category
- DELETE /menu/categories/{category_id}: Delete an empty category

All endpoints require an ADMIN employee. A category that still has items
(available or not) cannot be deleted.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..auth import AuthResult, require_admin
from ..db import get_db
from ..models import MenuCategory, MenuItem
from ..schemas.common import SuccessResponse
from ..schemas.menu import MenuCategoryCreate, MenuCategoryOut, MenuCategoryUpdate

logger = logging.getLogger(__name__)

menu_categories_router = APIRouter(prefix="/menu/categories", tags=["Menu - Categories"])


def _get_category(db: Session, category_id: str) -> MenuCategory:
    category = db.get(MenuCategory, category_id)
    if category is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@menu_categories_router.post("", response_model=MenuCategoryOut)
def create_category(
    payload: MenuCategoryCreate,
    auth: AuthResult = Depends(require_admin),
    db: Session = Depends(get_db),
) -> MenuCategoryOut:
    name = (payload.name or "").strip()
    if not name:
        raise HTTPException(status_code=400, detail="Name is required")

    category = MenuCategory(
        name=name,
        sort_order=payload.sort_order or 0,
        icon=payload.icon,
        image_url=payload.image_url,
    )
    db.add(category)
    db.commit()
    db.refresh(category)
    logger.info("Created menu category: %s (id=%s)", category.name, category.id)
    return MenuCategoryOut.model_validate(category)


@menu_categories_router.patch("/{category_id}", response_model=MenuCategoryOut)
def update_category(
    category_id: str,
    payload: MenuCategoryUpdate,
    auth: AuthResult = Depends(require_admin),
    db: Session = Depends(get_db),
) -> MenuCategoryOut:
    """Update only the fields that were sent."""
    category = _get_category(db, category_id)

    changes = payload.model_dump(exclude_unset=True)
    if "name" in changes:
        name = (changes["name"] or "").strip()
        if not name:
            raise HTTPException(status_code=400, detail="Name is required")
        category.name = name
    if changes.get("sort_order") is not None:
        category.sort_order = changes["sort_order"]
    if "icon" in changes:
        category.icon = changes["icon"]
    if "image_url" in changes:
        category.image_url = changes["image_url"]

    db.commit()
    db.refresh(category)
    logger.info("Updated menu category %s", category.id)
    return MenuCategoryOut.model_validate(category)


@menu_categories_router.delete("/{category_id}", response_model=SuccessResponse)
def delete_category(
    category_id: str,
    auth: AuthResult = Depends(require_admin),
    db: Session = Depends(get_db),
) -> SuccessResponse:
    category = _get_category(db, category_id)

    item_count = db.query(MenuItem).filter(MenuItem.category_id == category.id).count()
    if item_count > 0:
        raise HTTPException(
            status_code=400,
            detail="Cannot delete category with items. Remove items first.",
        )

    db.delete(category)
    db.commit()
    logger.info("Deleted menu category %s", category_id)
    return SuccessResponse(success=True)
