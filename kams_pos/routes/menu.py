"""
Menu Route for KAMS POS
=======================

Endpoints:
----------
- GET /menu: The menu as shown on the till

The till loads the whole menu in one call: categories by sort order, each
with its available items (sort order, then name), and for every item the
attached modifier groups with their modifiers and prices. Unavailable items
are left out here but still appear in menu administration.

Administration endpoints live in menu_categories.py, menu_items.py,
modifier_groups.py and modifiers.py.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session, selectinload

from ..auth import AuthResult, require_employee
from ..db import get_db
from ..models import (
    MenuCategory,
    MenuItem,
    MenuItemModifierGroup,
    Modifier,
    ModifierGroup,
)
from ..schemas.menu import MenuCategoryWithItems, MenuItemOut

logger = logging.getLogger(__name__)

menu_router = APIRouter(prefix="/menu", tags=["Menu"])


def serialize_category(category: MenuCategory) -> MenuCategoryWithItems:
    """Convert a category to the till view (available items only)."""
    return MenuCategoryWithItems(
        id=category.id,
        name=category.name,
        sort_order=category.sort_order,
        icon=category.icon,
        image_url=category.image_url,
        items=[MenuItemOut.model_validate(item) for item in category.items if item.is_available],
    )


@menu_router.get("", response_model=List[MenuCategoryWithItems])
def get_menu(
    auth: AuthResult = Depends(require_employee),
    db: Session = Depends(get_db),
) -> List[MenuCategoryWithItems]:
    categories = (
        db.query(MenuCategory)
        .options(
            selectinload(MenuCategory.items)
            .selectinload(MenuItem.modifier_group_links)
            .selectinload(MenuItemModifierGroup.modifier_group)
            .selectinload(ModifierGroup.modifiers)
            .selectinload(Modifier.prices)
        )
        .order_by(MenuCategory.sort_order, MenuCategory.name)
        .all()
    )
    return [serialize_category(c) for c in categories]
