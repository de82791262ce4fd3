"""
Menu Schemas for KAMS POS
=========================

This module defines Pydantic models for the menu shown on the till and for
menu administration.

Endpoint Coverage:
------------------
- GET /api/menu: Full menu (categories with available items)
- POST /api/menu/categories, PATCH/DELETE /api/menu/categories/{id}
- POST /api/menu/items, PATCH/DELETE /api/menu/items/{id}
- POST/DELETE /api/menu/items/{id}/modifier-groups

Prices:
-------
`base_price` is a decimal with two places and `tax_rate` a fraction
(0.0875 for 8.75%). Both are serialized as strings so no precision is lost
in JSON.
"""

from decimal import Decimal
from typing import List, Optional

from pydantic import Field, field_validator

from .common import CamelModel, blank_to_none
from .modifiers import ModifierGroupOut


class MenuCategoryOut(CamelModel):
    id: str
    name: str
    sort_order: int
    icon: Optional[str] = None
    image_url: Optional[str] = None


class MenuItemOut(CamelModel):
    id: str
    category_id: str
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    base_price: Decimal
    tax_rate: Decimal
    is_available: bool
    sort_order: int
    sku: Optional[str] = None
    modifier_groups: List[ModifierGroupOut] = []


class MenuCategoryWithItems(MenuCategoryOut):
    items: List[MenuItemOut] = []


class MenuCategoryCreate(CamelModel):
    name: Optional[str] = None
    sort_order: Optional[int] = None
    icon: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("image_url", mode="before")
    @classmethod
    def blank_image_url(cls, value):
        return blank_to_none(value)


class MenuCategoryUpdate(CamelModel):
    name: Optional[str] = None
    sort_order: Optional[int] = None
    icon: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("image_url", mode="before")
    @classmethod
    def blank_image_url(cls, value):
        return blank_to_none(value)


class MenuItemCreate(CamelModel):
    category_id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    base_price: Optional[Decimal] = Field(default=None, ge=0)
    tax_rate: Decimal = Field(default=Decimal("0"), ge=0)
    is_available: bool = True
    sort_order: Optional[int] = None
    sku: Optional[str] = None

    @field_validator("image_url", mode="before")
    @classmethod
    def blank_image_url(cls, value):
        return blank_to_none(value)


class MenuItemUpdate(CamelModel):
    category_id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    base_price: Optional[Decimal] = Field(default=None, ge=0)
    tax_rate: Optional[Decimal] = Field(default=None, ge=0)
    is_available: Optional[bool] = None
    sort_order: Optional[int] = None
    sku: Optional[str] = None

    @field_validator("image_url", mode="before")
    @classmethod
    def blank_image_url(cls, value):
        return blank_to_none(value)


class AttachModifierGroupRequest(CamelModel):
    modifier_group_id: Optional[str] = None
