"""
Modifier Schemas for KAMS POS
=============================

Modifiers are the options a cashier can add to a menu item (toppings, crust,
extra cheese). They are organised in groups, and a group is attached to any
number of menu items.

Concepts:
---------
1. **Modifier Group**: A named set of options with selection rules
   (min_select / max_select). `requires_size_first` and `size_based_pricing`
   tell the till to ask for the pizza size before showing prices.

2. **Modifier**: One option inside a group (e.g., "Pepperoni").

3. **Modifier Price**: A price for a modifier, optionally per size label
   (e.g., Small 1.00 / Large 2.00). A null size label is a flat price.

Endpoint Coverage:
------------------
- GET/POST /api/menu/modifier-groups
- PATCH/DELETE /api/menu/modifier-groups/{id}
- POST /api/menu/modifiers
- PATCH/DELETE /api/menu/modifiers/{id}
"""

from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from .common import CamelModel


class ModifierPriceIn(CamelModel):
    size_label: Optional[str] = None
    price: Decimal = Field(default=Decimal("0"), ge=0)


class ModifierPriceOut(CamelModel):
    id: str
    size_label: Optional[str] = None
    price: Decimal


class ModifierOut(CamelModel):
    id: str
    group_id: str
    name: str
    prices: List[ModifierPriceOut] = []


class ModifierCreate(CamelModel):
    name: Optional[str] = None
    group_id: Optional[str] = None
    prices: List[ModifierPriceIn] = []


class ModifierUpdate(CamelModel):
    """Rename and/or replace the whole price list of a modifier."""
    name: Optional[str] = None
    prices: Optional[List[ModifierPriceIn]] = None


class ModifierGroupOut(CamelModel):
    id: str
    name: str
    min_select: int
    max_select: int
    hide_order_section: bool
    requires_size_first: bool
    size_based_pricing: bool
    is_optional: bool
    modifiers: List[ModifierOut] = []


class ModifierGroupCreate(CamelModel):
    name: Optional[str] = None
    min_select: int = Field(default=0, ge=0)
    max_select: int = Field(default=99, ge=0)
    hide_order_section: bool = False
    requires_size_first: bool = False
    size_based_pricing: bool = False
    is_optional: bool = False


class ModifierGroupUpdate(CamelModel):
    name: Optional[str] = None
    min_select: Optional[int] = Field(default=None, ge=0)
    max_select: Optional[int] = Field(default=None, ge=0)
    hide_order_section: Optional[bool] = None
    requires_size_first: Optional[bool] = None
    size_based_pricing: Optional[bool] = None
    is_optional: Optional[bool] = None
