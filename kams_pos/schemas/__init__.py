"""
Schemas Package for KAMS POS
============================

This package contains all Pydantic models (schemas) used for API request
validation and response serialization.

Schema Organization:
--------------------
- **common.py**: CamelModel base and shared validators
- **auth.py**: Store login, PIN login and session schemas
- **users.py**: Employee schemas
- **stores.py**: Store profile schemas
- **menu.py**: Categories and menu items
- **modifiers.py**: Modifier groups, modifiers and prices
- **customers.py**: Customers and their address book
- **orders.py**: Orders, line items and line modifiers
- **analytics.py**: Sales summary

Naming Conventions:
-------------------
- *Out: Response models (e.g., MenuItemOut) - what API returns
- *Create: Request models for POST - what client sends to create
- *Update: Request models for PATCH - what client sends to update
- *Request / *Response: Other request and response bodies

Wire Format:
------------
Every model derives from CamelModel, so JSON keys are camelCase
(`basePrice`, `isFullyAuthenticated`) while Python attributes stay
snake_case. Decimals are serialized as strings.
"""

from .common import CamelModel, SuccessResponse
from .auth import (
    VerifyPinRequest,
    VerifyPinResponse,
    StoreCredentials,
    StoreLoginResponse,
    StoreSignupResponse,
    SessionOut,
    SetupAdminRequest,
    SetupAdminResponse,
)
from .users import (
    EmployeeOut,
    PinUserOut,
    EmployeeCreate,
    EmployeeUpdate,
    serialize_employee,
    serialize_pin_user,
)
from .stores import StoreProfileIn, StoreProfileOut
from .modifiers import (
    ModifierPriceIn,
    ModifierPriceOut,
    ModifierOut,
    ModifierCreate,
    ModifierUpdate,
    ModifierGroupOut,
    ModifierGroupCreate,
    ModifierGroupUpdate,
)
from .menu import (
    MenuCategoryOut,
    MenuCategoryWithItems,
    MenuCategoryCreate,
    MenuCategoryUpdate,
    MenuItemOut,
    MenuItemCreate,
    MenuItemUpdate,
    AttachModifierGroupRequest,
)
from .customers import (
    AddressIn,
    AddressOut,
    CustomerCreate,
    CustomerUpdate,
    CustomerOut,
    CustomerOrderOut,
    CustomerStats,
    CustomerDetailOut,
    CustomerPage,
)
from .orders import (
    OrderItemModifierIn,
    OrderItemIn,
    OrderCreate,
    OrderUpdate,
    OrderItemModifierOut,
    OrderItemOut,
    OrderSummaryOut,
    OrderOut,
    OrderPage,
)
from .analytics import TopItem, SalesSummary

__all__ = [
    "CamelModel",
    "SuccessResponse",
    "VerifyPinRequest",
    "VerifyPinResponse",
    "StoreCredentials",
    "StoreLoginResponse",
    "StoreSignupResponse",
    "SessionOut",
    "SetupAdminRequest",
    "SetupAdminResponse",
    "EmployeeOut",
    "PinUserOut",
    "EmployeeCreate",
    "EmployeeUpdate",
    "serialize_employee",
    "serialize_pin_user",
    "StoreProfileIn",
    "StoreProfileOut",
    "ModifierPriceIn",
    "ModifierPriceOut",
    "ModifierOut",
    "ModifierCreate",
    "ModifierUpdate",
    "ModifierGroupOut",
    "ModifierGroupCreate",
    "ModifierGroupUpdate",
    "MenuCategoryOut",
    "MenuCategoryWithItems",
    "MenuCategoryCreate",
    "MenuCategoryUpdate",
    "MenuItemOut",
    "MenuItemCreate",
    "MenuItemUpdate",
    "AttachModifierGroupRequest",
    "AddressIn",
    "AddressOut",
    "CustomerCreate",
    "CustomerUpdate",
    "CustomerOut",
    "CustomerOrderOut",
    "CustomerStats",
    "CustomerDetailOut",
    "CustomerPage",
    "OrderItemModifierIn",
    "OrderItemIn",
    "OrderCreate",
    "OrderUpdate",
    "OrderItemModifierOut",
    "OrderItemOut",
    "OrderSummaryOut",
    "OrderOut",
    "OrderPage",
    "TopItem",
    "SalesSummary",
]
