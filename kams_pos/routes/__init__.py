"""
Routes Package for KAMS POS
===========================

This package contains all API route definitions organized by domain. Each
module defines a FastAPI APIRouter with related endpoints grouped together.

Architecture Overview:
----------------------
**Authentication:**
- auth.py: Store login/logout, PIN login, till logout, admin setup, session

**Store administration:**
- users.py: Employees (list, create, update, deactivate)
- store.py: Store profile (receipt header)

**Menu:**
- menu.py: Menu for the till
- menu_categories.py / menu_items.py: Category and item management
- modifier_groups.py / modifiers.py: Modifier management

**Operations:**
- customers.py: Customer lookup and address book
- orders.py: Order capture and the order board
- analytics.py: Sales summary

Router Registration:
--------------------
All routers are registered by app_factory.create_app() under /api.

Route Dependencies:
-------------------
Access is declared per endpoint with FastAPI's Depends():
- require_store_session: Store signed in (no employee needed)
- require_employee: Store signed in and an employee logged in at the till
- require_admin: As above, and the employee is an ADMIN

Error Handling:
---------------
Routes raise HTTPException for error conditions:
- 400: Bad request (missing fields, business rule violations)
- 401: Unauthorized (no store session, no till session, wrong PIN)
- 403: Forbidden (employee is not an ADMIN)
- 404: Not found (invalid ID)
- 429: Too many requests (PIN rate limit)
- 503: Identity provider unavailable
"""

from .auth import auth_router
from .users import users_router
from .store import store_router
from .menu import menu_router
from .menu_categories import menu_categories_router
from .menu_items import menu_items_router
from .modifier_groups import modifier_groups_router
from .modifiers import modifiers_router
from .customers import customers_router
from .orders import orders_router
from .analytics import analytics_router

__all__ = [
    "auth_router",
    "users_router",
    "store_router",
    "menu_router",
    "menu_categories_router",
    "menu_items_router",
    "modifier_groups_router",
    "modifiers_router",
    "customers_router",
    "orders_router",
    "analytics_router",
]
