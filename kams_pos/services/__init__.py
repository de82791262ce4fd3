"""
Services Package for KAMS POS
=============================

This package contains the business rules that are more than a single ORM
read or write. Simple CRUD (menu, store profile) lives directly in the route
modules.

Available Services:
-------------------
- **users**: Employee PIN login, CRUD and the admin safety guards
- **customers**: Phone normalization, search, address book, stats
- **orders**: Order numbering, nested creation, filtering, status changes
- **analytics**: Sales summary for the dashboard

Design Philosophy:
------------------
1. **Dependency Injection**: Services receive the database session and the
   caller's store account id rather than reading request state.

2. **Domain Exceptions**: Services raise their own exception types
   (EmployeeNotFoundError, LastAdminError, OrderValidationError, ...) and
   routes translate them into HTTP status codes.

Usage:
------
    from kams_pos.services.users import authenticate_employee
    from kams_pos.services import orders, customers
"""

from . import users
from . import customers
from . import orders
from . import analytics

__all__ = ["users", "customers", "orders", "analytics"]
