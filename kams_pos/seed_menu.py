"""
Seed a development database with a starter pizzeria menu and sample
customers.

    python -m kams_pos.seed_menu

Records use fixed ids, so running the seed twice changes nothing. Tables
must exist first (`alembic upgrade head`, or init_db() for SQLite).
"""

import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from .models import Customer, CustomerAddress, MenuCategory, MenuItem

logger = logging.getLogger(__name__)


CATEGORIES = [
    {"id": "cat-pizza", "name": "Pizza", "sort_order": 1},
    {"id": "cat-sides", "name": "Sides", "sort_order": 2},
    {"id": "cat-drinks", "name": "Drinks", "sort_order": 3},
]

ITEMS = [
    # Pizzas
    {"id": "item-cheese", "category_id": "cat-pizza", "name": "Cheese Pizza",
     "description": "Classic cheese pizza with mozzarella", "base_price": "12.99", "sku": "PIZ-001"},
    {"id": "item-pepperoni", "category_id": "cat-pizza", "name": "Pepperoni Pizza",
     "description": "Pepperoni and mozzarella", "base_price": "14.99", "sku": "PIZ-002"},
    {"id": "item-margherita", "category_id": "cat-pizza", "name": "Margherita",
     "description": "Fresh mozzarella, basil, and tomato", "base_price": "15.99", "sku": "PIZ-003"},
    {"id": "item-veggie", "category_id": "cat-pizza", "name": "Veggie Delight",
     "description": "Bell peppers, mushrooms, onions, olives", "base_price": "16.99", "sku": "PIZ-004"},
    {"id": "item-meat-lovers", "category_id": "cat-pizza", "name": "Meat Lovers",
     "description": "Pepperoni, sausage, ham, bacon", "base_price": "18.99", "sku": "PIZ-005"},
    # Sides
    {"id": "item-garlic-bread", "category_id": "cat-sides", "name": "Garlic Bread",
     "description": "6 pieces of garlic bread", "base_price": "4.99", "sku": "SIDE-001"},
    {"id": "item-wings", "category_id": "cat-sides", "name": "Chicken Wings",
     "description": "8 pieces, your choice of sauce", "base_price": "9.99", "sku": "SIDE-002"},
    {"id": "item-salad", "category_id": "cat-sides", "name": "Caesar Salad",
     "description": "Fresh romaine, caesar dressing, croutons", "base_price": "7.99", "sku": "SIDE-003"},
    # Drinks
    {"id": "item-coke", "category_id": "cat-drinks", "name": "Coca-Cola",
     "description": "20oz bottle", "base_price": "2.99", "sku": "DRINK-001"},
    {"id": "item-pepsi", "category_id": "cat-drinks", "name": "Pepsi",
     "description": "20oz bottle", "base_price": "2.99", "sku": "DRINK-002"},
    {"id": "item-sprite", "category_id": "cat-drinks", "name": "Sprite",
     "description": "20oz bottle", "base_price": "2.99", "sku": "DRINK-003"},
    {"id": "item-water", "category_id": "cat-drinks", "name": "Water",
     "description": "Bottled water", "base_price": "1.99", "sku": "DRINK-004"},
]

CUSTOMERS = [
    {"id": "cust-001", "full_name": "John Smith", "phone": "9292628021",
     "email": "john.smith@example.com", "notes": "Regular customer, prefers pepperoni pizza"},
    {"id": "cust-002", "full_name": "Maria Garcia", "phone": "5551234567",
     "email": "maria.garcia@example.com", "notes": "Likes extra cheese, delivery preferred"},
    {"id": "cust-003", "full_name": "David Johnson", "phone": "5559876543",
     "email": "david.j@example.com", "notes": "Vegetarian options only"},
]

SAMPLE_ADDRESS = {
    "label": "Home",
    "street": "123 Main St",
    "city": "Your City",
    "state": "ST",
    "zip": "12345",
}


def seed_menu(db: Session) -> int:
    """Insert missing categories and items. Returns the number of rows added."""
    added = 0
    for data in CATEGORIES:
        if db.get(MenuCategory, data["id"]) is None:
            db.add(MenuCategory(**data))
            added += 1
    db.flush()

    for position, data in enumerate(ITEMS):
        if db.get(MenuItem, data["id"]) is None:
            db.add(MenuItem(
                **{**data, "base_price": Decimal(data["base_price"])},
                sort_order=position,
                is_available=True,
            ))
            added += 1

    db.commit()
    logger.info("Seeded menu: %d new rows", added)
    return added


def seed_customers(db: Session) -> int:
    """Insert missing sample customers, each with a default Home address."""
    added = 0
    for data in CUSTOMERS:
        if db.get(Customer, data["id"]) is not None:
            continue
        customer = Customer(**data)
        address = CustomerAddress(**SAMPLE_ADDRESS, is_default=True)
        customer.addresses.append(address)
        customer.default_address = address
        db.add(customer)
        added += 1

    db.commit()
    logger.info("Seeded customers: %d new rows", added)
    return added


if __name__ == "__main__":
    from .db import SessionLocal
    from .logging_config import setup_logging

    setup_logging()
    session = SessionLocal()
    try:
        seed_menu(session)
        seed_customers(session)
    finally:
        session.close()
