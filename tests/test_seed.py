"""
Tests for the development seed data.
"""
from kams_pos.models import Customer, MenuCategory, MenuItem
from kams_pos.seed_menu import CATEGORIES, CUSTOMERS, ITEMS, seed_customers, seed_menu


class TestSeedMenu:

    def test_seeds_categories_and_items(self, db_session):
        added = seed_menu(db_session)

        assert added == len(CATEGORIES) + len(ITEMS)
        assert db_session.query(MenuCategory).count() == len(CATEGORIES)
        assert db_session.query(MenuItem).count() == len(ITEMS)

    def test_idempotent(self, db_session):
        seed_menu(db_session)
        assert seed_menu(db_session) == 0
        assert db_session.query(MenuItem).count() == len(ITEMS)

    def test_seeded_menu_served_to_till(self, db_session, cashier_client):
        seed_menu(db_session)
        menu = cashier_client.get("/api/menu").json()
        assert [c["name"] for c in menu] == ["Pizza", "Sides", "Drinks"]
        assert menu[0]["items"][0]["name"] == "Cheese Pizza"
        assert menu[0]["items"][0]["basePrice"] == "12.99"


class TestSeedCustomers:

    def test_customers_get_default_address(self, db_session):
        assert seed_customers(db_session) == len(CUSTOMERS)

        customer = db_session.get(Customer, "cust-001")
        assert customer.default_address is not None
        assert customer.default_address.is_default is True
        assert customer.addresses == [customer.default_address]

    def test_idempotent(self, db_session):
        seed_customers(db_session)
        assert seed_customers(db_session) == 0
