import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    Integer,
    String,
    Numeric,
    Boolean,
    JSON,
    DateTime,
    ForeignKey,
    Text,
    Index,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def generate_id() -> str:
    """Opaque primary key for every POS record."""
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# --- Enumerations (stored as plain strings) ---

class Role(str, enum.Enum):
    ADMIN = "ADMIN"
    CASHIER = "CASHIER"


class OrderType(str, enum.Enum):
    PICKUP = "PICKUP"
    DELIVERY = "DELIVERY"
    DINE_IN = "DINE_IN"


class OrderStatus(str, enum.Enum):
    NEW = "NEW"
    IN_PROGRESS = "IN_PROGRESS"
    READY = "READY"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class PaymentMethod(str, enum.Enum):
    CASH = "CASH"
    CARD = "CARD"
    OTHER = "OTHER"


class PaymentStatus(str, enum.Enum):
    PAID = "PAID"
    UNPAID = "UNPAID"
    REFUNDED = "REFUNDED"


# --- Store profile (one per store account) ---

class Store(Base):
    __tablename__ = "stores"

    id = Column(String, primary_key=True, default=generate_id)
    owner_id = Column(String, unique=True, nullable=False, index=True)  # store account id from the identity provider
    name = Column(String, nullable=False)
    street = Column(String, nullable=True)
    city = Column(String, nullable=True)
    state = Column(String, nullable=True)
    zip = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    email = Column(String, nullable=True)
    logo_url = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


# --- Employees ("users" of the till) ---

class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, default=generate_id)
    name = Column(String, nullable=False)
    role = Column(String, nullable=False, default=Role.CASHIER.value)
    pin = Column(String, nullable=False)  # bcrypt hash, never the raw PIN
    is_active = Column(Boolean, nullable=False, default=True)
    email = Column(String, nullable=True)
    extra_metadata = Column("metadata", JSON, nullable=True)
    store_account_id = Column(String, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    __table_args__ = (
        Index("ix_users_store_role_active", "store_account_id", "role", "is_active"),
    )


# --- Menu ---

class MenuCategory(Base):
    __tablename__ = "menu_categories"

    id = Column(String, primary_key=True, default=generate_id)
    name = Column(String, nullable=False)
    sort_order = Column(Integer, nullable=False, default=0)
    icon = Column(String, nullable=True)
    image_url = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    items = relationship(
        "MenuItem",
        back_populates="category",
        order_by=lambda: [MenuItem.sort_order, MenuItem.name],
    )


class MenuItem(Base):
    __tablename__ = "menu_items"

    id = Column(String, primary_key=True, default=generate_id)
    category_id = Column(String, ForeignKey("menu_categories.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(String, nullable=True)
    base_price = Column(Numeric(10, 2), nullable=False)
    tax_rate = Column(Numeric(6, 4), nullable=False, default=0)
    is_available = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=False, default=0)
    sku = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    category = relationship("MenuCategory", back_populates="items")
    modifier_group_links = relationship(
        "MenuItemModifierGroup",
        back_populates="menu_item",
        cascade="all, delete-orphan",
    )

    @property
    def modifier_groups(self):
        """Attached modifier groups, by name."""
        return sorted((link.modifier_group for link in self.modifier_group_links), key=lambda g: g.name)


class ModifierGroup(Base):
    __tablename__ = "modifier_groups"

    id = Column(String, primary_key=True, default=generate_id)
    name = Column(String, nullable=False)
    min_select = Column(Integer, nullable=False, default=0)
    max_select = Column(Integer, nullable=False, default=99)
    hide_order_section = Column(Boolean, nullable=False, default=False)
    requires_size_first = Column(Boolean, nullable=False, default=False)
    size_based_pricing = Column(Boolean, nullable=False, default=False)
    is_optional = Column(Boolean, nullable=False, default=False)

    modifiers = relationship(
        "Modifier",
        back_populates="group",
        cascade="all, delete-orphan",
        order_by="Modifier.name",
    )
    item_links = relationship(
        "MenuItemModifierGroup",
        back_populates="modifier_group",
        cascade="all, delete-orphan",
    )


class Modifier(Base):
    __tablename__ = "modifiers"

    id = Column(String, primary_key=True, default=generate_id)
    group_id = Column(String, ForeignKey("modifier_groups.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)

    group = relationship("ModifierGroup", back_populates="modifiers")
    prices = relationship("ModifierPrice", back_populates="modifier", cascade="all, delete-orphan")


class ModifierPrice(Base):
    """Price of a modifier for one pizza size (size_label is null for flat pricing)."""
    __tablename__ = "modifier_prices"

    id = Column(String, primary_key=True, default=generate_id)
    modifier_id = Column(String, ForeignKey("modifiers.id", ondelete="CASCADE"), nullable=False, index=True)
    size_label = Column(String, nullable=True)
    price = Column(Numeric(10, 2), nullable=False, default=0)

    modifier = relationship("Modifier", back_populates="prices")


class MenuItemModifierGroup(Base):
    """Attachment of a modifier group to a menu item."""
    __tablename__ = "menu_item_modifier_groups"

    menu_item_id = Column(String, ForeignKey("menu_items.id", ondelete="CASCADE"), primary_key=True)
    modifier_group_id = Column(String, ForeignKey("modifier_groups.id", ondelete="CASCADE"), primary_key=True)

    menu_item = relationship("MenuItem", back_populates="modifier_group_links")
    modifier_group = relationship("ModifierGroup", back_populates="item_links")


# --- Customers ---

class Customer(Base):
    __tablename__ = "customers"

    id = Column(String, primary_key=True, default=generate_id)
    full_name = Column(String, nullable=False)
    phone = Column(String, nullable=False, index=True)  # digits only
    email = Column(String, nullable=True)
    image_url = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
    default_address_id = Column(
        String,
        ForeignKey("customer_addresses.id", use_alter=True, name="fk_customers_default_address", ondelete="SET NULL"),
        nullable=True,
    )
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    addresses = relationship(
        "CustomerAddress",
        back_populates="customer",
        foreign_keys="CustomerAddress.customer_id",
        cascade="all, delete-orphan",
    )
    default_address = relationship(
        "CustomerAddress",
        foreign_keys=[default_address_id],
        post_update=True,
    )
    orders = relationship("Order", back_populates="customer", order_by="Order.created_at.desc()")


class CustomerAddress(Base):
    __tablename__ = "customer_addresses"

    id = Column(String, primary_key=True, default=generate_id)
    customer_id = Column(String, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True)
    label = Column(String, nullable=False)
    street = Column(String, nullable=False)
    city = Column(String, nullable=False)
    state = Column(String, nullable=False)
    zip = Column(String, nullable=False)
    extra_directions = Column(Text, nullable=True)
    is_default = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    customer = relationship("Customer", back_populates="addresses", foreign_keys=[customer_id])


# --- Orders ---

class Order(Base):
    __tablename__ = "orders"

    id = Column(String, primary_key=True, default=generate_id)
    order_number = Column(Integer, unique=True, nullable=False, index=True)
    daily_sequence = Column(Integer, nullable=False)  # short number called out at the counter
    customer_id = Column(String, ForeignKey("customers.id", ondelete="SET NULL"), nullable=True, index=True)
    type = Column(String, nullable=False)
    status = Column(String, nullable=False, default=OrderStatus.NEW.value, index=True)
    subtotal = Column(Numeric(10, 2), nullable=False)
    tax = Column(Numeric(10, 2), nullable=False)
    delivery_fee = Column(Numeric(10, 2), nullable=False, default=0)
    discount_total = Column(Numeric(10, 2), nullable=False, default=0)
    total = Column(Numeric(10, 2), nullable=False)
    payment_method = Column(String, nullable=False)
    payment_status = Column(String, nullable=False, default=PaymentStatus.PAID.value)
    placed_by_user_id = Column(String, ForeignKey("users.id"), nullable=True, index=True)
    delivery_address_id = Column(String, ForeignKey("customer_addresses.id", ondelete="SET NULL"), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan")
    customer = relationship("Customer", back_populates="orders")
    delivery_address = relationship("CustomerAddress")
    placed_by = relationship("User")

    # Common query pattern: filtering by status and sorting by date
    __table_args__ = (
        Index("ix_orders_status_created_at", "status", "created_at"),
    )


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(String, primary_key=True, default=generate_id)
    order_id = Column(String, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    menu_item_id = Column(String, ForeignKey("menu_items.id", ondelete="SET NULL"), nullable=True)

    # Snapshots keep receipts stable when the menu changes later
    name_snapshot = Column(String, nullable=False)
    unit_price_snapshot = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False)
    line_total = Column(Numeric(10, 2), nullable=False)
    special_instructions = Column(Text, nullable=True)

    order = relationship("Order", back_populates="items")
    modifiers = relationship("OrderItemModifier", back_populates="order_item", cascade="all, delete-orphan")


class OrderItemModifier(Base):
    __tablename__ = "order_item_modifiers"

    id = Column(String, primary_key=True, default=generate_id)
    order_item_id = Column(String, ForeignKey("order_items.id", ondelete="CASCADE"), nullable=False, index=True)
    modifier_id = Column(String, ForeignKey("modifiers.id", ondelete="SET NULL"), nullable=True)
    name_snapshot = Column(String, nullable=False)
    price_snapshot = Column(Numeric(10, 2), nullable=False)

    order_item = relationship("OrderItem", back_populates="modifiers")
