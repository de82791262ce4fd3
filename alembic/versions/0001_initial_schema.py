"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    # Check if tables already exist (databases created with init_db())
    conn = op.get_bind()
    inspector = sa.inspect(conn)
    existing_tables = inspector.get_table_names()

    if 'stores' not in existing_tables:
        op.create_table('stores',
            sa.Column('id', sa.String(), nullable=False),
            sa.Column('owner_id', sa.String(), nullable=False),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('street', sa.String(), nullable=True),
            sa.Column('city', sa.String(), nullable=True),
            sa.Column('state', sa.String(), nullable=True),
            sa.Column('zip', sa.String(), nullable=True),
            sa.Column('phone', sa.String(), nullable=True),
            sa.Column('email', sa.String(), nullable=True),
            sa.Column('logo_url', sa.String(), nullable=True),
            *_timestamps(),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_stores_owner_id'), 'stores', ['owner_id'], unique=True)

    if 'users' not in existing_tables:
        op.create_table('users',
            sa.Column('id', sa.String(), nullable=False),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('role', sa.String(), nullable=False),
            sa.Column('pin', sa.String(), nullable=False),
            sa.Column('is_active', sa.Boolean(), nullable=False),
            sa.Column('email', sa.String(), nullable=True),
            sa.Column('metadata', sa.JSON(), nullable=True),
            sa.Column('store_account_id', sa.String(), nullable=False),
            *_timestamps(),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_users_store_account_id'), 'users', ['store_account_id'], unique=False)
        op.create_index('ix_users_store_role_active', 'users', ['store_account_id', 'role', 'is_active'], unique=False)

    if 'menu_categories' not in existing_tables:
        op.create_table('menu_categories',
            sa.Column('id', sa.String(), nullable=False),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('sort_order', sa.Integer(), nullable=False),
            sa.Column('icon', sa.String(), nullable=True),
            sa.Column('image_url', sa.String(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )

    if 'modifier_groups' not in existing_tables:
        op.create_table('modifier_groups',
            sa.Column('id', sa.String(), nullable=False),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('min_select', sa.Integer(), nullable=False),
            sa.Column('max_select', sa.Integer(), nullable=False),
            sa.Column('hide_order_section', sa.Boolean(), nullable=False),
            sa.Column('requires_size_first', sa.Boolean(), nullable=False),
            sa.Column('size_based_pricing', sa.Boolean(), nullable=False),
            sa.Column('is_optional', sa.Boolean(), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )

    if 'menu_items' not in existing_tables:
        op.create_table('menu_items',
            sa.Column('id', sa.String(), nullable=False),
            sa.Column('category_id', sa.String(), nullable=False),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('image_url', sa.String(), nullable=True),
            sa.Column('base_price', sa.Numeric(10, 2), nullable=False),
            sa.Column('tax_rate', sa.Numeric(6, 4), nullable=False),
            sa.Column('is_available', sa.Boolean(), nullable=False),
            sa.Column('sort_order', sa.Integer(), nullable=False),
            sa.Column('sku', sa.String(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
            sa.ForeignKeyConstraint(['category_id'], ['menu_categories.id']),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_menu_items_category_id'), 'menu_items', ['category_id'], unique=False)

    if 'modifiers' not in existing_tables:
        op.create_table('modifiers',
            sa.Column('id', sa.String(), nullable=False),
            sa.Column('group_id', sa.String(), nullable=False),
            sa.Column('name', sa.String(), nullable=False),
            sa.ForeignKeyConstraint(['group_id'], ['modifier_groups.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_modifiers_group_id'), 'modifiers', ['group_id'], unique=False)

    if 'modifier_prices' not in existing_tables:
        op.create_table('modifier_prices',
            sa.Column('id', sa.String(), nullable=False),
            sa.Column('modifier_id', sa.String(), nullable=False),
            sa.Column('size_label', sa.String(), nullable=True),
            sa.Column('price', sa.Numeric(10, 2), nullable=False),
            sa.ForeignKeyConstraint(['modifier_id'], ['modifiers.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_modifier_prices_modifier_id'), 'modifier_prices', ['modifier_id'], unique=False)

    if 'menu_item_modifier_groups' not in existing_tables:
        op.create_table('menu_item_modifier_groups',
            sa.Column('menu_item_id', sa.String(), nullable=False),
            sa.Column('modifier_group_id', sa.String(), nullable=False),
            sa.ForeignKeyConstraint(['menu_item_id'], ['menu_items.id'], ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['modifier_group_id'], ['modifier_groups.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('menu_item_id', 'modifier_group_id')
        )

    if 'customers' not in existing_tables:
        # default_address_id gets its foreign key once customer_addresses exists
        op.create_table('customers',
            sa.Column('id', sa.String(), nullable=False),
            sa.Column('full_name', sa.String(), nullable=False),
            sa.Column('phone', sa.String(), nullable=False),
            sa.Column('email', sa.String(), nullable=True),
            sa.Column('image_url', sa.String(), nullable=True),
            sa.Column('notes', sa.Text(), nullable=True),
            sa.Column('default_address_id', sa.String(), nullable=True),
            *_timestamps(),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_customers_phone'), 'customers', ['phone'], unique=False)
        op.create_index(op.f('ix_customers_created_at'), 'customers', ['created_at'], unique=False)

    if 'customer_addresses' not in existing_tables:
        op.create_table('customer_addresses',
            sa.Column('id', sa.String(), nullable=False),
            sa.Column('customer_id', sa.String(), nullable=False),
            sa.Column('label', sa.String(), nullable=False),
            sa.Column('street', sa.String(), nullable=False),
            sa.Column('city', sa.String(), nullable=False),
            sa.Column('state', sa.String(), nullable=False),
            sa.Column('zip', sa.String(), nullable=False),
            sa.Column('extra_directions', sa.Text(), nullable=True),
            sa.Column('is_default', sa.Boolean(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
            sa.ForeignKeyConstraint(['customer_id'], ['customers.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_customer_addresses_customer_id'), 'customer_addresses', ['customer_id'], unique=False)

        with op.batch_alter_table('customers') as batch_op:
            batch_op.create_foreign_key(
                'fk_customers_default_address',
                'customer_addresses',
                ['default_address_id'],
                ['id'],
                ondelete='SET NULL',
            )

    if 'orders' not in existing_tables:
        op.create_table('orders',
            sa.Column('id', sa.String(), nullable=False),
            sa.Column('order_number', sa.Integer(), nullable=False),
            sa.Column('daily_sequence', sa.Integer(), nullable=False),
            sa.Column('customer_id', sa.String(), nullable=True),
            sa.Column('type', sa.String(), nullable=False),
            sa.Column('status', sa.String(), nullable=False),
            sa.Column('subtotal', sa.Numeric(10, 2), nullable=False),
            sa.Column('tax', sa.Numeric(10, 2), nullable=False),
            sa.Column('delivery_fee', sa.Numeric(10, 2), nullable=False),
            sa.Column('discount_total', sa.Numeric(10, 2), nullable=False),
            sa.Column('total', sa.Numeric(10, 2), nullable=False),
            sa.Column('payment_method', sa.String(), nullable=False),
            sa.Column('payment_status', sa.String(), nullable=False),
            sa.Column('placed_by_user_id', sa.String(), nullable=True),
            sa.Column('delivery_address_id', sa.String(), nullable=True),
            sa.Column('notes', sa.Text(), nullable=True),
            *_timestamps(),
            sa.ForeignKeyConstraint(['customer_id'], ['customers.id'], ondelete='SET NULL'),
            sa.ForeignKeyConstraint(['placed_by_user_id'], ['users.id']),
            sa.ForeignKeyConstraint(['delivery_address_id'], ['customer_addresses.id'], ondelete='SET NULL'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_orders_order_number'), 'orders', ['order_number'], unique=True)
        op.create_index(op.f('ix_orders_customer_id'), 'orders', ['customer_id'], unique=False)
        op.create_index(op.f('ix_orders_status'), 'orders', ['status'], unique=False)
        op.create_index(op.f('ix_orders_placed_by_user_id'), 'orders', ['placed_by_user_id'], unique=False)
        op.create_index(op.f('ix_orders_created_at'), 'orders', ['created_at'], unique=False)
        op.create_index('ix_orders_status_created_at', 'orders', ['status', 'created_at'], unique=False)

    if 'order_items' not in existing_tables:
        op.create_table('order_items',
            sa.Column('id', sa.String(), nullable=False),
            sa.Column('order_id', sa.String(), nullable=False),
            sa.Column('menu_item_id', sa.String(), nullable=True),
            sa.Column('name_snapshot', sa.String(), nullable=False),
            sa.Column('unit_price_snapshot', sa.Numeric(10, 2), nullable=False),
            sa.Column('quantity', sa.Integer(), nullable=False),
            sa.Column('line_total', sa.Numeric(10, 2), nullable=False),
            sa.Column('special_instructions', sa.Text(), nullable=True),
            sa.ForeignKeyConstraint(['order_id'], ['orders.id'], ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['menu_item_id'], ['menu_items.id'], ondelete='SET NULL'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_order_items_order_id'), 'order_items', ['order_id'], unique=False)

    if 'order_item_modifiers' not in existing_tables:
        op.create_table('order_item_modifiers',
            sa.Column('id', sa.String(), nullable=False),
            sa.Column('order_item_id', sa.String(), nullable=False),
            sa.Column('modifier_id', sa.String(), nullable=True),
            sa.Column('name_snapshot', sa.String(), nullable=False),
            sa.Column('price_snapshot', sa.Numeric(10, 2), nullable=False),
            sa.ForeignKeyConstraint(['order_item_id'], ['order_items.id'], ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['modifier_id'], ['modifiers.id'], ondelete='SET NULL'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_order_item_modifiers_order_item_id'), 'order_item_modifiers', ['order_item_id'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('order_item_modifiers')
    op.drop_table('order_items')
    op.drop_table('orders')
    with op.batch_alter_table('customers') as batch_op:
        batch_op.drop_constraint('fk_customers_default_address', type_='foreignkey')
    op.drop_table('customer_addresses')
    op.drop_table('customers')
    op.drop_table('menu_item_modifier_groups')
    op.drop_table('modifier_prices')
    op.drop_table('modifiers')
    op.drop_table('menu_items')
    op.drop_table('modifier_groups')
    op.drop_table('menu_categories')
    op.drop_table('users')
    op.drop_table('stores')
