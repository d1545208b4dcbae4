"""create_shop_tables

Revision ID: 3f9a1c2b7d10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9a1c2b7d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create categories, products, users, orders and order items."""

    op.create_table(
        'shop_categories',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('icon', sa.String(length=100), nullable=True),
        sa.Column('color', sa.String(length=20), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'shop_products',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('category_id', sa.Uuid(), nullable=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('rich_description', sa.Text(), nullable=False),
        sa.Column('image', sa.String(length=500), nullable=False),
        sa.Column('brand', sa.String(length=255), nullable=False),
        sa.Column('price', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('count_in_stock', sa.Integer(), nullable=False),
        sa.Column('rating', sa.Numeric(precision=3, scale=1), nullable=False),
        sa.Column('num_reviews', sa.Integer(), nullable=False),
        sa.Column('is_featured', sa.Boolean(), server_default='false', nullable=False),
        sa.Column('date_created', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            'count_in_stock >= 0 AND count_in_stock <= 255',
            name='shop_products_stock_range',
        ),
        sa.ForeignKeyConstraint(
            ['category_id'], ['shop_categories.id'], ondelete='SET NULL'
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_shop_products_category_id', 'shop_products', ['category_id'], unique=False
    )

    op.create_table(
        'shop_users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=False),
        sa.Column('is_admin', sa.Boolean(), server_default='false', nullable=False),
        sa.Column('street', sa.String(length=255), nullable=False),
        sa.Column('apartment', sa.String(length=255), nullable=False),
        sa.Column('zip', sa.String(length=20), nullable=False),
        sa.Column('city', sa.String(length=100), nullable=False),
        sa.Column('country', sa.String(length=100), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_shop_users_email', 'shop_users', ['email'], unique=True)

    op.create_table(
        'shop_orders',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('shipping_address1', sa.String(length=255), nullable=False),
        sa.Column('shipping_address2', sa.String(length=255), nullable=True),
        sa.Column('city', sa.String(length=100), nullable=False),
        sa.Column('zip', sa.String(length=20), nullable=False),
        sa.Column('country', sa.String(length=100), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=False),
        sa.Column('status', sa.String(length=50), nullable=False),
        sa.Column('total_price', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=True),
        sa.Column('date_ordered', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['shop_users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_shop_orders_user_id', 'shop_orders', ['user_id'], unique=False)
    op.create_index(
        'ix_shop_orders_date_ordered', 'shop_orders', ['date_ordered'], unique=False
    )

    op.create_table(
        'shop_order_items',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('order_id', sa.Uuid(), nullable=False),
        sa.Column('product_id', sa.Uuid(), nullable=True),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.CheckConstraint('quantity > 0', name='shop_order_items_positive_quantity'),
        sa.ForeignKeyConstraint(['order_id'], ['shop_orders.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(
            ['product_id'], ['shop_products.id'], ondelete='SET NULL'
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_shop_order_items_order_id', 'shop_order_items', ['order_id'], unique=False
    )


def downgrade() -> None:
    """Drop all shop tables."""
    op.drop_index('ix_shop_order_items_order_id', table_name='shop_order_items')
    op.drop_table('shop_order_items')
    op.drop_index('ix_shop_orders_date_ordered', table_name='shop_orders')
    op.drop_index('ix_shop_orders_user_id', table_name='shop_orders')
    op.drop_table('shop_orders')
    op.drop_index('ix_shop_users_email', table_name='shop_users')
    op.drop_table('shop_users')
    op.drop_index('ix_shop_products_category_id', table_name='shop_products')
    op.drop_table('shop_products')
    op.drop_table('shop_categories')
