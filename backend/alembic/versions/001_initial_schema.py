"""Initial schema with sales, order records, legacy orders and products

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSONType = sa.JSON().with_variant(postgresql.JSONB(), 'postgresql')


def upgrade() -> None:
    # Pre-aggregated daily sales
    op.create_table(
        'sales',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('amount', sa.Float(), nullable=False, server_default='0'),
        sa.Column('store_id', sa.String(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('idx_sales_date', 'sales', ['date'])
    op.create_index('idx_sales_store_date', 'sales', ['store_id', 'date'])

    # Per-transaction order records
    op.create_table(
        'order_records',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('items', JSONType, nullable=False),
        sa.Column('total', sa.Float(), nullable=False, server_default='0'),
        sa.Column('payment_method', sa.String(), nullable=True),
        sa.Column('customer_id', sa.String(), nullable=True),
        sa.Column('store_id', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('idx_order_records_created', 'order_records', ['created_at'])
    op.create_index('idx_order_records_store_created', 'order_records', ['store_id', 'created_at'])

    # Legacy per-line-item orders
    op.create_table(
        'orders',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('item_name', sa.String(), nullable=True),
        sa.Column('price', sa.Float(), nullable=True),
        sa.Column('qty', sa.Integer(), nullable=True),
        sa.Column('customer_id', sa.String(), nullable=True),
        sa.Column('store_id', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('idx_orders_created', 'orders', ['created_at'])

    # Product catalog
    op.create_table(
        'products',
        sa.Column('id', sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('price', sa.Float(), nullable=False, server_default='0'),
        sa.Column('category', sa.String(), nullable=True),
        sa.Column('stock', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('sold', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_products_name', 'products', ['name'], unique=True)
    op.create_index('ix_products_sold', 'products', ['sold'])


def downgrade() -> None:
    op.drop_index('ix_products_sold', table_name='products')
    op.drop_index('ix_products_name', table_name='products')
    op.drop_table('products')
    op.drop_index('idx_orders_created', table_name='orders')
    op.drop_table('orders')
    op.drop_index('idx_order_records_store_created', table_name='order_records')
    op.drop_index('idx_order_records_created', table_name='order_records')
    op.drop_table('order_records')
    op.drop_index('idx_sales_store_date', table_name='sales')
    op.drop_index('idx_sales_date', table_name='sales')
    op.drop_table('sales')
