"""Create products table.

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


def upgrade() -> None:
    """Create the products table."""
    op.create_table(
        'products',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('store_id', postgresql.UUID(as_uuid=True), nullable=False, index=True),
        sa.Column('sku', sa.String(100), nullable=True),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Numeric(18, 4), nullable=False),
        sa.Column('stock', sa.Integer(), nullable=False),
        sa.Column('category', sa.String(100), nullable=False),
        sa.Column('weight', sa.Numeric(10, 3), nullable=True),
        sa.Column('length', sa.Numeric(10, 2), nullable=True),
        sa.Column('width', sa.Numeric(10, 2), nullable=True),
        sa.Column('height', sa.Numeric(10, 2), nullable=True),
        sa.Column('shipping_methods', sa.String(500), nullable=True),
        sa.Column('images', sa.String(4000), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='draft', index=True),
        sa.Column('last_updated_by', sa.String(100), nullable=True),
        sa.Column('archived_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('archived_by', sa.String(100), nullable=True),
        sa.Column('version', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    )

    # Export and listing read a store's products by status
    op.create_index('ix_products_store_status', 'products', ['store_id', 'status'])


def downgrade() -> None:
    """Drop the products table."""
    op.drop_index('ix_products_store_status', table_name='products')
    op.drop_table('products')
