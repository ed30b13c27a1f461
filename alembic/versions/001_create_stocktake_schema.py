"""Create stocktake schema

Revision ID: 001_stocktake
Revises:
Create Date: 2025-01-15
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

# revision identifiers
revision = '001_stocktake'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    """Create reference, user and inventory count tables"""

    # ====================
    # WAREHOUSES
    # ====================
    op.create_table(
        'warehouses',
        sa.Column('code', sa.String(20), primary_key=True),
        sa.Column('description', sa.String(200), nullable=False),
        sa.Column('status', sa.String(20), server_default='ACTIVE', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    # ====================
    # PRODUCTS
    # ====================
    op.create_table(
        'products',
        sa.Column('code', sa.String(20), primary_key=True),
        sa.Column('description', sa.String(255), nullable=False),
        sa.Column('packaging_unit', sa.String(20), server_default='BOX', nullable=False),
        sa.Column('conversion_factor', sa.Integer, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint(
            'conversion_factor > 0 AND conversion_factor <= 9999',
            name='ck_products_conversion_factor_range'
        ),
    )

    # ====================
    # USERS
    # ====================
    op.create_table(
        'users',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('identification', sa.String(50), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), server_default='USER', nullable=False),
        sa.Column('is_active', sa.Boolean, server_default=sa.true(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_users_identification', 'users', ['identification'], unique=True)

    op.create_table(
        'user_warehouses',
        sa.Column('user_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('warehouse_code', sa.String(20), sa.ForeignKey('warehouses.code', ondelete='CASCADE'), primary_key=True),
    )

    # ====================
    # INVENTORY COUNTS
    # ====================
    op.create_table(
        'inventory_counts',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('product_code', sa.String(20), sa.ForeignKey('products.code'), nullable=False),
        sa.Column('warehouse_code', sa.String(20), sa.ForeignKey('warehouses.code'), nullable=False),
        sa.Column('cutoff_date', sa.Date, nullable=False),
        sa.Column('count_number', sa.Integer, nullable=False),
        sa.Column(
            'previous_count_id', UUID(as_uuid=True),
            sa.ForeignKey('inventory_counts.id', ondelete='RESTRICT'), nullable=True
        ),
        sa.Column('package_quantity', sa.Numeric(14, 3), nullable=False),
        sa.Column('unit_quantity', sa.Numeric(18, 3), nullable=False),
        sa.Column('status', sa.String(30), server_default='PENDING', nullable=False),
        sa.Column('user_id', UUID(as_uuid=True), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('reviewed_by', UUID(as_uuid=True), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('review_notes', sa.Text, nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint(
            'product_code', 'warehouse_code', 'cutoff_date', 'count_number',
            name='uq_inventory_counts_round'
        ),
        sa.CheckConstraint(
            'count_number >= 1 AND count_number <= 3',
            name='ck_inventory_counts_count_number'
        ),
        sa.CheckConstraint('package_quantity >= 0', name='ck_inventory_counts_package_quantity'),
    )

    op.create_index('idx_ic_cutoff_round', 'inventory_counts', ['cutoff_date', 'count_number'])
    op.create_index('idx_ic_warehouse', 'inventory_counts', ['warehouse_code'])
    op.create_index('idx_ic_status', 'inventory_counts', ['status'])


def downgrade():
    """Drop all stocktake tables"""
    op.drop_index('idx_ic_status', table_name='inventory_counts')
    op.drop_index('idx_ic_warehouse', table_name='inventory_counts')
    op.drop_index('idx_ic_cutoff_round', table_name='inventory_counts')
    op.drop_table('inventory_counts')
    op.drop_table('user_warehouses')
    op.drop_index('ix_users_identification', table_name='users')
    op.drop_table('users')
    op.drop_table('products')
    op.drop_table('warehouses')
