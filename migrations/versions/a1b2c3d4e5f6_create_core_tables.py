"""Create tenants, maintenance_requests and inventory_items tables

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-18 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1b2c3d4e5f6'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    # Tenants table
    op.create_table(
        'tenants',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('phone', sa.String(20), nullable=False),
        sa.Column('email', sa.String(100), nullable=True),
        sa.Column('apartment_number', sa.String(20), nullable=False),
        sa.Column('checkin_date', sa.DateTime(), nullable=False),
        sa.Column('checkout_date', sa.DateTime(), nullable=True),
        sa.Column('rental_period_start', sa.DateTime(), nullable=True),
        sa.Column('rental_period_end', sa.DateTime(), nullable=True),
        sa.Column('rental_basis', sa.String(10), nullable=False, server_default='monthly'),
        sa.Column('rent_amount', sa.Float(), nullable=False),
        sa.Column('deposit', sa.Float(), nullable=False, server_default='0'),
        sa.Column('total_rent', sa.Float(), nullable=False, server_default='0'),
        sa.Column('booking_source', sa.String(20), nullable=False, server_default=''),
        sa.Column('special_requests', sa.Text(), nullable=False, server_default=''),
        sa.Column('remarks', sa.Text(), nullable=False, server_default=''),
        sa.Column('id_verification', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_tenants_apartment_number', 'tenants', ['apartment_number'])
    op.create_index('ix_tenants_checkin_date', 'tenants', ['checkin_date'])
    op.create_index('ix_tenants_status', 'tenants', ['status'])
    op.create_index('ix_tenants_created_at', 'tenants', ['created_at'])

    # Maintenance requests table
    op.create_table(
        'maintenance_requests',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('apartment_number', sa.String(20), nullable=False),
        sa.Column('type', sa.String(20), nullable=False, server_default='other'),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('priority', sa.String(10), nullable=False, server_default='medium'),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('reported_date', sa.DateTime(), nullable=False),
        sa.Column('completed_date', sa.DateTime(), nullable=True),
        sa.Column('assigned_to', sa.String(100), nullable=False, server_default=''),
        sa.Column('estimated_cost', sa.Float(), nullable=False, server_default='0'),
        sa.Column('actual_cost', sa.Float(), nullable=False, server_default='0'),
        sa.Column('previous_condition', sa.String(500), nullable=False, server_default=''),
        sa.Column('post_departure_condition', sa.String(500), nullable=False, server_default=''),
        sa.Column('damages', sa.String(500), nullable=False, server_default=''),
        sa.Column('deposit_deductions', sa.Float(), nullable=False, server_default='0'),
        sa.Column('notes', sa.Text(), nullable=False, server_default=''),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_maintenance_requests_id', 'maintenance_requests', ['id'])
    op.create_index('ix_maintenance_requests_apartment_number', 'maintenance_requests', ['apartment_number'])
    op.create_index('ix_maintenance_requests_type', 'maintenance_requests', ['type'])
    op.create_index('ix_maintenance_requests_priority', 'maintenance_requests', ['priority'])
    op.create_index('ix_maintenance_requests_status', 'maintenance_requests', ['status'])
    op.create_index('ix_maintenance_requests_reported_date', 'maintenance_requests', ['reported_date'])
    op.create_index('ix_maintenance_requests_created_at', 'maintenance_requests', ['created_at'])

    # Inventory items table
    op.create_table(
        'inventory_items',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('apartment_number', sa.String(20), nullable=False),
        sa.Column('category', sa.String(20), nullable=False, server_default='furniture'),
        sa.Column('type', sa.String(100), nullable=False),
        sa.Column('count', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('condition', sa.String(20), nullable=False, server_default='good'),
        sa.Column('brand', sa.String(100), nullable=False, server_default=''),
        sa.Column('model', sa.String(100), nullable=False, server_default=''),
        sa.Column('purchase_date', sa.DateTime(), nullable=True),
        sa.Column('purchase_price', sa.Float(), nullable=False, server_default='0'),
        sa.Column('warranty_expiry', sa.DateTime(), nullable=True),
        sa.Column('location', sa.String(200), nullable=False, server_default=''),
        sa.Column('notes', sa.Text(), nullable=False, server_default=''),
        sa.Column('status', sa.String(20), nullable=False, server_default='available'),
        sa.Column('last_maintenance', sa.DateTime(), nullable=True),
        sa.Column('next_maintenance', sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_inventory_items_id', 'inventory_items', ['id'])
    op.create_index('ix_inventory_items_apartment_number', 'inventory_items', ['apartment_number'])
    op.create_index('ix_inventory_items_category', 'inventory_items', ['category'])
    op.create_index('ix_inventory_items_type', 'inventory_items', ['type'])
    op.create_index('ix_inventory_items_condition', 'inventory_items', ['condition'])
    op.create_index('ix_inventory_items_status', 'inventory_items', ['status'])
    op.create_index('ix_inventory_items_created_at', 'inventory_items', ['created_at'])


def downgrade() -> None:
    op.drop_table('inventory_items')
    op.drop_table('maintenance_requests')
    op.drop_table('tenants')
