"""Create users, apartments, tenant_apartments and leases tables

Revision ID: 20241101_000001
Revises: None
Create Date: 2024-11-01

Tenancy records reference users and apartments by key only; the history
they hold must survive apartment deletion.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20241101_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the tenancy tables."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('first_name', sa.String(100), nullable=True),
        sa.Column('last_name', sa.String(100), nullable=True),
        sa.Column('role', sa.String(50), nullable=False, server_default='tenant'),
        sa.Column('apartment_id', sa.String(36), nullable=True),
        sa.Column('lease_start_date', sa.Date(), nullable=True),
        sa.Column('lease_end_date', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email', name='uq_users_email'),
    )
    op.create_index('ix_users_apartment_id', 'users', ['apartment_id'])

    op.create_table(
        'apartments',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('building_name', sa.String(255), nullable=True),
        sa.Column('unit_number', sa.String(50), nullable=False),
        sa.Column('floor', sa.Integer(), nullable=True),
        sa.Column('rooms', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='available'),
        sa.Column('monthly_rent', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('amenities', sa.JSON(), nullable=True),
        sa.Column('max_occupants', sa.Integer(), nullable=False),
        sa.Column('current_occupants', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('unit_number', name='uq_apartments_unit_number'),
        sa.CheckConstraint('current_occupants >= 0', name='ck_apartments_occupants_non_negative'),
    )
    op.create_index('ix_apartments_status', 'apartments', ['status'])
    op.create_index('ix_apartments_current_occupants', 'apartments', ['current_occupants'])

    op.create_table(
        'tenant_apartments',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('apartment_id', sa.String(36), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        sa.Column('role', sa.String(20), nullable=False, server_default='primary'),
        sa.Column('lease_start_date', sa.Date(), nullable=False),
        sa.Column('lease_end_date', sa.Date(), nullable=False),
        sa.Column('lease_id', sa.String(36), nullable=True),
        sa.Column('monthly_rent', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_tenant_apartments_user_id', 'tenant_apartments', ['user_id'])
    op.create_index('ix_tenant_apartments_apartment_id', 'tenant_apartments', ['apartment_id'])
    op.create_index('ix_tenant_apartments_status', 'tenant_apartments', ['status'])

    op.create_table(
        'leases',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('tenant_apartment_id', sa.String(36), nullable=False),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('apartment_id', sa.String(36), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('monthly_rent', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('deposit_amount', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('terms', sa.Text(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        sa.Column('ended_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_leases_tenant_apartment_id', 'leases', ['tenant_apartment_id'])
    op.create_index('ix_leases_user_id', 'leases', ['user_id'])
    op.create_index('ix_leases_apartment_id', 'leases', ['apartment_id'])
    op.create_index('ix_leases_status', 'leases', ['status'])


def downgrade() -> None:
    """Drop the tenancy tables."""
    op.drop_index('ix_leases_status', table_name='leases')
    op.drop_index('ix_leases_apartment_id', table_name='leases')
    op.drop_index('ix_leases_user_id', table_name='leases')
    op.drop_index('ix_leases_tenant_apartment_id', table_name='leases')
    op.drop_table('leases')

    op.drop_index('ix_tenant_apartments_status', table_name='tenant_apartments')
    op.drop_index('ix_tenant_apartments_apartment_id', table_name='tenant_apartments')
    op.drop_index('ix_tenant_apartments_user_id', table_name='tenant_apartments')
    op.drop_table('tenant_apartments')

    op.drop_index('ix_apartments_current_occupants', table_name='apartments')
    op.drop_index('ix_apartments_status', table_name='apartments')
    op.drop_table('apartments')

    op.drop_index('ix_users_apartment_id', table_name='users')
    op.drop_table('users')
