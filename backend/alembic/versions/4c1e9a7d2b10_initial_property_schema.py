"""initial_property_schema

Revision ID: 4c1e9a7d2b10
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4c1e9a7d2b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=50), nullable=False),
        sa.Column('department', sa.String(length=255), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)

    op.create_table(
        'properties',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('number', sa.String(length=100), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('model_number', sa.String(length=255), nullable=False),
        sa.Column('model_19_number', sa.String(length=255), nullable=True),
        sa.Column('serial_number', sa.String(length=255), nullable=False),
        sa.Column('date', sa.String(length=50), nullable=False),
        sa.Column('company_name', sa.String(length=255), nullable=False),
        sa.Column('measurement', sa.String(length=50), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('unit_price', sa.Float(), nullable=False),
        sa.Column('total_price', sa.Float(), nullable=False),
        sa.Column('available_quantity', sa.Integer(), nullable=False),
        sa.Column('property_type', sa.String(length=50), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint('quantity >= 0', name='ck_properties_quantity_non_negative'),
        sa.CheckConstraint('available_quantity >= 0', name='ck_properties_available_non_negative'),
        sa.CheckConstraint('available_quantity <= quantity', name='ck_properties_available_within_total'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_properties_id'), 'properties', ['id'], unique=False)
    op.create_index(op.f('ix_properties_number'), 'properties', ['number'], unique=True)
    op.create_index(op.f('ix_properties_name'), 'properties', ['name'], unique=False)

    op.create_table(
        'property_requests',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.Column('user_name', sa.String(length=255), nullable=False),
        sa.Column('user_department', sa.String(length=255), nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=True),
        sa.Column('property_number', sa.String(length=100), nullable=False),
        sa.Column('property_name', sa.String(length=255), nullable=False),
        sa.Column('quantity_type', sa.String(length=50), nullable=False),
        sa.Column('requested_quantity', sa.Integer(), nullable=False),
        sa.Column('approved_quantity', sa.Integer(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('reason', sa.Text(), nullable=True),
        sa.Column('admin_id', sa.Integer(), nullable=True),
        sa.Column('store_manager_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('issued_at', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint('requested_quantity > 0', name='ck_requests_requested_positive'),
        sa.CheckConstraint(
            'approved_quantity IS NULL OR (approved_quantity > 0 AND approved_quantity <= requested_quantity)',
            name='ck_requests_approved_in_range',
        ),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id']),
        sa.ForeignKeyConstraint(['admin_id'], ['users.id']),
        sa.ForeignKeyConstraint(['store_manager_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_property_requests_id'), 'property_requests', ['id'], unique=False)
    op.create_index(op.f('ix_property_requests_user_id'), 'property_requests', ['user_id'], unique=False)
    op.create_index(op.f('ix_property_requests_property_id'), 'property_requests', ['property_id'], unique=False)
    op.create_index(op.f('ix_property_requests_status'), 'property_requests', ['status'], unique=False)

    op.create_table(
        'issuances',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('request_id', sa.Integer(), nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=True),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.Column('user_name', sa.String(length=255), nullable=False),
        sa.Column('user_department', sa.String(length=255), nullable=False),
        sa.Column('property_number', sa.String(length=100), nullable=False),
        sa.Column('property_name', sa.String(length=255), nullable=False),
        sa.Column('model_number', sa.String(length=255), nullable=False),
        sa.Column('model_19_number', sa.String(length=255), nullable=True),
        sa.Column('model_22_number', sa.String(length=255), nullable=True),
        sa.Column('serial_number', sa.String(length=255), nullable=False),
        sa.Column('quantity_type', sa.String(length=50), nullable=False),
        sa.Column('property_type', sa.String(length=50), nullable=False),
        sa.Column('is_permanent', sa.Boolean(), nullable=False),
        sa.Column('issued_quantity', sa.Integer(), nullable=False),
        sa.Column('issued_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('store_manager_id', sa.Integer(), nullable=True),
        sa.Column('store_manager_name', sa.String(length=255), nullable=False),
        sa.ForeignKeyConstraint(['request_id'], ['property_requests.id']),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id']),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['store_manager_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('request_id'),
    )
    op.create_index(op.f('ix_issuances_id'), 'issuances', ['id'], unique=False)
    op.create_index(op.f('ix_issuances_property_id'), 'issuances', ['property_id'], unique=False)
    op.create_index(op.f('ix_issuances_user_id'), 'issuances', ['user_id'], unique=False)


def downgrade() -> None:
    op.drop_table('issuances')
    op.drop_table('property_requests')
    op.drop_table('properties')
    op.drop_table('users')
