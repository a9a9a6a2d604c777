"""create farms, rabbits, breeding and identity tables

Revision ID: 5f1c2e7a9b30
Revises:
Create Date: 2026-10-17 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '5f1c2e7a9b30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(updated: bool = True) -> list[sa.Column]:
    columns = [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]
    if updated:
        columns.append(
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False)
        )
    return columns


def upgrade() -> None:
    op.create_table(
        'farms',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_farms'),
    )

    op.create_table(
        'roles',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=64), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('permissions', sa.JSON(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('id', name='pk_roles'),
        sa.UniqueConstraint('name', name='ux_roles_name'),
    )

    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=32), nullable=False),
        sa.Column('role_id', sa.Integer(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=True),
        sa.Column('email_verified', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('login_count', sa.Integer(), nullable=False, server_default=sa.text('0')),
        sa.Column('last_login', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
        sa.ForeignKeyConstraint(['role_id'], ['roles.id'], name='fk_users_role_id'),
        sa.ForeignKeyConstraint(['farm_id'], ['farms.id'], name='fk_users_farm_id'),
        sa.UniqueConstraint('email', name='ux_users_email'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=False)

    op.create_table(
        'rabbits',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('rabbit_id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('breed', sa.String(length=255), nullable=True),
        sa.Column('gender', sa.String(length=6), nullable=False),
        sa.Column('is_pregnant', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('pregnancy_start_date', sa.Date(), nullable=True),
        sa.Column('expected_birth_date', sa.Date(), nullable=True),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_rabbits'),
        sa.ForeignKeyConstraint(['farm_id'], ['farms.id'], name='fk_rabbits_farm_id'),
        sa.UniqueConstraint('farm_id', 'rabbit_id', name='ux_rabbits_farm_rabbit_id'),
    )
    op.create_index('ix_rabbits_farm_id', 'rabbits', ['farm_id'], unique=False)

    op.create_table(
        'breeding_records',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('doe_id', sa.String(length=64), nullable=False),
        sa.Column('buck_id', sa.String(length=64), nullable=False),
        sa.Column('mating_date', sa.Date(), nullable=False),
        sa.Column('expected_birth_date', sa.Date(), nullable=False),
        sa.Column('alert_date', sa.Date(), nullable=False),
        sa.Column('actual_birth_date', sa.Date(), nullable=True),
        sa.Column('number_of_kits', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_breeding_records'),
        sa.ForeignKeyConstraint(['farm_id'], ['farms.id'], name='fk_breeding_records_farm_id'),
    )
    op.create_index(
        'ix_breeding_records_farm_buck_mating',
        'breeding_records',
        ['farm_id', 'buck_id', 'mating_date'],
        unique=False,
    )
    op.create_index(
        'ix_breeding_records_farm_doe_birth',
        'breeding_records',
        ['farm_id', 'doe_id', 'actual_birth_date'],
        unique=False,
    )

    op.create_table(
        'kit_records',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('breeding_record_id', sa.Uuid(), nullable=False),
        sa.Column('kit_number', sa.Integer(), nullable=False),
        sa.Column('birth_weight', sa.Numeric(8, 2), nullable=False),
        sa.Column('gender', sa.String(length=6), nullable=False),
        sa.Column('color', sa.String(length=64), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False, server_default='alive'),
        sa.Column('weaning_date', sa.Date(), nullable=False),
        sa.Column('weaning_weight', sa.Numeric(8, 2), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_kit_records'),
        sa.ForeignKeyConstraint(
            ['breeding_record_id'], ['breeding_records.id'], name='fk_kit_records_breeding_record_id'
        ),
    )
    op.create_index('ix_kit_records_breeding_record_id', 'kit_records', ['breeding_record_id'], unique=False)

    op.create_table(
        'password_resets',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('token', sa.String(length=255), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('used', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_password_resets'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_password_resets_user_id'),
        sa.UniqueConstraint('token', name='ux_password_resets_token'),
    )
    op.create_index('ix_password_resets_user_id', 'password_resets', ['user_id'], unique=False)

    op.create_table(
        'token_blacklist',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('token', sa.Text(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=True),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('id', name='pk_token_blacklist'),
        sa.UniqueConstraint('token', name='ux_token_blacklist_token'),
    )
    op.create_index('ix_token_blacklist_expires_at', 'token_blacklist', ['expires_at'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_token_blacklist_expires_at', table_name='token_blacklist')
    op.drop_table('token_blacklist')
    op.drop_index('ix_password_resets_user_id', table_name='password_resets')
    op.drop_table('password_resets')
    op.drop_index('ix_kit_records_breeding_record_id', table_name='kit_records')
    op.drop_table('kit_records')
    op.drop_index('ix_breeding_records_farm_doe_birth', table_name='breeding_records')
    op.drop_index('ix_breeding_records_farm_buck_mating', table_name='breeding_records')
    op.drop_table('breeding_records')
    op.drop_index('ix_rabbits_farm_id', table_name='rabbits')
    op.drop_table('rabbits')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
    op.drop_table('roles')
    op.drop_table('farms')
