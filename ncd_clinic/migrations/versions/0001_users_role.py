"""Add role and full name to users

Revision ID: 0001_users_role
Revises:
Create Date: 2025-01-20 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

from ncd_clinic.migrations import add_missing_columns, drop_existing_columns


# revision identifiers, used by Alembic.
revision = '0001_users_role'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    add_missing_columns(
        'users',
        sa.Column('role', sa.String(length=20), nullable=True, server_default='staff'),
        sa.Column('full_name', sa.String(length=200), nullable=True),
    )


def downgrade():
    drop_existing_columns('users', 'full_name', 'role')
