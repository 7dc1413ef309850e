"""Move user password hashes to password_hash

Revision ID: 0007_users_password_hash
Revises: 0006_timestamps
Create Date: 2025-04-22 13:05:00.000000

"""
from alembic import op
import sqlalchemy as sa

from ncd_clinic.migrations import add_missing_columns, column_names, drop_existing_columns


# revision identifiers, used by Alembic.
revision = '0007_users_password_hash'
down_revision = '0006_timestamps'
branch_labels = None
depends_on = None


def upgrade():
    existing = column_names('users')
    if existing is None:
        return

    add_missing_columns('users', sa.Column('password_hash', sa.String(length=255), nullable=True))

    # Older user tables kept the bcrypt hash in a NOT NULL "password" column,
    # which would reject every row written through the model
    if 'password' in existing:
        op.execute('UPDATE users SET password_hash = password WHERE password_hash IS NULL')
        drop_existing_columns('users', 'password')


def downgrade():
    add_missing_columns('users', sa.Column('password', sa.String(length=255), nullable=True))
    op.execute('UPDATE users SET password = password_hash WHERE password IS NULL')
