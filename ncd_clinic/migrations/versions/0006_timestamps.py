"""Add timestamps missing from older tables

Revision ID: 0006_timestamps
Revises: 0005_visits_vitals_labs
Create Date: 2025-04-01 08:20:00.000000

"""
from alembic import op
import sqlalchemy as sa

from ncd_clinic.migrations import add_missing_columns, drop_existing_columns


# revision identifiers, used by Alembic.
revision = '0006_timestamps'
down_revision = '0005_visits_vitals_labs'
branch_labels = None
depends_on = None

TABLES = ('patients', 'visits', 'users')


def upgrade():
    for table in TABLES:
        add_missing_columns(
            table,
            sa.Column('created_at', sa.DateTime(), nullable=True),
            sa.Column('updated_at', sa.DateTime(), nullable=True),
        )


def downgrade():
    # created_at was already part of the first patients table
    for table in TABLES:
        drop_existing_columns(table, 'updated_at')
