"""Add address fields to patients

Revision ID: 0003_patients_address
Revises: 0002_patients_mrn
Create Date: 2025-02-17 14:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

from ncd_clinic.migrations import add_missing_columns, drop_existing_columns


# revision identifiers, used by Alembic.
revision = '0003_patients_address'
down_revision = '0002_patients_mrn'
branch_labels = None
depends_on = None

COLUMNS = ('region', 'zone', 'woreda', 'kebele')


def upgrade():
    add_missing_columns('patients', *[sa.Column(name, sa.String(length=100), nullable=True) for name in COLUMNS])


def downgrade():
    drop_existing_columns('patients', *COLUMNS)
