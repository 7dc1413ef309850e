"""Add treatment metadata to patients

Revision ID: 0004_patients_treatment
Revises: 0003_patients_address
Create Date: 2025-03-04 11:15:00.000000

"""
from alembic import op
import sqlalchemy as sa

from ncd_clinic.migrations import add_missing_columns, drop_existing_columns


# revision identifiers, used by Alembic.
revision = '0004_patients_treatment'
down_revision = '0003_patients_address'
branch_labels = None
depends_on = None


def upgrade():
    add_missing_columns(
        'patients',
        sa.Column('treatment_type', sa.String(length=200), nullable=True),
        sa.Column('diabetes_type', sa.String(length=50), nullable=True),
        sa.Column('cvd_risk', sa.String(length=50), nullable=True),
        sa.Column('cvd_treatment_type', sa.String(length=200), nullable=True),
    )


def downgrade():
    drop_existing_columns('patients', 'treatment_type', 'diabetes_type', 'cvd_risk', 'cvd_treatment_type')
