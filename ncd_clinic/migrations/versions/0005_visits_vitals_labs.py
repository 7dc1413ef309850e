"""Add extended vitals and labs to visits

Revision ID: 0005_visits_vitals_labs
Revises: 0004_patients_treatment
Create Date: 2025-03-18 16:45:00.000000

"""
from alembic import op
import sqlalchemy as sa

from ncd_clinic.migrations import add_missing_columns, drop_existing_columns


# revision identifiers, used by Alembic.
revision = '0005_visits_vitals_labs'
down_revision = '0004_patients_treatment'
branch_labels = None
depends_on = None

INTEGER_COLUMNS = ('heart_rate', 'respiratory_rate', 'spo2')
FLOAT_COLUMNS = ('temperature', 'hba1c', 'creatinine', 'cholesterol', 'triglycerides')
TEXT_COLUMNS = ('urinalysis', 'complications')


def upgrade():
    columns = (
        [sa.Column(name, sa.Integer(), nullable=True) for name in INTEGER_COLUMNS]
        + [sa.Column(name, sa.Float(), nullable=True) for name in FLOAT_COLUMNS]
        + [sa.Column(name, sa.Text(), nullable=True) for name in TEXT_COLUMNS]
    )
    add_missing_columns('visits', *columns)


def downgrade():
    drop_existing_columns('visits', *(INTEGER_COLUMNS + FLOAT_COLUMNS + TEXT_COLUMNS))
