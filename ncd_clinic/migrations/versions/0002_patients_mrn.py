"""Add medical record numbers to patients

Revision ID: 0002_patients_mrn
Revises: 0001_users_role
Create Date: 2025-02-03 10:30:00.000000

"""
import random

from alembic import op
import sqlalchemy as sa

from ncd_clinic.migrations import add_missing_columns, column_names, drop_existing_columns, index_names


# revision identifiers, used by Alembic.
revision = '0002_patients_mrn'
down_revision = '0001_users_role'
branch_labels = None
depends_on = None

MRN_INDEX = 'ix_patients_mrn'


def upgrade():
    if column_names('patients') is None:
        return

    # Column, backfill and index together: none of them is useful alone
    add_missing_columns('patients', sa.Column('mrn', sa.String(length=6), nullable=True))

    conn = op.get_bind()
    used = {row[0] for row in conn.execute(sa.text('SELECT mrn FROM patients WHERE mrn IS NOT NULL'))}
    missing = [row[0] for row in conn.execute(sa.text('SELECT id FROM patients WHERE mrn IS NULL'))]
    for patient_id in missing:
        mrn = str(random.randint(100000, 999999))
        while mrn in used:
            mrn = str(random.randint(100000, 999999))
        used.add(mrn)
        conn.execute(
            sa.text('UPDATE patients SET mrn = :mrn WHERE id = :id'),
            {'mrn': mrn, 'id': patient_id},
        )

    if MRN_INDEX not in index_names('patients'):
        op.create_index(MRN_INDEX, 'patients', ['mrn'], unique=True)


def downgrade():
    if MRN_INDEX in index_names('patients'):
        op.drop_index(MRN_INDEX, table_name='patients')
    drop_existing_columns('patients', 'mrn')
