"""
Alembic migrations, run through Flask-Migrate.

db.create_all() builds the current schema for a fresh database but never
alters an existing table. The revisions in versions/ bring databases made by
older releases up to date. Every revision looks at the live schema first and
only adds what is missing, so it is safe on any database and does not depend
on another revision having run before it.
"""
import os

import sqlalchemy as sa
from alembic import op

MIGRATIONS_DIR = os.path.dirname(os.path.abspath(__file__))


def column_names(table):
    """Columns of a table, None when the table does not exist"""
    inspector = sa.inspect(op.get_bind())
    if not inspector.has_table(table):
        return None
    return {col['name'] for col in inspector.get_columns(table)}


def index_names(table):
    return {index['name'] for index in sa.inspect(op.get_bind()).get_indexes(table)}


def add_missing_columns(table, *columns):
    """
    Add each column the table does not have yet.

    Returns:
        list: names of the columns added
    """
    existing = column_names(table)
    if existing is None:
        return []
    missing = [col for col in columns if col.name not in existing]
    if missing:
        with op.batch_alter_table(table, schema=None) as batch_op:
            for col in missing:
                batch_op.add_column(col)
    return [col.name for col in missing]


def drop_existing_columns(table, *names):
    existing = column_names(table) or set()
    present = [name for name in names if name in existing]
    if present:
        with op.batch_alter_table(table, schema=None) as batch_op:
            for name in present:
                batch_op.drop_column(name)
    return present
