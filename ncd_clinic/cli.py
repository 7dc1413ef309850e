"""
Flask CLI commands:
- flask init-db: create tables and run pending Alembic revisions
  (the full Flask-Migrate command set is available as flask db)
- flask create-user: create a staff account
"""
import click
from flask import Flask

from ncd_clinic.exceptions import ClinicError


def register_cli(app: Flask) -> None:

    @app.cli.command("init-db")
    def init_db_command():
        """Create database tables and run pending migrations."""
        from ncd_clinic import init_database

        revision = init_database()
        click.echo(f"Database is up to date (revision {revision}).")

    @app.cli.command("create-user")
    @click.argument("username")
    @click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
    @click.option("--full-name", default=None, help="Display name (defaults to the username).")
    @click.option("--role", default="staff", show_default=True, help="Display role, not enforced.")
    def create_user_command(username, password, full_name, role):
        """Create a staff account."""
        from ncd_clinic.services.user_service import create_user

        try:
            user = create_user(username, password, full_name=full_name, role=role)
        except ClinicError as e:
            raise click.ClickException(e.message)
        click.echo(f"Created user {user.username} ({user.role}).")
