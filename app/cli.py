import os
import click
from flask import current_app
from flask.cli import with_appcontext
from flask_migrate import upgrade as alembic_upgrade, stamp as alembic_stamp, migrate as alembic_migrate

from app.services.catalog import get_catalog
from app.services.seed import ensure_admin, seed_categories
from app.utils.db import transactional


def _assert_safe_for_upgrade():
    # Prevent accidental prod upgrades unless explicitly allowed
    env = (current_app.config.get("ENV") or "").lower()
    app_env = (os.getenv("APP_ENV") or "").lower()
    if app_env == "production" or env == "production":
        if (os.getenv("ALLOW_DB_MIGRATIONS") or "").lower() not in ("1", "true", "yes"):
            raise click.ClickException("Refusing to run DB migration in production without ALLOW_DB_MIGRATIONS=true")


@click.command("db-migrate-safe")
@click.option("-m", "--message", default="auto migration", help="Migration message")
@with_appcontext
def db_migrate_safe(message):
    """Generate a new migration script from current models."""
    alembic_migrate(message=message)
    click.echo("Migration script generated.")


@click.command("db-upgrade-safe")
@with_appcontext
def db_upgrade_safe():
    """Apply migrations to the configured database."""
    _assert_safe_for_upgrade()
    alembic_upgrade()
    click.echo("Database upgraded.")


@click.command("db-stamp-safe")
@click.option("--revision", default="head", help="Revision to stamp, default 'head'")
@with_appcontext
def db_stamp_safe(revision):
    """Mark the database at a given revision without running migrations."""
    _assert_safe_for_upgrade()
    alembic_stamp(revision)
    click.echo(f"Database stamped at {revision}.")


@click.command("seed")
@with_appcontext
def seed():
    """Insert the service categories and the default admin account."""
    cfg = current_app.config
    with transactional():
        created = seed_categories()
        admin, admin_created = ensure_admin(
            cfg["SEED_ADMIN_EMAIL"], cfg["SEED_ADMIN_PASSWORD"], cfg["SEED_ADMIN_NAME"]
        )
    get_catalog().invalidate()
    click.echo(f"Categories created: {created}.")
    if admin_created:
        click.echo(f"Admin account created: {admin.email}")
    else:
        click.echo(f"Admin account already present: {admin.email}")


@click.command("create-admin")
@click.option("--email", required=True)
@click.option("--name", required=True)
@click.password_option()
@with_appcontext
def create_admin(email, name, password):
    """Create an additional admin account."""
    with transactional():
        admin, created = ensure_admin(email, password, name)
    if not created:
        raise click.ClickException(f"An admin with email {admin.email} already exists")
    click.echo(f"Admin account created: {admin.email}")


def register_cli(app):
    app.cli.add_command(db_migrate_safe)
    app.cli.add_command(db_upgrade_safe)
    app.cli.add_command(db_stamp_safe)
    app.cli.add_command(seed)
    app.cli.add_command(create_admin)
