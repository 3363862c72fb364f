# management/commands.py

import click
from flask import current_app
from flask.cli import with_appcontext
from config import Config
from synccircle import db
from synccircle.models.space_member import SpaceRole
from synccircle.services.space_service import SpaceService
from synccircle.services.user_service import UserService
from synccircle.utils.cleanup_tasks import cleanup_token_blocklist
import logging

logger = logging.getLogger("synccircle")

def _require_user(username):
    user = UserService.get_user_by_username(username)
    if not user:
        raise click.ClickException(f"User '{username}' not found")
    return user

def register_commands(app):
    """Registers all custom command groups with the Flask app."""

    # --- Database ---
    @app.cli.group()
    def database():
        """Database management commands."""

    @database.command()
    def check():
        """Verify that DATABASE_URL is reachable."""
        ok, error = Config.test_database_connection(current_app.config['SQLALCHEMY_DATABASE_URI'])
        if not ok:
            raise click.ClickException(f"Database connection failed: {error}")
        click.echo("Database connection OK.")

    @database.command()
    @with_appcontext
    def init():
        """Create all tables that do not exist yet."""
        db.create_all()
        logger.info("Database tables created via CLI")
        click.echo("Database initialization completed successfully.")

    @database.command('cleanup-blocklist')
    @with_appcontext
    def cleanup_blocklist():
        """Remove expired token JTIs from the blocklist."""
        deleted = cleanup_token_blocklist(current_app.config['JWT_ACCESS_TOKEN_EXPIRES'])
        click.echo(f"Deleted {deleted} expired token entries from the blocklist.")

    # --- Users ---
    @app.cli.group()
    def users():
        """User management commands."""

    @users.command('create')
    @click.argument('username')
    @click.password_option()
    @click.option('--first-name', default=None)
    @click.option('--last-name', default=None)
    @click.option('--email', default=None)
    @with_appcontext
    def create_user(username, password, first_name, last_name, email):
        """Create a user account."""
        user, error = UserService.create_user(username, password, first_name, last_name, email)
        if error:
            raise click.ClickException(error)
        click.echo(f"Created user {user.username} (id {user.id}).")

    # --- Spaces ---
    @app.cli.group()
    def spaces():
        """Space and membership seeding commands."""

    @spaces.command('create')
    @click.argument('name')
    @click.option('--owner', required=True, help='Username of the owner; joins as admin.')
    @click.option('--description', default=None)
    @with_appcontext
    def create_space(name, owner, description):
        """Create a space owned by an existing user."""
        space, error = SpaceService.create_space(name, _require_user(owner), description)
        if error:
            raise click.ClickException(error)
        click.echo(f"Created space '{space.name}' (id {space.id}, invite code {space.invite_code}).")

    @spaces.command('add-member')
    @click.argument('space_id', type=int)
    @click.argument('username')
    @click.option('--role', type=click.Choice(SpaceRole.ALL), default=SpaceRole.PARTICIPANT,
                  show_default=True)
    @with_appcontext
    def add_member(space_id, username, role):
        """Add a user to a space."""
        member, error = SpaceService.add_member(space_id, _require_user(username), role)
        if error:
            raise click.ClickException(error)
        click.echo(f"Added {username} to space {space_id} as {member.role}.")
