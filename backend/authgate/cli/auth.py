"""Flask CLI commands for the user directory, authorization codes and the secret."""

from __future__ import annotations

import logging

import click
from flask.cli import with_appcontext
from sqlalchemy.exc import IntegrityError

from authgate.core.components import get_components
from authgate.core.extensions import db
from authgate.models.user import User
from authgate.repositories.user import UserRepository
from authgate.services._shared.ports import generate_secret_key

LOGGER = logging.getLogger(__name__)


@click.group("auth")
def auth_cli() -> None:
    """Manage users, authorization codes and the shared secret."""


@auth_cli.command("init-db")
@with_appcontext
def init_db_command() -> None:
    """Create the users, codes and settings tables if they do not exist."""
    db.create_all()
    click.echo("User directory ready.")


@auth_cli.command("create-user")
@click.argument("login")
@click.option("--email", default=None, help="Optional contact address.")
@click.option("--display-name", default=None, help="Name embedded in access tokens.")
@with_appcontext
def create_user_command(login: str, email: str | None, display_name: str | None) -> None:
    """Add an active user to the directory and print its id."""
    repo = UserRepository(session=db.session)
    try:
        user = repo.add(User(login=login, email=email, display_name=display_name))
        db.session.commit()
    except (IntegrityError, ValueError) as exc:
        db.session.rollback()
        raise click.ClickException(f"Could not create user: {exc}") from exc
    LOGGER.info("cli.user_created", extra={"user_id": user.id})
    click.echo(str(user.id))


@auth_cli.command("issue-code")
@click.argument("user_id", type=int)
@with_appcontext
def issue_code_command(user_id: int) -> None:
    """Print a one-time authorization code for USER_ID."""
    try:
        code = get_components().directory.issue_authorization_code(user_id)
    except LookupError as exc:
        raise click.ClickException(str(exc)) from exc
    LOGGER.info("cli.code_issued", extra={"user_id": user_id})
    click.echo(code)


@auth_cli.command("rotate-secret")
@click.option("--value", default=None, help="Use this secret instead of a random one.")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt.")
@with_appcontext
def rotate_secret_command(value: str | None, yes: bool) -> None:
    """Replace the shared secret. Every issued token stops verifying.

    The value is stored in Redis or the ``settings`` table, so running
    servers pick it up on their next request.
    """
    if not yes:
        click.confirm(
            "Rotating the secret signs out every client and requires updating them. Continue?",
            abort=True,
        )
    new_secret = value or generate_secret_key()
    get_components().settings.set_secret_key(new_secret)
    LOGGER.warning("cli.secret_rotated")
    click.echo(new_secret)
