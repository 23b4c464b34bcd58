"""User registration commands."""

import click
from fintrack.domain.errors import DomainError
from fintrack.domain.user import UserService
from fintrack.cli.error_handling import handle_domain_error


@click.group()
def user_group():
    """Manage users."""
    pass


@user_group.command("register")
@click.argument("username")
@click.option("--name", required=True, help="Display name")
@click.option(
    "--tracking",
    type=click.Choice(["income", "expenses", "both"]),
    default="both",
    show_default=True,
    help="What to track",
)
@click.pass_context
def register_user(ctx, username: str, name: str, tracking: str):
    """Register a new user.

    Examples:
        fintrack user register asha --name "Asha Rao"
        fintrack user register ravi --name "Ravi" --tracking expenses
    """
    service = UserService(ctx.obj["db"])
    try:
        user_id = service.register(username=username, name=name, tracking_option=tracking)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Registered user '{username}' (ID: {user_id})")


@user_group.command("show")
@click.argument("username")
@click.pass_context
def show_user(ctx, username: str):
    """Show a user's details."""
    service = UserService(ctx.obj["db"])
    try:
        user = service.get_by_username(username)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"ID: {user.id}")
    click.echo(f"Username: {user.username}")
    click.echo(f"Name: {user.name}")
    click.echo(f"Tracking: {user.tracking_option.value}")
    click.echo(f"Registered: {user.created_at:%Y-%m-%d}")


@user_group.command("set-tracking")
@click.argument("username")
@click.option(
    "--tracking",
    type=click.Choice(["income", "expenses", "both"]),
    required=True,
    help="What to track",
)
@click.pass_context
def set_tracking(ctx, username: str, tracking: str):
    """Change what a user tracks.

    Examples:
        fintrack user set-tracking asha --tracking expenses
    """
    service = UserService(ctx.obj["db"])
    try:
        user = service.get_by_username(username)
        service.set_tracking_option(user.id, tracking)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Tracking for '{username}' set to {tracking}")


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(user_group, name="user")
