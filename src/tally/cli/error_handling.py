"""CLI error handling helpers."""

import click

from tally.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def require_owner(ctx: click.Context) -> int:
    """Return the owner the command is scoped to, or exit if none was given."""
    owner_id = ctx.obj.get("owner_id")
    if owner_id is None:
        click.echo("Error: No owner given. Use --owner or set TALLY_OWNER_ID.", err=True)
        ctx.exit(1)
    return owner_id
