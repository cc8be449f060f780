"""Category listing commands."""

import click
from tally.domain.category import CategoryService


@click.group()
def category_group():
    """Show categories."""
    pass


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List shared categories and, with --owner, the owner's own."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    categories = service.list_categories(ctx.obj.get("owner_id"))
    if not categories:
        click.echo("No categories found. Run 'init-categories' to create default categories.")
        return

    click.echo("\nCategories:")
    for cat in categories:
        scope = "shared" if cat.is_shared else "own"
        click.echo(f"{cat.name} (ID: {cat.id}, {scope})")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
