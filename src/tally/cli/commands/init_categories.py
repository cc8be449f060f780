"""Initialize default categories."""

import click
from tally.domain.category import CategoryService


# Shared default categories, visible to every owner
INITIAL_CATEGORIES = [
    "Salary",
    "Investments",
    "Other Income",
    "Housing",
    "Food",
    "Transportation",
    "Bills & Utilities",
    "Health",
    "Education",
    "Entertainment",
    "Shopping",
    "Subscriptions",
    "Other",
]


@click.command("init-categories")
@click.pass_context
def init_categories(ctx):
    """Create the shared default categories."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    existing = service.list_categories()
    if existing:
        click.echo("Categories already exist.")
        return

    click.echo("Creating default categories...")

    created = 0
    errors = 0
    for category_name in INITIAL_CATEGORIES:
        try:
            service.create_category(name=category_name)
            created += 1
        except ValueError as e:
            click.echo(f"Warning: Could not create category '{category_name}': {e}", err=True)
            errors += 1

    if errors == 0:
        click.echo(f"Successfully created {created} categories.")
    else:
        click.echo(f"Created {created} categories with {errors} errors.")


def register_commands(cli):
    """Register init-categories command with main CLI."""
    cli.add_command(init_categories)
