"""Main CLI entry point."""

import click
from tally.database.factories import create_sqlite_database
from tally.logging_setup import configure_logging

# Import and register all commands at module level
from tally.cli.commands import (
    add,
    entry,
    summary,
    category,
    init_categories,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides TALLY_DB_PATH environment variable)",
    envvar="TALLY_DB_PATH",
)
@click.option(
    "--owner",
    "owner_id",
    type=int,
    help="Owner (user) ID every command is scoped to",
    envvar="TALLY_OWNER_ID",
)
@click.option(
    "--log-level",
    help="Logging level (e.g. INFO, DEBUG); defaults to TALLY_LOG_LEVEL or WARNING",
    envvar="TALLY_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, owner_id: int | None, log_level: str | None):
    """Tally - Personal ledger with recurring transactions.

    Record income and expenses, spread recurring ones over the coming months,
    and see your balance and next month's projection.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)
    ctx.obj["owner_id"] = owner_id

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
add.register_commands(cli)
entry.register_commands(cli)
summary.register_commands(cli)
category.register_commands(cli)
init_categories.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
