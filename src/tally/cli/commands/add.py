"""Add transaction command."""

import click
from tally.domain.entities import EntryKind
from tally.domain.errors import DomainError
from tally.domain.ledger import LedgerService
from tally.domain.category import CategoryService
from tally.cli.category_resolution import resolve_category_or_exit
from tally.cli.error_handling import handle_domain_error, require_owner
from tally.utils.date_parser import parse_date
from tally.utils.amount_parser import parse_amount


@click.command("add")
@click.option(
    "--kind",
    required=True,
    type=click.Choice([k.value for k in EntryKind], case_sensitive=False),
    help="Entry kind",
)
@click.option("--description", required=True, help="Transaction description")
@click.option("--amount", required=True, help="Positive amount (e.g., 123.45)")
@click.option("--category", required=True, help="Category name or ID")
@click.option(
    "--months",
    type=int,
    help="Number of monthly installments for recurring kinds (1-120, default 1)",
)
@click.option("--end-date", help="Informational end date of the recurrence")
@click.option("--tags", help="Free-text tags")
@click.pass_context
def add_transaction(
    ctx,
    kind: str,
    description: str,
    amount: str,
    category: str,
    months: int | None,
    end_date: str | None,
    tags: str | None,
):
    """Add a transaction, optionally recurring for several months.

    Recurring kinds (recurring_income, recurring_debit) create one entry per
    month starting today, all sharing one group.

    Examples:
        tally --owner 1 add --kind expense --amount 50.00 --description "Groceries" --category Food
        tally --owner 1 add --kind recurring_debit --amount 200 --description Rent --category Housing --months 12
    """
    db = ctx.obj["db"]
    owner_id = require_owner(ctx)
    ledger_service = LedgerService(db)
    category_service = CategoryService(db)

    category_id = resolve_category_or_exit(ctx, category_service, owner_id, category)

    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    recurring_end_date = None
    if end_date:
        try:
            recurring_end_date = parse_date(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)

    try:
        group = ledger_service.create_group(
            owner_id=owner_id,
            kind=kind,
            description=description,
            amount=txn_amount,
            category_id=category_id,
            months=months,
            recurring_end_date=recurring_end_date,
            tags=tags,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    first = group.entries[0].entry
    click.echo(f"Created {len(group)} entr{'y' if len(group) == 1 else 'ies'} (group {group.group_id})")
    click.echo(f"  Kind: {first.kind.value}")
    click.echo(f"  Description: {first.description}")
    click.echo(f"  Amount: ${first.amount:,.2f}")
    for created in group.entries:
        click.echo(f"  [{created.installment}] ID {created.entry.id} on {created.entry.occurred_on}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
