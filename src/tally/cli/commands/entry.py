"""Ledger entry management commands."""

import click
from tally.domain.entities import EntryKind, LedgerEntry
from tally.domain.errors import DomainError
from tally.domain.ledger import LedgerService
from tally.domain.category import CategoryService
from tally.domain.summary import compute_totals
from tally.cli.category_resolution import resolve_category_or_exit
from tally.cli.error_handling import handle_domain_error, require_owner
from tally.utils.date_parser import parse_date, get_month_range
from tally.utils.amount_parser import parse_amount


def _print_entries(entries: list[LedgerEntry], category_names: dict[int, str]) -> None:
    """Print entries as a compact table."""
    click.echo("-" * 100)
    click.echo(
        f"{'ID':<6} {'Date':<12} {'Kind':<18} {'Amount':<12} {'Category':<20} {'Description':<30}"
    )
    click.echo("-" * 100)
    for entry in entries:
        category_name = category_names.get(entry.category_id, "Unknown")
        sign = "+" if entry.kind.is_income else "-"
        amount_str = f"{sign}${entry.amount:,.2f}"
        description = entry.description[:30]
        click.echo(
            f"{entry.id:<6} {str(entry.occurred_on):<12} {entry.kind.value:<18} {amount_str:<12} "
            f"{category_name[:20]:<20} {description:<30}"
        )


@click.group()
def entry_group():
    """Manage ledger entries."""
    pass


@entry_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option(
    "--period",
    type=click.Choice(["last-month", "this-month", "next-month"], case_sensitive=False),
    help="Whole-month period (cannot be combined with --start-date/--end-date)",
)
@click.option(
    "--kind",
    "kinds",
    multiple=True,
    type=click.Choice([k.value for k in EntryKind], case_sensitive=False),
    help="Only show these kinds (repeatable)",
)
@click.option("--search", help="Text to look for in description, category or tags")
@click.option("--verbose", "-v", is_flag=True, help="Show all fields including group, tags and end date")
@click.pass_context
def list_entries(
    ctx,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
    kinds: tuple[str, ...],
    search: str | None,
    verbose: bool,
):
    """List ledger entries, newest first."""
    db = ctx.obj["db"]
    owner_id = require_owner(ctx)
    service = LedgerService(db)
    category_service = CategoryService(db)

    if period and (start_date or end_date):
        click.echo("Error: --period cannot be combined with --start-date or --end-date.", err=True)
        ctx.exit(1)

    start = None
    end = None
    if period:
        start, end = get_month_range(period)
    else:
        if start_date:
            try:
                start = parse_date(start_date)
            except ValueError as e:
                click.echo(f"Error: Invalid start date: {e}", err=True)
                ctx.exit(1)
        if end_date:
            try:
                end = parse_date(end_date)
            except ValueError as e:
                click.echo(f"Error: Invalid end date: {e}", err=True)
                ctx.exit(1)

    try:
        entries = service.list_entries(
            owner_id,
            start_date=start,
            end_date=end,
            kinds=list(kinds) or None,
            search=search,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not entries:
        click.echo("No entries found.")
        return

    category_names = category_service.get_category_names(owner_id)
    click.echo(f"\nFound {len(entries)} entr{'y' if len(entries) == 1 else 'ies'}:")

    if verbose:
        click.echo("=" * 100)
        for entry in entries:
            click.echo(f"\nEntry ID: {entry.id}")
            click.echo(f"  Date: {entry.occurred_on}")
            click.echo(f"  Kind: {entry.kind.value}")
            click.echo(f"  Amount: ${entry.amount:,.2f}")
            click.echo(f"  Category: {category_names.get(entry.category_id, 'Unknown')}")
            click.echo(f"  Description: {entry.description}")
            if entry.group_id:
                click.echo(f"  Group: {entry.group_id}")
            if entry.recurring_end_date:
                click.echo(f"  Recurs until: {entry.recurring_end_date}")
            if entry.tags:
                click.echo(f"  Tags: {entry.tags}")
            click.echo(f"  Created: {entry.created_at}")
            click.echo("-" * 100)
    else:
        _print_entries(entries, category_names)

    income, expense = compute_totals(entries)
    click.echo("-" * 100)
    click.echo(
        f"{'TOTAL':<6} Income: ${income:,.2f} | Expenses: ${expense:,.2f} | "
        f"Net: ${income - expense:,.2f} | Count: {len(entries)}"
    )


@entry_group.command("group")
@click.argument("entry_id", type=int)
@click.pass_context
def show_group(ctx, entry_id: int) -> None:
    """Show every entry in the same recurring group as ENTRY_ID."""
    db = ctx.obj["db"]
    owner_id = require_owner(ctx)
    service = LedgerService(db)
    category_service = CategoryService(db)

    try:
        entries = service.resolve_group(owner_id, entry_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    group_id = entries[0].group_id or "none"
    click.echo(f"Group {group_id}: {len(entries)} entr{'y' if len(entries) == 1 else 'ies'}")
    _print_entries(entries, category_service.get_category_names(owner_id))


@entry_group.command("update")
@click.argument("entry_id", type=int)
@click.option("--description", help="New description")
@click.option("--amount", help="New positive amount")
@click.option("--category", help="New category name or ID")
@click.option("--tags", help="New tags")
@click.option("--end-date", help="New informational recurrence end date")
@click.pass_context
def update_entry(
    ctx,
    entry_id: int,
    description: str | None,
    amount: str | None,
    category: str | None,
    tags: str | None,
    end_date: str | None,
) -> None:
    """Update a single entry.

    Only the given fields change, and only on this entry; other entries of
    its group keep their values.

    Examples:
        tally --owner 1 entry update 3 --amount 75.00
        tally --owner 1 entry update 3 --description "Rent (new lease)" --tags home
    """
    db = ctx.obj["db"]
    owner_id = require_owner(ctx)
    service = LedgerService(db)
    category_service = CategoryService(db)

    txn_amount = None
    if amount is not None:
        try:
            txn_amount = parse_amount(amount)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)

    category_id = None
    if category is not None:
        category_id = resolve_category_or_exit(ctx, category_service, owner_id, category)

    recurring_end_date = None
    if end_date is not None:
        try:
            recurring_end_date = parse_date(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)

    try:
        service.update_entry(
            owner_id,
            entry_id,
            description=description,
            amount=txn_amount,
            category_id=category_id,
            tags=tags,
            recurring_end_date=recurring_end_date,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated entry {entry_id}")


@entry_group.command("delete")
@click.argument("entry_id", type=int)
@click.option("--group", "delete_group", is_flag=True, help="Delete every entry of the entry's group")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_entry(ctx, entry_id: int, delete_group: bool, yes: bool) -> None:
    """Delete an entry, or its whole recurring group with --group.

    Examples:
        tally --owner 1 entry delete 4
        tally --owner 1 entry delete 4 --group
    """
    db = ctx.obj["db"]
    owner_id = require_owner(ctx)
    service = LedgerService(db)

    try:
        scope = service.resolve_group(owner_id, entry_id) if delete_group else [service.get_entry(owner_id, entry_id)]
    except DomainError as e:
        handle_domain_error(ctx, e)

    target = f"{len(scope)} entries of the group of entry {entry_id}" if len(scope) > 1 else f"entry {entry_id}"
    if not yes and not click.confirm(f"Are you sure you want to delete {target}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        deleted = service.delete_entry(owner_id, entry_id, delete_group=delete_group)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted {deleted} entr{'y' if deleted == 1 else 'ies'}")


def register_commands(cli: click.Group) -> None:
    """Register entry commands with main CLI."""
    cli.add_command(entry_group, name="entry")
