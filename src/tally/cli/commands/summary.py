"""Summary command: balance, category breakdown and projection."""

import click
from tally.domain.summary import SummaryService
from tally.cli.error_handling import require_owner


@click.command("summary")
@click.option("--no-categories", is_flag=True, help="Hide the per-category breakdown")
@click.pass_context
def summary(ctx, no_categories: bool):
    """Show balance, totals, category breakdown and next month's projection."""
    db = ctx.obj["db"]
    owner_id = require_owner(ctx)
    service = SummaryService(db)

    aggregates = service.get_aggregates(owner_id)
    projection = aggregates.projection

    click.echo(f"Balance:        ${aggregates.balance:,.2f}")
    click.echo(f"Total income:   ${aggregates.total_income:,.2f}")
    click.echo(f"Total expenses: ${aggregates.total_expense:,.2f}")

    if not no_categories and aggregates.by_category:
        click.echo("\nBy category:")
        click.echo("-" * 70)
        click.echo(f"{'Category':<30} {'Income':>12} {'Expenses':>12} {'Count':>8}")
        click.echo("-" * 70)
        for row in aggregates.by_category:
            name = row.category_name or f"Category {row.category_id}"
            click.echo(
                f"{name[:30]:<30} {f'${row.income:,.2f}':>12} {f'${row.expense:,.2f}':>12} {row.count:>8}"
            )

    click.echo("\nProjection for next month:")
    click.echo(
        f"  Recurring income: ${projection.recurring_income:,.2f} "
        f"({projection.recurring_income_count} entries)"
    )
    click.echo(
        f"  Recurring debits: ${projection.recurring_debit:,.2f} "
        f"({projection.recurring_debit_count} entries)"
    )
    click.echo(f"  Projected balance: ${projection.projected_balance:,.2f}")


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(summary)
