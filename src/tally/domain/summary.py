"""Balance, category breakdown and projection over ledger entries.

The ``compute_*`` functions are pure and total: they never touch the store
and an empty entry list yields zero on every metric.
"""

from decimal import Decimal
from typing import Iterable, Mapping, Optional

from tally.database.base import Database
from tally.domain.category import CategoryService
from tally.domain.entities import (
    Aggregates,
    CategoryBreakdown,
    EntryKind,
    LedgerEntry,
    Projection,
)

ZERO = Decimal("0.00")


def compute_totals(entries: Iterable[LedgerEntry]) -> tuple[Decimal, Decimal]:
    """Return (total income, total expense) over the entries."""
    income = ZERO
    expense = ZERO
    for entry in entries:
        if entry.kind.is_income:
            income += entry.amount
        else:
            expense += entry.amount
    return income, expense


def compute_balance(entries: Iterable[LedgerEntry]) -> Decimal:
    """Income kinds minus every other kind."""
    income, expense = compute_totals(entries)
    return income - expense


def compute_by_category(
    entries: Iterable[LedgerEntry],
    category_names: Optional[Mapping[int, str]] = None,
) -> list[CategoryBreakdown]:
    """Group entries by category into income and expense sums.

    Args:
        entries: Entries to aggregate
        category_names: Optional category ID to name lookup for labelling

    Returns:
        Breakdowns ordered by total volume (largest first), then category ID
    """
    names = category_names or {}
    sums: dict[int, dict[str, Decimal | int]] = {}

    for entry in entries:
        bucket = sums.setdefault(entry.category_id, {"income": ZERO, "expense": ZERO, "count": 0})
        if entry.kind.is_income:
            bucket["income"] += entry.amount
        else:
            bucket["expense"] += entry.amount
        bucket["count"] += 1

    breakdowns = [
        CategoryBreakdown(
            category_id=category_id,
            category_name=names.get(category_id),
            income=data["income"],
            expense=data["expense"],
            count=data["count"],
        )
        for category_id, data in sums.items()
    ]
    breakdowns.sort(key=lambda b: (-(b.income + b.expense), b.category_id))
    return breakdowns


def compute_projection(entries: Iterable[LedgerEntry]) -> Projection:
    """Estimate next period's balance from the recurring entries.

    Every stored recurring row contributes one more occurrence, whatever its
    ``occurred_on``: the projection is
    ``balance + recurring income - recurring debit``.
    """
    entries = list(entries)
    balance = compute_balance(entries)

    recurring_income = ZERO
    recurring_debit = ZERO
    income_count = 0
    debit_count = 0
    for entry in entries:
        if entry.kind == EntryKind.RECURRING_INCOME:
            recurring_income += entry.amount
            income_count += 1
        elif entry.kind == EntryKind.RECURRING_DEBIT:
            recurring_debit += entry.amount
            debit_count += 1

    return Projection(
        current_balance=balance,
        recurring_income=recurring_income,
        recurring_debit=recurring_debit,
        projected_balance=balance + recurring_income - recurring_debit,
        recurring_income_count=income_count,
        recurring_debit_count=debit_count,
    )


def compute_aggregates(
    entries: Iterable[LedgerEntry],
    category_names: Optional[Mapping[int, str]] = None,
) -> Aggregates:
    """Compute every derived view in one pass over a materialized list."""
    entries = list(entries)
    income, expense = compute_totals(entries)
    return Aggregates(
        balance=income - expense,
        total_income=income,
        total_expense=expense,
        by_category=tuple(compute_by_category(entries, category_names)),
        projection=compute_projection(entries),
    )


class SummaryService:
    """Service for building an owner's aggregate views."""

    def __init__(self, db: Database):
        """Initialize summary service.

        Args:
            db: Database instance
        """
        self.db = db
        self.category_service = CategoryService(db)

    def get_aggregates(self, owner_id: int) -> Aggregates:
        """Read the owner's entries once and aggregate them."""
        entries = self.db.list_entries(owner_id)
        names = self.category_service.get_category_names(owner_id)
        return compute_aggregates(entries, names)
