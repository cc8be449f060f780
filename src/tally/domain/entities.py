"""Domain model entities for tally.

These are pure data classes representing ledger concepts, independent of
database schema. The store maps its rows into these entities and the
services only ever hand these back to callers.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional

from tally.domain.errors import ValidationError


class EntryKind(str, Enum):
    """Kind of ledger entry; decides sign in aggregation and recurrence."""

    INCOME = "income"
    RECURRING_INCOME = "recurring_income"
    EXPENSE = "expense"
    RECURRING_DEBIT = "recurring_debit"

    @property
    def is_income(self) -> bool:
        return self in (EntryKind.INCOME, EntryKind.RECURRING_INCOME)

    @property
    def is_recurring(self) -> bool:
        return self in (EntryKind.RECURRING_INCOME, EntryKind.RECURRING_DEBIT)

    @classmethod
    def parse(cls, value: "EntryKind | str | None") -> "EntryKind":
        """Parse a kind from an enum member or its string value.

        Raises:
            ValidationError: If value is empty or not a known kind
        """
        if isinstance(value, cls):
            return value
        if value is None or not str(value).strip():
            raise ValidationError("Field 'kind' is required")
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(k.value for k in cls)
            raise ValidationError(f"Invalid kind '{value}' (expected one of: {choices})")


@dataclass(frozen=True)
class Category:
    """Category domain entity.

    ``owner_id`` is None for shared default categories visible to every owner.
    """

    id: int
    name: str
    owner_id: Optional[int]
    created_at: datetime

    @property
    def is_shared(self) -> bool:
        return self.owner_id is None

    def is_visible_to(self, owner_id: int) -> bool:
        return self.owner_id is None or self.owner_id == owner_id


@dataclass(frozen=True)
class EntryDraft:
    """Ledger entry that has not been persisted yet."""

    owner_id: int
    kind: EntryKind
    description: str
    amount: Decimal
    category_id: int
    occurred_on: date
    group_id: Optional[str]
    recurring_end_date: Optional[date] = None
    tags: Optional[str] = None


@dataclass(frozen=True)
class LedgerEntry:
    """Persisted ledger entry domain entity."""

    id: int
    owner_id: int
    kind: EntryKind
    description: str
    amount: Decimal
    category_id: int
    occurred_on: date
    group_id: Optional[str]
    recurring_end_date: Optional[date]
    tags: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class CreatedEntry:
    """Entry returned from a group creation, with its position in the group."""

    entry: LedgerEntry
    position: int
    group_size: int

    @property
    def installment(self) -> str:
        """Informational "k/N" label; never persisted."""
        return f"{self.position}/{self.group_size}"


@dataclass(frozen=True)
class CreatedGroup:
    """Result of creating one (possibly recurring) ledger group."""

    group_id: str
    entries: tuple[CreatedEntry, ...]

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class CategoryBreakdown:
    """Income and expense sums for one category."""

    category_id: int
    category_name: Optional[str]
    income: Decimal
    expense: Decimal
    count: int


@dataclass(frozen=True)
class Projection:
    """Next-period balance estimate from recurring entries."""

    current_balance: Decimal
    recurring_income: Decimal
    recurring_debit: Decimal
    projected_balance: Decimal
    recurring_income_count: int = 0
    recurring_debit_count: int = 0


@dataclass(frozen=True)
class Aggregates:
    """All derived views over one owner's entries."""

    balance: Decimal
    total_income: Decimal
    total_expense: Decimal
    by_category: tuple[CategoryBreakdown, ...]
    projection: Projection
