"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic so the store schema can change
without touching the ledger services.
"""

from decimal import Decimal

from tally.domain import entities as domain
from tally.database.models import (
    Category as ORMCategory,
    LedgerEntry as ORMLedgerEntry,
)
from tally.utils.amount_parser import to_money


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        owner_id=orm_category.owner_id,
        created_at=orm_category.created_at,
    )


def entry_to_domain(orm_entry: ORMLedgerEntry) -> domain.LedgerEntry:
    """Convert SQLAlchemy LedgerEntry model to domain LedgerEntry entity."""
    return domain.LedgerEntry(
        id=orm_entry.id,
        owner_id=orm_entry.owner_id,
        kind=domain.EntryKind(orm_entry.kind),
        description=orm_entry.description,
        amount=to_money(Decimal(orm_entry.amount)),
        category_id=orm_entry.category_id,
        occurred_on=orm_entry.occurred_on,
        group_id=orm_entry.group_id,
        recurring_end_date=orm_entry.recurring_end_date,
        tags=orm_entry.tags,
        created_at=orm_entry.created_at,
    )


def draft_to_orm(draft: domain.EntryDraft) -> ORMLedgerEntry:
    """Build an unsaved SQLAlchemy LedgerEntry from a domain draft."""
    return ORMLedgerEntry(
        owner_id=draft.owner_id,
        kind=draft.kind.value,
        description=draft.description,
        amount=draft.amount,
        category_id=draft.category_id,
        occurred_on=draft.occurred_on,
        group_id=draft.group_id,
        recurring_end_date=draft.recurring_end_date,
        tags=draft.tags,
    )
