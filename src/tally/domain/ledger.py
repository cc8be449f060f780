"""Ledger domain service: group creation, listing, update and deletion."""

from datetime import date
from typing import Any, Callable, Iterable, Optional

from tally.database.base import Database
from tally.domain import errors
from tally.domain.category import CategoryService
from tally.domain.entities import (
    CreatedEntry,
    CreatedGroup,
    EntryKind,
    LedgerEntry,
)
from tally.domain.errors import NotFoundError, ValidationError
from tally.domain.recurrence import (
    expand_group,
    new_group_id,
    validate_amount,
    validate_category_id,
    validate_description,
)
from tally.logging_setup import get_logger

logger = get_logger(__name__)


class LedgerService:
    """Service for managing an owner's ledger entries.

    Every operation takes the owner explicitly and never reads or touches
    another owner's rows.
    """

    def __init__(self, db: Database, group_id_factory: Callable[[], str] = new_group_id):
        """Initialize ledger service.

        Args:
            db: Database instance
            group_id_factory: Callable producing fresh group ids
        """
        self.db = db
        self.category_service = CategoryService(db)
        self.group_id_factory = group_id_factory

    def create_group(
        self,
        owner_id: int,
        kind: EntryKind | str,
        description: str,
        amount: Any,
        category_id: Any,
        months: Any = None,
        recurring_end_date: Optional[date] = None,
        tags: Optional[str] = None,
        today: Optional[date] = None,
    ) -> CreatedGroup:
        """Create one entry, or one per month for recurring kinds.

        The drafts are fully built and the category resolved before the
        single write transaction starts.

        Args:
            owner_id: Owning user
            kind: Entry kind
            description: Entry description
            amount: Positive amount
            category_id: Category visible to the owner
            months: Recurrence count for recurring kinds (1-120)
            recurring_end_date: Informational recurrence end
            tags: Optional free text
            today: Date of the first installment (defaults to today)

        Returns:
            CreatedGroup with entries in installment order

        Raises:
            ValidationError: If any field is invalid
            WriteFailedError: If the store rolled back the batch
        """
        drafts = expand_group(
            owner_id=owner_id,
            kind=kind,
            description=description,
            amount=amount,
            category_id=category_id,
            months=months,
            recurring_end_date=recurring_end_date,
            tags=tags,
            today=today,
            group_id_factory=self.group_id_factory,
        )
        self.category_service.resolve_category(owner_id, drafts[0].category_id)

        created = self.db.create_entries(drafts)
        group_id = drafts[0].group_id
        logger.info(
            "Created %d %s entr%s in group %s for owner %s",
            len(created),
            drafts[0].kind.value,
            "y" if len(created) == 1 else "ies",
            group_id,
            owner_id,
        )

        size = len(created)
        return CreatedGroup(
            group_id=group_id,
            entries=tuple(
                CreatedEntry(entry=entry, position=i + 1, group_size=size)
                for i, entry in enumerate(created)
            ),
        )

    def get_entry(self, owner_id: int, entry_id: int) -> LedgerEntry:
        """Get one of the owner's entries.

        Raises:
            NotFoundError: If the entry does not exist for this owner
        """
        entry = self.db.get_entry(owner_id, entry_id)
        if entry is None:
            raise NotFoundError(errors.entry_not_found(entry_id))
        return entry

    def list_entries(
        self,
        owner_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        kinds: Optional[Iterable[EntryKind | str]] = None,
        search: Optional[str] = None,
    ) -> list[LedgerEntry]:
        """List the owner's entries, newest first.

        Raises:
            ValidationError: If a kind is unknown or the date range is inverted
        """
        if start_date is not None and end_date is not None and start_date > end_date:
            raise ValidationError(f"Start date {start_date} is after end date {end_date}")
        parsed_kinds = None
        if kinds is not None:
            parsed_kinds = [EntryKind.parse(k) for k in kinds]
        return self.db.list_entries(
            owner_id,
            start_date=start_date,
            end_date=end_date,
            kinds=parsed_kinds,
            search=search or None,
        )

    def resolve_group(self, owner_id: int, entry_id: int) -> list[LedgerEntry]:
        """Return the entries an update or delete of the group would touch.

        A standalone entry is its own scope; otherwise the scope is every entry
        with the same group id and owner.

        Raises:
            NotFoundError: If the entry does not exist for this owner
        """
        entry = self.get_entry(owner_id, entry_id)
        if entry.group_id is None:
            return [entry]
        return self.db.list_group_entries(owner_id, entry.group_id)

    def update_entry(
        self,
        owner_id: int,
        entry_id: int,
        description: Optional[str] = None,
        amount: Any = None,
        category_id: Any = None,
        tags: Optional[str] = None,
        recurring_end_date: Optional[date] = None,
    ) -> LedgerEntry:
        """Update fields on a single entry; siblings are never touched.

        Raises:
            ValidationError: If no field is given or a given field is invalid
            NotFoundError: If the entry does not exist for this owner
            WriteFailedError: If the store rolled back the update
        """
        if all(
            value is None
            for value in (description, amount, category_id, tags, recurring_end_date)
        ):
            raise ValidationError("No fields to update")

        clean_description = None
        if description is not None:
            clean_description = validate_description(description)
        clean_amount = None
        if amount is not None:
            clean_amount = validate_amount(amount)
        clean_category_id = None
        if category_id is not None:
            clean_category_id = validate_category_id(category_id)
            self.category_service.resolve_category(owner_id, clean_category_id)
        clean_tags = None
        if tags is not None:
            # Blank tags clear the field
            clean_tags = tags.strip()

        updated = self.db.update_entry(
            owner_id,
            entry_id,
            description=clean_description,
            amount=clean_amount,
            category_id=clean_category_id,
            tags=clean_tags,
            recurring_end_date=recurring_end_date,
        )
        if updated is None:
            raise NotFoundError(errors.entry_not_found(entry_id))
        return updated

    def delete_entry(self, owner_id: int, entry_id: int, delete_group: bool = False) -> int:
        """Delete an entry, or its whole group when ``delete_group`` is set.

        Returns:
            Number of entries deleted

        Raises:
            NotFoundError: If the entry does not exist for this owner
            WriteFailedError: If the store rolled back the delete
        """
        if delete_group:
            entry = self.get_entry(owner_id, entry_id)
            if entry.group_id is not None:
                deleted = self.db.delete_group(owner_id, entry.group_id)
                logger.info(
                    "Deleted %d entries of group %s for owner %s",
                    deleted,
                    entry.group_id,
                    owner_id,
                )
                if deleted == 0:
                    raise NotFoundError(errors.entry_not_found(entry_id))
                return deleted

        deleted = self.db.delete_entry(owner_id, entry_id)
        if deleted == 0:
            raise NotFoundError(errors.entry_not_found(entry_id))
        logger.info("Deleted entry %s for owner %s", entry_id, owner_id)
        return deleted
