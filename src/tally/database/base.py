"""Abstract database interface."""

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from tally.domain.entities import Category, EntryDraft, EntryKind, LedgerEntry


class Database(ABC):
    """Abstract database interface for tally.

    Every ledger read and write is scoped by ``owner_id``. Write methods run in
    a single transaction each and raise ``WriteFailedError`` after rolling
    back when the store cannot complete them.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Category operations
    @abstractmethod
    def create_category(self, name: str, owner_id: Optional[int] = None) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def list_categories(self, owner_id: Optional[int] = None) -> list[Category]:
        """List shared categories plus those owned by ``owner_id``, by name."""
        pass

    # Ledger entry operations
    @abstractmethod
    def create_entries(self, drafts: Sequence[EntryDraft]) -> list[LedgerEntry]:
        """Persist all drafts in one transaction.

        Returns the created entries in draft order. Either every draft is
        stored or none is.
        """
        pass

    @abstractmethod
    def get_entry(self, owner_id: int, entry_id: int) -> Optional[LedgerEntry]:
        """Get an entry by ID, or None if missing or owned by someone else."""
        pass

    @abstractmethod
    def list_entries(
        self,
        owner_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        kinds: Optional[Iterable[EntryKind]] = None,
        search: Optional[str] = None,
    ) -> list[LedgerEntry]:
        """List an owner's entries, newest ``occurred_on`` first.

        Args:
            owner_id: Owning user
            start_date: Optional inclusive lower bound on occurred_on
            end_date: Optional inclusive upper bound on occurred_on
            kinds: Optional set of kinds to keep
            search: Optional case-insensitive text matched against
                description, category name and tags
        """
        pass

    @abstractmethod
    def list_group_entries(self, owner_id: int, group_id: str) -> list[LedgerEntry]:
        """List the owner's entries sharing ``group_id``, oldest first."""
        pass

    @abstractmethod
    def update_entry(
        self,
        owner_id: int,
        entry_id: int,
        description: Optional[str] = None,
        amount: Optional[Decimal] = None,
        category_id: Optional[int] = None,
        tags: Optional[str] = None,
        recurring_end_date: Optional[date] = None,
    ) -> Optional[LedgerEntry]:
        """Update the given fields of one row. Returns None when no row matched.

        None leaves a field unchanged; an empty tags string clears the tags.
        """
        pass

    @abstractmethod
    def delete_entry(self, owner_id: int, entry_id: int) -> int:
        """Delete one row. Returns the number of rows deleted."""
        pass

    @abstractmethod
    def delete_group(self, owner_id: int, group_id: str) -> int:
        """Delete every row of an owner's group. Returns the number deleted."""
        pass
