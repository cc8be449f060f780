"""Tests for the ledger service: creation, grouping, update and deletion."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from tally.domain.entities import EntryKind
from tally.domain.errors import NotFoundError, ValidationError
from tally.domain.ledger import LedgerService
from tally.utils.date_parser import add_months

OWNER_A = 1
OWNER_B = 2


def _create(service, category_id, owner_id=OWNER_A, months=1, kind=EntryKind.RECURRING_DEBIT, **kwargs):
    params = dict(
        owner_id=owner_id,
        kind=kind,
        description="Rent",
        amount=Decimal("200.00"),
        category_id=category_id,
        months=months,
    )
    params.update(kwargs)
    return service.create_group(**params)


class TestCreateGroup:
    """Group creation and atomic persistence."""

    @pytest.mark.parametrize("months", [1, 2, 12, 120])
    def test_creates_n_rows_sharing_group(self, ledger_service, housing_id, months):
        group = _create(ledger_service, housing_id, months=months)

        entries = ledger_service.list_entries(OWNER_A)
        assert len(entries) == months
        assert {e.group_id for e in entries} == {group.group_id}

    def test_entries_returned_in_installment_order(self, ledger_service, housing_id, today):
        group = _create(ledger_service, housing_id, months=3, today=today)

        assert [c.installment for c in group.entries] == ["1/3", "2/3", "3/3"]
        assert [c.entry.occurred_on for c in group.entries] == [
            date(2024, 1, 15),
            date(2024, 2, 15),
            date(2024, 3, 15),
        ]
        ids = [c.entry.id for c in group.entries]
        assert ids == sorted(ids)

    def test_non_recurring_kind_creates_one_row(self, ledger_service, housing_id):
        group = _create(ledger_service, housing_id, kind=EntryKind.EXPENSE, months=5)

        assert len(group) == 1
        assert group.entries[0].installment == "1/1"
        assert group.entries[0].entry.group_id == group.group_id

    @pytest.mark.parametrize("months", [0, 121, -1])
    def test_invalid_months_write_nothing(self, ledger_service, housing_id, months):
        with pytest.raises(ValidationError, match="Invalid number of months"):
            _create(ledger_service, housing_id, months=months)
        assert ledger_service.list_entries(OWNER_A) == []

    @pytest.mark.parametrize("amount", ["1e30", "12345678901234567.89", "100000000"])
    def test_oversized_amount_writes_nothing(self, ledger_service, housing_id, amount):
        with pytest.raises(ValidationError, match="Invalid amount"):
            _create(ledger_service, housing_id, amount=amount, months=3)
        assert ledger_service.list_entries(OWNER_A) == []

    def test_largest_amount_stored_exactly(self, ledger_service, housing_id):
        group = _create(ledger_service, housing_id, amount="99999999.99", months=2)

        assert group.entries[0].entry.amount == Decimal("99999999.99")
        assert [e.amount for e in ledger_service.list_entries(OWNER_A)] == [Decimal("99999999.99")] * 2

    def test_unknown_category_rejected(self, ledger_service, sample_categories):
        with pytest.raises(ValidationError, match="Category 999 not found"):
            _create(ledger_service, 999)
        assert ledger_service.list_entries(OWNER_A) == []

    def test_other_owners_category_rejected(self, ledger_service, category_service):
        private_id = category_service.create_category("Side job", owner_id=OWNER_B)

        with pytest.raises(ValidationError):
            _create(ledger_service, private_id, owner_id=OWNER_A)

    def test_own_category_accepted(self, ledger_service, category_service):
        private_id = category_service.create_category("Side job", owner_id=OWNER_A)
        group = _create(ledger_service, private_id, kind=EntryKind.INCOME)
        assert group.entries[0].entry.category_id == private_id

    def test_optional_fields_persisted(self, ledger_service, housing_id):
        end = date(2025, 1, 1)
        group = _create(ledger_service, housing_id, months=2, tags="home", recurring_end_date=end)

        for entry in ledger_service.resolve_group(OWNER_A, group.entries[0].entry.id):
            assert entry.tags == "home"
            assert entry.recurring_end_date == end

    def test_concurrent_requests_make_independent_groups(self, ledger_service, housing_id):
        first = _create(ledger_service, housing_id, months=2)
        second = _create(ledger_service, housing_id, months=2)

        assert first.group_id != second.group_id
        assert len(ledger_service.list_entries(OWNER_A)) == 4


class TestListEntries:
    """Ordering and filtering of the entry list."""

    def test_ordered_newest_first(self, ledger_service, housing_id, today):
        _create(ledger_service, housing_id, months=3, today=today)
        _create(ledger_service, housing_id, kind=EntryKind.EXPENSE, description="Fix", today=today)

        entries = ledger_service.list_entries(OWNER_A)
        dates = [e.occurred_on for e in entries]
        assert dates == sorted(dates, reverse=True)
        # Same date: the later-created entry comes first
        same_day = [e for e in entries if e.occurred_on == today]
        assert [e.description for e in same_day] == ["Fix", "Rent"]

    def test_filters_by_date_range(self, ledger_service, housing_id, today):
        _create(ledger_service, housing_id, months=6, today=today)

        entries = ledger_service.list_entries(
            OWNER_A, start_date=date(2024, 2, 1), end_date=date(2024, 3, 31)
        )
        assert [e.occurred_on for e in entries] == [date(2024, 3, 15), date(2024, 2, 15)]

    def test_inverted_date_range_rejected(self, ledger_service):
        with pytest.raises(ValidationError):
            ledger_service.list_entries(OWNER_A, start_date=date(2024, 2, 1), end_date=date(2024, 1, 1))

    def test_filters_by_kind(self, ledger_service, housing_id):
        _create(ledger_service, housing_id, months=2)
        _create(ledger_service, housing_id, kind=EntryKind.INCOME, description="Bonus")

        entries = ledger_service.list_entries(OWNER_A, kinds=["income"])
        assert [e.description for e in entries] == ["Bonus"]

    def test_search_matches_description_and_tags(self, ledger_service, housing_id):
        _create(ledger_service, housing_id, kind=EntryKind.EXPENSE, description="Groceries")
        _create(ledger_service, housing_id, kind=EntryKind.EXPENSE, description="Misc", tags="Weekly GROCERY run")
        _create(ledger_service, housing_id, kind=EntryKind.EXPENSE, description="Cinema")

        entries = ledger_service.list_entries(OWNER_A, search="grocer")
        assert sorted(e.description for e in entries) == ["Groceries", "Misc"]

    def test_search_matches_category_name(self, ledger_service, housing_id, sample_categories):
        _create(ledger_service, housing_id, kind=EntryKind.EXPENSE, description="Monthly payment")
        _create(ledger_service, sample_categories["Food"], kind=EntryKind.EXPENSE, description="Lunch")

        entries = ledger_service.list_entries(OWNER_A, search="HOUS")
        assert [e.description for e in entries] == ["Monthly payment"]

    def test_search_treats_wildcards_literally(self, ledger_service, housing_id):
        _create(ledger_service, housing_id, kind=EntryKind.EXPENSE, description="Cinema")
        assert ledger_service.list_entries(OWNER_A, search="%") == []


class TestResolveGroup:
    """Group scope resolution."""

    def test_group_scope_is_every_sibling(self, ledger_service, housing_id):
        group = _create(ledger_service, housing_id, months=6)
        entry_id = group.entries[2].entry.id

        scope = ledger_service.resolve_group(OWNER_A, entry_id)
        assert sorted(e.id for e in scope) == sorted(c.entry.id for c in group.entries)

    def test_missing_entry_not_found(self, ledger_service):
        with pytest.raises(NotFoundError):
            ledger_service.resolve_group(OWNER_A, 12345)

    def test_other_owners_entry_not_found(self, ledger_service, housing_id):
        group = _create(ledger_service, housing_id, owner_id=OWNER_B, months=2)

        with pytest.raises(NotFoundError):
            ledger_service.resolve_group(OWNER_A, group.entries[0].entry.id)

    def test_ungrouped_row_is_its_own_scope(self, temp_db, ledger_service, housing_id, today):
        from tally.domain.entities import EntryDraft

        [entry] = temp_db.create_entries(
            [
                EntryDraft(
                    owner_id=OWNER_A,
                    kind=EntryKind.EXPENSE,
                    description="Legacy",
                    amount=Decimal("10.00"),
                    category_id=housing_id,
                    occurred_on=today,
                    group_id=None,
                )
            ]
        )
        assert ledger_service.resolve_group(OWNER_A, entry.id) == [entry]


class TestDeleteEntry:
    """Single and group deletion."""

    def test_delete_group_removes_all_siblings(self, ledger_service, housing_id):
        group = _create(ledger_service, housing_id, months=6)
        entry_id = group.entries[3].entry.id

        deleted = ledger_service.delete_entry(OWNER_A, entry_id, delete_group=True)

        assert deleted == 6
        assert ledger_service.list_entries(OWNER_A) == []

    def test_delete_single_keeps_siblings(self, ledger_service, housing_id):
        group = _create(ledger_service, housing_id, months=6)
        entry_id = group.entries[3].entry.id

        deleted = ledger_service.delete_entry(OWNER_A, entry_id, delete_group=False)

        assert deleted == 1
        remaining = ledger_service.list_entries(OWNER_A)
        assert len(remaining) == 5
        assert entry_id not in {e.id for e in remaining}
        assert {e.group_id for e in remaining} == {group.group_id}

    def test_delete_group_of_one(self, ledger_service, housing_id):
        group = _create(ledger_service, housing_id, kind=EntryKind.EXPENSE)
        other = _create(ledger_service, housing_id, kind=EntryKind.EXPENSE)

        deleted = ledger_service.delete_entry(OWNER_A, group.entries[0].entry.id, delete_group=True)

        assert deleted == 1
        assert [e.id for e in ledger_service.list_entries(OWNER_A)] == [other.entries[0].entry.id]

    def test_delete_group_leaves_other_groups(self, ledger_service, housing_id):
        first = _create(ledger_service, housing_id, months=3)
        second = _create(ledger_service, housing_id, months=2)

        ledger_service.delete_entry(OWNER_A, first.entries[0].entry.id, delete_group=True)

        assert {e.group_id for e in ledger_service.list_entries(OWNER_A)} == {second.group_id}

    def test_delete_missing_entry_not_found(self, ledger_service):
        with pytest.raises(NotFoundError):
            ledger_service.delete_entry(OWNER_A, 999)
        with pytest.raises(NotFoundError):
            ledger_service.delete_entry(OWNER_A, 999, delete_group=True)

    def test_delete_twice_not_found(self, ledger_service, housing_id):
        group = _create(ledger_service, housing_id)
        entry_id = group.entries[0].entry.id

        ledger_service.delete_entry(OWNER_A, entry_id)
        with pytest.raises(NotFoundError):
            ledger_service.delete_entry(OWNER_A, entry_id)


class TestUpdateEntry:
    """Single-row field updates."""

    def test_update_amount_touches_one_row(self, ledger_service, housing_id):
        group = _create(ledger_service, housing_id, months=3)
        target = group.entries[1].entry

        updated = ledger_service.update_entry(OWNER_A, target.id, amount="250.50")

        assert updated.amount == Decimal("250.50")
        for entry in ledger_service.resolve_group(OWNER_A, target.id):
            expected = Decimal("250.50") if entry.id == target.id else Decimal("200.00")
            assert entry.amount == expected

    def test_update_several_fields(self, ledger_service, housing_id, sample_categories):
        group = _create(ledger_service, housing_id)
        entry_id = group.entries[0].entry.id
        end = date.today() + timedelta(days=365)

        updated = ledger_service.update_entry(
            OWNER_A,
            entry_id,
            description="  New rent ",
            category_id=sample_categories["Bills & Utilities"],
            tags="lease",
            recurring_end_date=end,
        )

        assert updated.description == "New rent"
        assert updated.category_id == sample_categories["Bills & Utilities"]
        assert updated.tags == "lease"
        assert updated.recurring_end_date == end
        assert updated.amount == Decimal("200.00")
        assert updated.group_id == group.group_id

    def test_update_without_fields_rejected(self, ledger_service, housing_id):
        group = _create(ledger_service, housing_id)
        with pytest.raises(ValidationError, match="No fields"):
            ledger_service.update_entry(OWNER_A, group.entries[0].entry.id)

    @pytest.mark.parametrize("amount", ["0", "-3", "abc", "1e30", "100000000.00"])
    def test_update_invalid_amount_rejected(self, ledger_service, housing_id, amount):
        group = _create(ledger_service, housing_id)
        with pytest.raises(ValidationError):
            ledger_service.update_entry(OWNER_A, group.entries[0].entry.id, amount=amount)

    def test_update_tags_are_stripped(self, ledger_service, housing_id):
        group = _create(ledger_service, housing_id)
        entry_id = group.entries[0].entry.id

        updated = ledger_service.update_entry(OWNER_A, entry_id, tags="  lease  ")
        assert updated.tags == "lease"

    def test_update_blank_tags_clear_field(self, ledger_service, housing_id):
        group = _create(ledger_service, housing_id, tags="home")
        entry_id = group.entries[0].entry.id

        updated = ledger_service.update_entry(OWNER_A, entry_id, tags="   ")

        assert updated.tags is None
        assert ledger_service.get_entry(OWNER_A, entry_id).tags is None

    def test_update_blank_description_rejected(self, ledger_service, housing_id):
        group = _create(ledger_service, housing_id)
        with pytest.raises(ValidationError):
            ledger_service.update_entry(OWNER_A, group.entries[0].entry.id, description=" ")

    def test_update_missing_entry_not_found(self, ledger_service, housing_id):
        with pytest.raises(NotFoundError):
            ledger_service.update_entry(OWNER_A, 4242, amount="10")


class TestOwnerIsolation:
    """Entries of one owner are invisible to every other owner."""

    def test_lists_are_scoped(self, ledger_service, housing_id):
        _create(ledger_service, housing_id, owner_id=OWNER_A, months=2)
        _create(ledger_service, housing_id, owner_id=OWNER_B, months=3)

        assert len(ledger_service.list_entries(OWNER_A)) == 2
        assert len(ledger_service.list_entries(OWNER_B)) == 3

    def test_cannot_update_or_delete_other_owners_entry(self, ledger_service, housing_id):
        group = _create(ledger_service, housing_id, owner_id=OWNER_A, months=2)
        entry_id = group.entries[0].entry.id

        with pytest.raises(NotFoundError):
            ledger_service.update_entry(OWNER_B, entry_id, amount="1")
        with pytest.raises(NotFoundError):
            ledger_service.delete_entry(OWNER_B, entry_id)
        with pytest.raises(NotFoundError):
            ledger_service.delete_entry(OWNER_B, entry_id, delete_group=True)

        entries = ledger_service.list_entries(OWNER_A)
        assert len(entries) == 2
        assert all(e.amount == Decimal("200.00") for e in entries)

    def test_group_id_collision_stays_within_owner(self, temp_db, housing_id):
        colliding = LedgerService(temp_db, group_id_factory=lambda: "collision")
        a_group = _create(colliding, housing_id, owner_id=OWNER_A, months=3)
        _create(colliding, housing_id, owner_id=OWNER_B, months=2)

        scope = colliding.resolve_group(OWNER_A, a_group.entries[0].entry.id)
        assert len(scope) == 3
        assert {e.owner_id for e in scope} == {OWNER_A}

        deleted = colliding.delete_entry(OWNER_A, a_group.entries[0].entry.id, delete_group=True)

        assert deleted == 3
        assert len(colliding.list_entries(OWNER_B)) == 2


class TestEndToEnd:
    """Recurring debit through to aggregates."""

    def test_recurring_debit_scenario(self, ledger_service, summary_service, housing_id):
        start = date.today()
        group = _create(ledger_service, housing_id, months=3, amount="200.00")

        assert [c.installment for c in group.entries] == ["1/3", "2/3", "3/3"]
        assert [c.entry.occurred_on for c in group.entries] == [
            start,
            add_months(start, 1),
            add_months(start, 2),
        ]
        assert {c.entry.group_id for c in group.entries} == {group.group_id}

        aggregates = summary_service.get_aggregates(OWNER_A)

        # Every stored recurring row counts toward the projection
        assert aggregates.projection.recurring_debit == Decimal("600.00")
        assert aggregates.projection.recurring_debit_count == 3
        assert aggregates.balance == Decimal("-600.00")
        assert aggregates.projection.projected_balance == Decimal("-1200.00")
        assert aggregates.by_category[0].category_name == "Housing"

    def test_aggregates_empty_for_new_owner(self, summary_service, sample_categories):
        aggregates = summary_service.get_aggregates(OWNER_B)

        assert aggregates.balance == 0
        assert aggregates.by_category == ()
        assert aggregates.projection.projected_balance == 0
