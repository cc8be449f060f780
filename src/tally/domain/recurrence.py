"""Expansion of one add-transaction request into dated ledger drafts."""

import uuid
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Optional

from tally.domain import errors
from tally.domain.entities import EntryDraft, EntryKind
from tally.domain.errors import ValidationError
from tally.utils.amount_parser import to_money
from tally.utils.date_parser import add_months

MIN_MONTHS = 1
MAX_MONTHS = 120

# Largest amount a Numeric(10, 2) column holds exactly
MAX_AMOUNT = Decimal("99999999.99")


def new_group_id() -> str:
    """Generate a globally unique group identifier."""
    return uuid.uuid4().hex


def validate_description(description: Optional[str]) -> str:
    if description is None or not str(description).strip():
        raise ValidationError(errors.missing_field("description"))
    return str(description).strip()


def validate_amount(amount: Any) -> Decimal:
    """Coerce an amount to a positive two-place Decimal.

    Raises:
        ValidationError: If amount is missing, non-numeric, not > 0 or above
            MAX_AMOUNT
    """
    if amount is None or (isinstance(amount, str) and not amount.strip()):
        raise ValidationError(errors.missing_field("amount"))
    if isinstance(amount, bool):
        raise ValidationError(errors.invalid_amount(amount))
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount).strip())
    except InvalidOperation:
        raise ValidationError(errors.invalid_amount(amount))
    if not value.is_finite() or value <= 0 or value > MAX_AMOUNT:
        raise ValidationError(errors.invalid_amount(amount))
    try:
        value = to_money(value)
    except InvalidOperation:
        raise ValidationError(errors.invalid_amount(amount))
    if value <= 0 or value > MAX_AMOUNT:
        raise ValidationError(errors.invalid_amount(amount))
    return value


def validate_category_id(category_id: Any) -> int:
    if category_id is None or (isinstance(category_id, str) and not category_id.strip()):
        raise ValidationError(errors.missing_field("category"))
    if isinstance(category_id, bool):
        raise ValidationError(errors.category_not_found(category_id))
    try:
        return int(category_id)
    except (TypeError, ValueError):
        raise ValidationError(errors.category_not_found(category_id))


def resolve_months(kind: EntryKind, months: Any) -> int:
    """Return the effective recurrence count for a kind.

    Only recurring kinds honor ``months``; every other kind is a single entry.

    Raises:
        ValidationError: If the count is not an integer in [1, 120]
    """
    if not kind.is_recurring or months is None:
        return 1
    if isinstance(months, bool):
        raise ValidationError(errors.invalid_months(months))
    try:
        count = int(months)
    except (TypeError, ValueError):
        raise ValidationError(errors.invalid_months(months))
    if isinstance(months, float) and not months.is_integer():
        raise ValidationError(errors.invalid_months(months))
    if count < MIN_MONTHS or count > MAX_MONTHS:
        raise ValidationError(errors.invalid_months(months))
    return count


def expand_group(
    owner_id: int,
    kind: EntryKind | str,
    description: str,
    amount: Any,
    category_id: Any,
    months: Any = None,
    recurring_end_date: Optional[date] = None,
    tags: Optional[str] = None,
    *,
    today: Optional[date] = None,
    group_id_factory: Callable[[], str] = new_group_id,
) -> list[EntryDraft]:
    """Build the ordered drafts for one add-transaction request.

    Draft ``i`` is dated ``today`` advanced by ``i`` calendar months. All
    drafts share one freshly generated group id, including a single-entry
    request. No I/O is performed.

    Args:
        owner_id: Owning user
        kind: Entry kind (enum or its string value)
        description: Non-empty description
        amount: Positive amount (Decimal, int, float or numeric string)
        category_id: Resolved category identity
        months: Recurrence count, honored only for recurring kinds
        recurring_end_date: Informational end of the recurrence
        tags: Optional free text
        today: Start date (defaults to the current date)
        group_id_factory: Callable producing the group id

    Returns:
        List of drafts in installment order

    Raises:
        ValidationError: If any field is missing or invalid
    """
    entry_kind = EntryKind.parse(kind)
    clean_description = validate_description(description)
    clean_amount = validate_amount(amount)
    clean_category_id = validate_category_id(category_id)
    count = resolve_months(entry_kind, months)

    start = today if today is not None else date.today()
    clean_tags = tags.strip() if tags and tags.strip() else None
    group_id = group_id_factory()

    return [
        EntryDraft(
            owner_id=owner_id,
            kind=entry_kind,
            description=clean_description,
            amount=clean_amount,
            category_id=clean_category_id,
            occurred_on=add_months(start, i),
            group_id=group_id,
            recurring_end_date=recurring_end_date,
            tags=clean_tags,
        )
        for i in range(count)
    ]
