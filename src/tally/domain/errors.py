"""Shared domain error messages and error types."""

from typing import Any


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling. ``code`` is a stable,
    machine-checkable identifier for the error kind.
    """

    code = "domain_error"
    retryable = False


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""

    code = "invalid_argument"


class NotFoundError(DomainError):
    """Requested ledger entry or category does not exist for the owner."""

    code = "not_found"


class WriteFailedError(DomainError):
    """Store transaction could not complete and was rolled back.

    Nothing was persisted, so the caller may safely retry.
    """

    code = "write_failed"
    retryable = True


def entry_not_found(entry_id: int) -> str:
    """Return message for missing ledger entry."""
    return f"Entry {entry_id} not found"


def category_not_found(category_id: Any) -> str:
    """Return message for missing or invisible category."""
    return f"Category {category_id} not found"


def category_name_not_found(name: str) -> str:
    """Return message for missing category by name."""
    return f"Category '{name}' not found"


def invalid_months(months: Any) -> str:
    """Return message for a recurrence count outside the accepted range."""
    return f"Invalid number of months: {months} (expected 1-120)"


def missing_field(field_name: str) -> str:
    """Return message for a required field that is absent or blank."""
    return f"Field '{field_name}' is required"


def invalid_amount(amount: Any) -> str:
    """Return message for a non-numeric, non-positive or oversized amount."""
    return f"Invalid amount: {amount} (must be a number greater than 0 and at most 99,999,999.99)"


def write_failed(action: str) -> str:
    """Return message for a rolled-back store transaction."""
    return f"Could not {action}; no changes were saved"
