"""CLI helpers for category resolution and error handling."""

from __future__ import annotations

import click
from tally.domain.category import CategoryService


def resolve_category(category_service: CategoryService, owner_id: int, category: str | int) -> int:
    """Resolve a category name or ID to a category ID visible to the owner.

    Args:
        category_service: CategoryService instance
        owner_id: Owner the category must be visible to
        category: Category name (str) or ID (int or string representation of int)

    Returns:
        Category ID

    Raises:
        ValidationError: If no visible category matches
    """
    if isinstance(category, int):
        return category_service.resolve_category(owner_id, category).id

    try:
        category_id = int(category)
    except (ValueError, TypeError):
        # Not a number, treat as name
        return category_service.require_category_by_name(owner_id, category).id

    return category_service.resolve_category(owner_id, category_id).id


def resolve_category_or_exit(
    ctx: click.Context, category_service: CategoryService, owner_id: int, category: str | int
) -> int:
    """Resolve category name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_category(category_service, owner_id, category)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
