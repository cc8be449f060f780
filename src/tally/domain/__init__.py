"""Domain layer for tally application."""

__all__ = [
    "LedgerService",
    "CategoryService",
    "SummaryService",
]


# Services import the database layer, which imports the entities from this
# package, so they are exposed lazily.
def __getattr__(name):
    if name == "LedgerService":
        from tally.domain.ledger import LedgerService
        return LedgerService
    if name == "CategoryService":
        from tally.domain.category import CategoryService
        return CategoryService
    if name == "SummaryService":
        from tally.domain.summary import SummaryService
        return SummaryService
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
