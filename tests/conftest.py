"""Shared pytest fixtures for tally tests."""

import tempfile
import os
from datetime import date
import pytest

from tally.database.factories import create_sqlite_database
from tally.domain.category import CategoryService
from tally.domain.ledger import LedgerService
from tally.domain.summary import SummaryService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def ledger_service(temp_db):
    """Create a LedgerService with a temporary database."""
    return LedgerService(temp_db)


@pytest.fixture
def summary_service(temp_db):
    """Create a SummaryService with a temporary database."""
    return SummaryService(temp_db)


@pytest.fixture
def sample_categories(category_service):
    """Create the shared default categories and return name -> ID."""
    from tally.cli.commands.init_categories import INITIAL_CATEGORIES

    return {name: category_service.create_category(name=name) for name in INITIAL_CATEGORIES}


@pytest.fixture
def housing_id(sample_categories):
    return sample_categories["Housing"]


@pytest.fixture
def today():
    """Fixed first-installment date so month arithmetic is predictable."""
    return date(2024, 1, 15)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
