"""SQLAlchemy models for tally database."""

from datetime import datetime, UTC
from sqlalchemy import (
    CheckConstraint,
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Index,
    Numeric,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Category(Base):
    """Category model. Rows without an owner are shared defaults."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    owner_id = Column(Integer, nullable=True, index=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    entries = relationship("LedgerEntry", back_populates="category")


class LedgerEntry(Base):
    """Ledger entry model."""

    __tablename__ = "ledger_entries"

    id = Column(Integer, primary_key=True)
    owner_id = Column(Integer, nullable=False)
    kind = Column(String, nullable=False)
    description = Column(String, nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    occurred_on = Column(Date, nullable=False)
    group_id = Column(String(32), nullable=True)
    recurring_end_date = Column(Date, nullable=True)
    tags = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_ledger_entries_amount_positive"),
        CheckConstraint("length(description) > 0", name="ck_ledger_entries_description"),
        Index("ix_ledger_entries_owner_group", "owner_id", "group_id"),
        Index("ix_ledger_entries_owner_occurred", "owner_id", "occurred_on"),
    )

    # Relationships
    category = relationship("Category", back_populates="entries")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
