"""
PersonSpine SQLAlchemy models and schema management.

Usage:
    from personspine.storage.models import PersonModel, create_all_tables

    engine = create_engine("postgresql://...")
    create_all_tables(engine)
"""

from __future__ import annotations

from sqlalchemy import Index, Integer, String
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all PersonSpine models."""


class PersonModel(Base):
    """
    Enriched person records.

    ``id`` is generated by the database on insert and read back in the
    same statement (INSERT ... RETURNING where supported).
    """

    __tablename__ = "persons"
    __table_args__ = (Index("ix_persons_name", "name"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    surname: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    patronymic: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    # Enrichment
    age: Mapped[int | None] = mapped_column(Integer)
    gender: Mapped[str | None] = mapped_column(String(32))
    nationality: Mapped[str | None] = mapped_column(String(8))


def create_all_tables(engine: Engine) -> None:
    """Create all tables. Safe to call repeatedly."""
    Base.metadata.create_all(engine)


def drop_all_tables(engine: Engine) -> None:
    """Drop all tables."""
    Base.metadata.drop_all(engine)
