"""Tests for SQLAlchemyPersonStore on in-memory SQLite.

Tests cover:
- Table creation and id generation
- CRUD round trips through the ORM
- Driver errors surface as PersistenceError
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from sqlalchemy import inspect

from personspine.core.exceptions import PersistenceError
from personspine.models.person import Person
from personspine.storage.sqlalchemy_storage import SQLAlchemyPersonStore, StorageConfig


def make_person(name: str = "Zahar", **overrides) -> Person:
    fields = {
        "name": name,
        "surname": "Ivanov",
        "patronymic": "Andreevich",
        "age": 35,
        "gender": "male",
        "nationality": "RU",
    }
    fields.update(overrides)
    return Person(**fields)


@pytest.fixture
async def store() -> AsyncIterator[SQLAlchemyPersonStore]:
    store = SQLAlchemyPersonStore("sqlite://")
    await store.initialize()
    yield store
    await store.close()


# =============================================================================
# Schema
# =============================================================================


class TestSchema:
    """Tests for table setup."""

    async def test_persons_table_created(self, store: SQLAlchemyPersonStore) -> None:
        inspector = inspect(store._get_engine())

        assert "persons" in inspector.get_table_names()
        columns = {c["name"] for c in inspector.get_columns("persons")}
        assert columns == {"id", "name", "surname", "patronymic", "age", "gender", "nationality"}

    async def test_initialize_twice(self, store: SQLAlchemyPersonStore) -> None:
        """Initialization is idempotent."""
        await store.initialize()

        assert await store.count() == 0

    def test_default_config(self) -> None:
        store = SQLAlchemyPersonStore("sqlite://", pool_size=2)

        assert store.config.pool_size == 2
        assert isinstance(store.config, StorageConfig)


# =============================================================================
# CRUD
# =============================================================================


class TestSQLAlchemyStoreCrud:
    """Tests for record operations."""

    async def test_create_assigns_id(self, store: SQLAlchemyPersonStore) -> None:
        first = await store.create(make_person("Zahar"))
        second = await store.create(make_person("Anna", gender="female", nationality="UA"))

        assert first.id is not None
        assert second.id is not None
        assert second.id > first.id
        assert await store.count() == 2

    async def test_round_trip(self, store: SQLAlchemyPersonStore) -> None:
        """Stored fields come back unchanged."""
        created = await store.create(make_person())

        fetched = await store.get(created.id)

        assert fetched == created

    async def test_get_missing(self, store: SQLAlchemyPersonStore) -> None:
        assert await store.get(42) is None

    async def test_get_by_name(self, store: SQLAlchemyPersonStore) -> None:
        first = await store.create(make_person("Zahar"))
        await store.create(make_person("Zahar", age=50))

        fetched = await store.get_by_name("Zahar")

        assert fetched is not None
        assert fetched.id == first.id
        assert await store.get_by_name("Nobody") is None

    async def test_update(self, store: SQLAlchemyPersonStore) -> None:
        created = await store.create(make_person())

        updated = await store.update(
            Person(id=created.id, name="Zakhar", surname="Ivanov", age=36)
        )

        assert updated is not None
        assert updated.name == "Zakhar"
        assert updated.gender is None
        fetched = await store.get(created.id)
        assert fetched.age == 36
        assert fetched.nationality is None

    async def test_update_missing(self, store: SQLAlchemyPersonStore) -> None:
        assert await store.update(make_person(id=42)) is None

    async def test_delete(self, store: SQLAlchemyPersonStore) -> None:
        created = await store.create(make_person())

        assert await store.delete(created.id) is True
        assert await store.delete(created.id) is False
        assert await store.count() == 0


# =============================================================================
# Errors
# =============================================================================


class TestSQLAlchemyStoreErrors:
    """Tests for error handling."""

    async def test_rejects_unenriched(self, store: SQLAlchemyPersonStore) -> None:
        with pytest.raises(PersistenceError):
            await store.create(make_person(age=None))

        assert await store.count() == 0

    async def test_driver_error_wrapped(self, store: SQLAlchemyPersonStore) -> None:
        """A database failure is a PersistenceError."""
        from personspine.storage.models import drop_all_tables

        drop_all_tables(store._get_engine())

        with pytest.raises(PersistenceError):
            await store.count()
