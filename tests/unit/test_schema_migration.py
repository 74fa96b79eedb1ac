"""The initial Alembic migration produces exactly the schema the models declare."""

from __future__ import annotations

import importlib.util
from pathlib import Path
from types import ModuleType
from typing import Any

from alembic.autogenerate import compare_metadata
from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy import create_engine, inspect

import lingochat.models  # noqa: F401
from lingochat.db.database import Base

_MIGRATION = (
    Path(__file__).resolve().parents[2] / "alembic" / "versions" / "001_initial_schema.py"
)


def _load_migration() -> ModuleType:
    spec = importlib.util.spec_from_file_location("initial_schema", _MIGRATION)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestInitialMigration:
    def test_no_drift_from_models(self, tmp_path: Any) -> None:
        migration = _load_migration()
        engine = create_engine(f"sqlite:///{tmp_path / 'migrated.db'}")
        try:
            with engine.begin() as conn:
                with Operations.context(MigrationContext.configure(conn)):
                    migration.upgrade()
                # Type names differ by dialect reflection; nullability,
                # tables, indexes and constraints must match.
                diff = compare_metadata(
                    MigrationContext.configure(conn, opts={"compare_type": False}),
                    Base.metadata,
                )
        finally:
            engine.dispose()

        assert diff == []

    def test_timestamps_and_flags_are_not_null(self, tmp_path: Any) -> None:
        migration = _load_migration()
        engine = create_engine(f"sqlite:///{tmp_path / 'migrated.db'}")
        try:
            with engine.begin() as conn:
                with Operations.context(MigrationContext.configure(conn)):
                    migration.upgrade()
                inspector = inspect(conn)
                nullable = {
                    (table, col["name"]): col["nullable"]
                    for table in ("users", "rooms", "messages")
                    for col in inspector.get_columns(table)
                }
                participant_indexes = {
                    ix["name"] for ix in inspector.get_indexes("room_participants")
                }
        finally:
            engine.dispose()

        assert nullable[("users", "created_at")] is False
        assert nullable[("rooms", "created_at")] is False
        assert nullable[("messages", "is_translated")] is False
        assert nullable[("messages", "timestamp")] is False
        assert "ix_room_participants_user_id" in participant_indexes
