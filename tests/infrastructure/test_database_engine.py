"""Tests for database initialization."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from ordertypes.infrastructure.database.engine import init_database


class TestInitDatabase:
    def test_creates_tables(self, db_engine: Engine) -> None:
        tables = set(inspect(db_engine).get_table_names())
        assert {"order_types", "concept_classes", "order_type_concept_classes"} <= tables

    def test_creates_db_file(self, tmp_path: Path, db_engine: Engine) -> None:
        assert (tmp_path / ".ordertypes" / "ordertypes.db").is_file()

    def test_idempotent(self, tmp_path: Path) -> None:
        first = init_database(tmp_path)
        first.dispose()
        second = init_database(tmp_path)
        try:
            assert "order_types" in inspect(second).get_table_names()
        finally:
            second.dispose()

    def test_custom_location(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path, db_dir="data", db_name="custom.db")
        try:
            assert (tmp_path / "data" / "custom.db").is_file()
        finally:
            engine.dispose()
