"""Shared pytest fixtures and test helpers for ordertypes tests."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from ordertypes.config.settings import OrderTypeSettings
from ordertypes.domain.hierarchy import OrderTypeHierarchy
from ordertypes.domain.order_types import OrderType
from ordertypes.infrastructure.database.engine import init_database
from ordertypes.infrastructure.store import Store
from ordertypes.validation.order_type import OrderTypeValidator


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_engine(tmp_path: Path) -> Iterator[Engine]:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(tmp_path)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def store(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Store]:
    """Store on a fresh database in a temp project directory."""
    monkeypatch.delenv("ORDERTYPES_CONFIG", raising=False)
    settings = OrderTypeSettings.from_cli(root=tmp_path)
    s = Store(settings)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def _isolated_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory so the CLI creates an isolated database.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command test classes.
    """
    monkeypatch.delenv("ORDERTYPES_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# In-memory collaborators for validator tests
# ---------------------------------------------------------------------------


class InMemoryOrderTypes:
    """Lookup fake over a fixed population; records calls for assertions."""

    def __init__(self, *order_types: OrderType | None) -> None:
        self.order_types: list[OrderType | None] = list(order_types)
        self.list_calls: list[bool] = []

    def find_by_name(self, name: str) -> OrderType | None:
        for order_type in self.order_types:
            if order_type is not None and order_type.name == name:
                return order_type
        return None

    def list_all(self, include_retired: bool) -> Sequence[OrderType | None]:
        self.list_calls.append(include_retired)
        if include_retired:
            return list(self.order_types)
        return [ot for ot in self.order_types if ot is None or not ot.retired]


def make_validator(*population: OrderType | None) -> tuple[OrderTypeValidator, InMemoryOrderTypes]:
    """Build a validator over an in-memory population."""
    lookup = InMemoryOrderTypes(*population)
    return OrderTypeValidator(lookup, OrderTypeHierarchy()), lookup


# ---------------------------------------------------------------------------
# Service helpers
# ---------------------------------------------------------------------------


def add_concept_class(store: Store, name: str) -> dict[str, Any]:
    """Register a concept class via ConceptClassService, asserting success."""
    from ordertypes.services.concept_class import ConceptClassService

    result = ConceptClassService(store).add(name)
    assert result.ok, result.error
    return result.data


def create_order_type(store: Store, name: str, **kwargs: Any) -> dict[str, Any]:
    """Create an order type via OrderTypeService, asserting success."""
    from ordertypes.services.order_type import OrderTypeService

    result = OrderTypeService(store).create(name, **kwargs)
    assert result.ok, result.error
    return result.data
