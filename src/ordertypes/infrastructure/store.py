"""Store — the single dependency injected into every service.

Owns the database engine and everything built on it: the repository,
the hierarchy helpers, and the validator registry. Wiring happens once
here so services never assemble collaborators themselves.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ordertypes.domain.hierarchy import OrderTypeHierarchy
from ordertypes.infrastructure.database.engine import init_database
from ordertypes.infrastructure.graph.engine import HierarchyGraph
from ordertypes.infrastructure.repositories.order_types import OrderTypeRepository
from ordertypes.validation.registry import build_registry

if TYPE_CHECKING:
    from pathlib import Path

    from sqlalchemy.engine import Engine

    from ordertypes.config.settings import OrderTypeSettings
    from ordertypes.validation.registry import ValidatorRegistry

logger = logging.getLogger(__name__)


class Store:
    """Database-backed order type store with validation wired in."""

    def __init__(self, settings: OrderTypeSettings) -> None:
        self._settings = settings
        self._engine: Engine = init_database(
            settings.root,
            db_dir=settings.store.db_dir,
            db_name=settings.store.db_name,
        )
        self.repository = OrderTypeRepository(self._engine)
        self.hierarchy = OrderTypeHierarchy()
        self.graph = HierarchyGraph(self.repository)
        self.validators: ValidatorRegistry = build_registry(self.repository, self.hierarchy)
        logger.debug("Opened order type store at %s", self.db_path)

    @property
    def db_path(self) -> Path:
        return self._settings.root / self._settings.store.db_dir / self._settings.store.db_name

    def close(self) -> None:
        """Dispose of the engine's connection pool."""
        self._engine.dispose()
