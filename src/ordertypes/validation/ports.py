"""Collaborator interfaces the order type rules depend on.

Narrow capability sets so the validator runs against the SQLite
repository in production and plain in-memory fakes in tests.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ordertypes.domain.order_types import OrderType


class OrderTypeLookup(Protocol):
    """Read-only access to persisted order types."""

    def find_by_name(self, name: str) -> OrderType | None: ...

    def list_all(self, include_retired: bool) -> Sequence[OrderType | None]: ...


class HierarchyHelper(Protocol):
    """Answers ancestry questions about the order type tree."""

    def is_ancestor_or_self(self, candidate: OrderType, other: OrderType | None) -> bool: ...
