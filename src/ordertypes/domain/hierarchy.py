"""Hierarchy rules for order types — ancestry walks and cycle detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ordertypes.domain.order_types import same_entity

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ordertypes.domain.order_types import OrderType


def ancestors(order_type: OrderType) -> Iterator[OrderType]:
    """Yield the parent of *order_type*, then its parent, up to the root.

    Stops early if an identifier repeats, so malformed chains terminate.
    """
    seen = {order_type.uuid}
    current = order_type.parent
    while current is not None and current.uuid not in seen:
        yield current
        seen.add(current.uuid)
        current = current.parent


def is_ancestor_or_self(candidate: OrderType, other: OrderType | None) -> bool:
    """Check whether *other* is *candidate* itself or lies in its subtree.

    *other* is in the subtree when *candidate* appears on the parent chain
    of *other*. Comparison is by identity, so a stale copy of *candidate*
    loaded from storage still matches.
    """
    if other is None:
        return False
    if same_entity(candidate, other):
        return True
    return any(same_entity(candidate, node) for node in ancestors(other))


class OrderTypeHierarchy:
    """Default hierarchy helper backed by the in-memory parent chain."""

    def is_ancestor_or_self(self, candidate: OrderType, other: OrderType | None) -> bool:
        """Delegate to :func:`is_ancestor_or_self`."""
        return is_ancestor_or_self(candidate, other)
