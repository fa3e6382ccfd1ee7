"""Small helpers shared across services."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ordertypes.domain.order_types import OrderType


def now_iso() -> str:
    """Current UTC time as standard ISO 8601 (for created/modified columns)."""
    return datetime.now(UTC).isoformat()


def order_type_payload(order_type: OrderType) -> dict[str, Any]:
    """Flatten an order type into a JSON-safe payload dict."""
    return {
        "uuid": order_type.uuid,
        "name": order_type.name,
        "description": order_type.description,
        "parent": order_type.parent.name if order_type.parent else None,
        "concept_classes": [cc.name for cc in order_type.concept_classes if cc is not None],
        "retired": order_type.retired,
        "retire_reason": order_type.retire_reason,
    }
