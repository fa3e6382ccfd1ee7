"""OrderTypeService — create, edit, retire, and browse order types.

Save pipeline: RESOLVE → BUILD CANDIDATE → VALIDATE → PERSIST → RESPOND.
Validation always runs through the store's validator registry; the
database's unique constraints catch anything that races past it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from sqlalchemy.exc import IntegrityError

from ordertypes.domain.hierarchy import ancestors
from ordertypes.domain.order_types import ConceptClass, OrderType, has_text
from ordertypes.services._helpers import now_iso, order_type_payload
from ordertypes.services.base import BaseService
from ordertypes.services.result import ServiceResult

logger = logging.getLogger(__name__)


class OrderTypeService(BaseService):
    """Handles order type persistence behind the validation rules."""

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create(
        self,
        name: str,
        *,
        parent: str | None = None,
        concept_classes: Sequence[str] = (),
        description: str | None = None,
        dry_run: bool = False,
    ) -> ServiceResult:
        """Create a new order type."""
        op = "create_order_type"
        parent_type: OrderType | None = None
        if parent is not None:
            parent_type = self._store.repository.find_by_name(parent)
            if parent_type is None:
                return _not_found(op, "parent order type", parent)

        resolved = self._resolve_concept_classes(op, concept_classes)
        if isinstance(resolved, ServiceResult):
            return resolved

        candidate = OrderType(
            name=name,
            description=description,
            parent=parent_type,
            concept_classes=resolved,
        )
        return self._save(op, candidate, dry_run=dry_run)

    def update(
        self,
        name: str,
        *,
        new_name: str | None = None,
        parent: str | None = None,
        clear_parent: bool = False,
        concept_classes: Sequence[str] | None = None,
        description: str | None = None,
        dry_run: bool = False,
    ) -> ServiceResult:
        """Edit an existing order type, keeping its identity.

        Options left as None keep their current value. *concept_classes*
        replaces the whole tag list when given.
        """
        op = "update_order_type"
        current = self._store.repository.find_by_name(name)
        if current is None:
            return _not_found(op, "order type", name)

        changes: dict[str, Any] = {}
        if new_name is not None:
            changes["name"] = new_name
        if description is not None:
            changes["description"] = description
        if clear_parent:
            changes["parent"] = None
        elif parent is not None:
            parent_type = self._store.repository.find_by_name(parent)
            if parent_type is None:
                return _not_found(op, "parent order type", parent)
            changes["parent"] = parent_type
        if concept_classes is not None:
            resolved = self._resolve_concept_classes(op, concept_classes)
            if isinstance(resolved, ServiceResult):
                return resolved
            changes["concept_classes"] = resolved

        return self._save(op, current.model_copy(update=changes), dry_run=dry_run)

    def retire(self, name: str, reason: str | None) -> ServiceResult:
        """Soft-delete an order type. A reason is required."""
        op = "retire_order_type"
        if not has_text(reason):
            return ServiceResult.failure(op, "INVALID_INPUT", "A retire reason is required")
        current = self._store.repository.find_by_name(name)
        if current is None:
            return _not_found(op, "order type", name)
        if current.retired:
            return ServiceResult.failure(
                op, "INVALID_INPUT", f"Order type {name!r} is already retired"
            )
        return self._save(op, current.model_copy(update={"retired": True, "retire_reason": reason}))

    def unretire(self, name: str) -> ServiceResult:
        """Restore a retired order type."""
        op = "unretire_order_type"
        current = self._store.repository.find_by_name(name)
        if current is None:
            return _not_found(op, "order type", name)
        if not current.retired:
            return ServiceResult.failure(op, "INVALID_INPUT", f"Order type {name!r} is not retired")
        return self._save(op, current.model_copy(update={"retired": False, "retire_reason": None}))

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_order_types(self, *, include_retired: bool = False) -> ServiceResult:
        """List order types with their depth in the hierarchy."""
        graph = self._store.graph
        items = []
        for order_type in self._store.repository.list_all(include_retired=include_retired):
            if order_type is None:
                continue
            payload = order_type_payload(order_type)
            payload["depth"] = graph.depth(order_type.uuid)
            items.append(payload)
        return ServiceResult(
            ok=True,
            op="list_order_types",
            data={"count": len(items), "items": items},
            meta={"include_retired": include_retired},
        )

    def show(self, name: str) -> ServiceResult:
        """Show one order type with its ancestry and direct children."""
        op = "show_order_type"
        order_type = self._store.repository.find_by_name(name)
        if order_type is None:
            return _not_found(op, "order type", name)
        children = [
            other.name
            for other in self._store.repository.list_all(include_retired=True)
            if other is not None
            and other.parent is not None
            and other.parent.uuid == order_type.uuid
        ]
        data = order_type_payload(order_type)
        data["ancestors"] = [node.name for node in ancestors(order_type)]
        data["children"] = children
        return ServiceResult(ok=True, op=op, data=data)

    def subtypes(self, name: str, *, include_retired: bool = False) -> ServiceResult:
        """List every order type below *name* in the hierarchy."""
        op = "list_subtypes"
        order_type = self._store.repository.find_by_name(name)
        if order_type is None:
            return _not_found(op, "order type", name)
        below = self._store.graph.descendants(order_type.uuid)
        items = [
            order_type_payload(other)
            for other in self._store.repository.list_all(include_retired=include_retired)
            if other is not None and other.uuid in below
        ]
        return ServiceResult(
            ok=True,
            op=op,
            data={"order_type": order_type.name, "count": len(items), "items": items},
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _resolve_concept_classes(
        self, op: str, names: Sequence[str]
    ) -> tuple[ConceptClass, ...] | ServiceResult:
        """Look up tags by name; repeats collapse to the first occurrence."""
        resolved: dict[str, ConceptClass] = {}
        for cc_name in names:
            concept_class = self._store.repository.find_concept_class(cc_name)
            if concept_class is None:
                return _not_found(op, "concept class", cc_name)
            resolved.setdefault(concept_class.uuid, concept_class)
        return tuple(resolved.values())

    def _save(self, op: str, candidate: OrderType, *, dry_run: bool = False) -> ServiceResult:
        errors = self._store.validators.validate(candidate)
        if errors.has_errors:
            logger.info(
                "Rejected order type %r with %d error(s)", candidate.name, errors.error_count
            )
            return ServiceResult.failure(
                op,
                "VALIDATION_FAILED",
                f"{errors.error_count} validation error(s) for order type {candidate.name!r}",
                rejections=errors.to_dicts(),
            )

        payload = order_type_payload(candidate)
        if dry_run:
            return ServiceResult(ok=True, op=op, data=payload, meta={"dry_run": True})

        try:
            self._store.repository.save(candidate, timestamp=now_iso())
        except IntegrityError as exc:
            logger.warning("Integrity error saving order type %r: %s", candidate.name, exc.orig)
            return ServiceResult.failure(
                op,
                "CONFLICT",
                f"Order type {candidate.name!r} conflicts with stored data",
            )
        self._store.graph.invalidate()
        return ServiceResult(ok=True, op=op, data=payload)


def _not_found(op: str, kind: str, name: str) -> ServiceResult:
    return ServiceResult.failure(op, "NOT_FOUND", f"No {kind} named {name!r}", name=name)
