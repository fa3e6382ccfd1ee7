"""Repository for order types and concept classes.

Implements the :class:`~ordertypes.validation.ports.OrderTypeLookup`
protocol. Order types come back fully hydrated: parent chains are
rebuilt as nested models and concept classes keep their stored order.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, insert, select, update

from ordertypes.domain.order_types import ConceptClass, OrderType
from ordertypes.infrastructure.database.schema import (
    concept_classes,
    order_type_concept_classes,
    order_types,
)

if TYPE_CHECKING:
    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


class OrderTypeRepository:
    """Encapsulates SQL for order type reads and writes."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    # ------------------------------------------------------------------
    # Order type reads
    # ------------------------------------------------------------------

    def find_by_name(self, name: str) -> OrderType | None:
        """Fetch the order type named *name*, retired or not."""
        stmt = select(order_types.c.uuid).where(order_types.c.name == name)
        with self._engine.connect() as conn:
            uuid = conn.execute(stmt).scalar_one_or_none()
        if uuid is None:
            return None
        return self.get(str(uuid))

    def get(self, uuid: str) -> OrderType | None:
        """Fetch one order type by uuid."""
        return self._load_all().get(uuid)

    def list_all(self, include_retired: bool) -> list[OrderType | None]:
        """List every order type, ordered by name."""
        loaded = self._load_all()
        items = sorted(loaded.values(), key=lambda ot: ot.name or "")
        if not include_retired:
            items = [ot for ot in items if not ot.retired]
        return list(items)

    def parent_links(self, *, include_retired: bool = True) -> list[tuple[str, str | None]]:
        """Return ``(uuid, parent_uuid)`` pairs for graph construction."""
        stmt = select(order_types.c.uuid, order_types.c.parent_uuid)
        if not include_retired:
            stmt = stmt.where(order_types.c.retired == 0)
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).fetchall()
        return [(str(row.uuid), row.parent_uuid) for row in rows]

    # ------------------------------------------------------------------
    # Order type writes
    # ------------------------------------------------------------------

    def save(self, order_type: OrderType, *, timestamp: str) -> None:
        """Insert or update *order_type* and rewrite its concept class links.

        Runs in one transaction; integrity errors propagate to the caller.
        """
        values: dict[str, Any] = {
            "name": order_type.name,
            "description": order_type.description,
            "parent_uuid": order_type.parent.uuid if order_type.parent else None,
            "retired": int(order_type.retired),
            "retire_reason": order_type.retire_reason,
            "modified": timestamp,
        }
        with self._engine.begin() as conn:
            exists = conn.execute(
                select(order_types.c.uuid).where(order_types.c.uuid == order_type.uuid)
            ).first()
            if exists is None:
                conn.execute(
                    insert(order_types).values(uuid=order_type.uuid, created=timestamp, **values)
                )
            else:
                conn.execute(
                    update(order_types)
                    .where(order_types.c.uuid == order_type.uuid)
                    .values(**values)
                )
            self._write_links(conn, order_type)
        logger.debug("Saved order type %s (%s)", order_type.name, order_type.uuid)

    @staticmethod
    def _write_links(conn: Connection, order_type: OrderType) -> None:
        conn.execute(
            delete(order_type_concept_classes).where(
                order_type_concept_classes.c.order_type_uuid == order_type.uuid
            )
        )
        # Tags form a set; a repeated tag is stored once at its first position.
        position = 0
        seen: set[str] = set()
        for concept_class in order_type.concept_classes:
            if concept_class is None or concept_class.uuid in seen:
                continue
            seen.add(concept_class.uuid)
            conn.execute(
                insert(order_type_concept_classes).values(
                    order_type_uuid=order_type.uuid,
                    concept_class_uuid=concept_class.uuid,
                    position=position,
                )
            )
            position += 1

    # ------------------------------------------------------------------
    # Concept classes
    # ------------------------------------------------------------------

    def add_concept_class(self, concept_class: ConceptClass, *, timestamp: str) -> None:
        """Insert a new concept class. Integrity errors propagate."""
        with self._engine.begin() as conn:
            conn.execute(
                insert(concept_classes).values(
                    uuid=concept_class.uuid,
                    name=concept_class.name,
                    description=concept_class.description,
                    created=timestamp,
                )
            )

    def find_concept_class(self, name: str) -> ConceptClass | None:
        """Fetch a concept class by name."""
        stmt = select(concept_classes).where(concept_classes.c.name == name)
        with self._engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()
        return _concept_class_from_row(row) if row is not None else None

    def list_concept_classes(self) -> list[dict[str, Any]]:
        """List concept classes with the name of the order type owning each."""
        stmt = (
            select(
                concept_classes.c.uuid,
                concept_classes.c.name,
                concept_classes.c.description,
                order_types.c.name.label("order_type"),
            )
            .select_from(
                concept_classes.outerjoin(
                    order_type_concept_classes,
                    order_type_concept_classes.c.concept_class_uuid == concept_classes.c.uuid,
                ).outerjoin(
                    order_types,
                    order_types.c.uuid == order_type_concept_classes.c.order_type_uuid,
                )
            )
            .order_by(concept_classes.c.name)
        )
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [dict(row) for row in rows]

    # ------------------------------------------------------------------
    # Hydration
    # ------------------------------------------------------------------

    def _load_all(self) -> dict[str, OrderType]:
        """Load every order type with nested parents and ordered tags."""
        with self._engine.connect() as conn:
            rows = {
                str(row["uuid"]): dict(row)
                for row in conn.execute(select(order_types)).mappings().all()
            }
            tag_rows = conn.execute(
                select(
                    order_type_concept_classes.c.order_type_uuid,
                    concept_classes,
                )
                .select_from(
                    order_type_concept_classes.join(
                        concept_classes,
                        concept_classes.c.uuid == order_type_concept_classes.c.concept_class_uuid,
                    )
                )
                .order_by(order_type_concept_classes.c.position)
            ).mappings().all()

        tags: dict[str, list[ConceptClass]] = defaultdict(list)
        for row in tag_rows:
            tags[str(row["order_type_uuid"])].append(_concept_class_from_row(row))

        built: dict[str, OrderType] = {}

        def build(uuid: str, visiting: frozenset[str]) -> OrderType:
            if uuid in built:
                return built[uuid]
            row = rows[uuid]
            visiting = visiting | {uuid}
            parent_uuid = row["parent_uuid"]
            parent: OrderType | None = None
            if parent_uuid is not None and parent_uuid in rows and parent_uuid not in visiting:
                parent = build(parent_uuid, visiting)
            elif parent_uuid is not None and parent_uuid in visiting:
                logger.warning("Cycle in stored hierarchy at order type %s", uuid)
            order_type = OrderType(
                uuid=uuid,
                name=row["name"],
                description=row["description"],
                parent=parent,
                concept_classes=tuple(tags.get(uuid, ())),
                retired=bool(row["retired"]),
                retire_reason=row["retire_reason"],
            )
            built[uuid] = order_type
            return order_type

        for uuid in rows:
            build(uuid, frozenset())
        return built


def _concept_class_from_row(row: Any) -> ConceptClass:
    return ConceptClass(uuid=str(row["uuid"]), name=row["name"], description=row["description"])
