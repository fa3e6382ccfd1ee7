"""Order type and concept class models.

An order type is a named node in a tree-shaped taxonomy. Concept classes
are classification tags; each tag is owned by at most one order type
across the whole registry.

INVARIANT: Entity identity is the persisted ``uuid``, never field values.
Two representations of the same record (e.g. an edited candidate and its
stored row) compare equal through :func:`same_entity` even when their
names or tags differ.
"""

from __future__ import annotations

from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


def new_uuid() -> str:
    """Generate a persisted identifier for a new entity."""
    return str(uuid4())


class ConceptClass(BaseModel):
    """A classification tag that may be attached to one order type."""

    model_config = ConfigDict(frozen=True)

    uuid: str = Field(default_factory=new_uuid)
    name: str
    description: str | None = None


class OrderType(BaseModel):
    """A node in the order type hierarchy.

    Attributes:
        uuid: Persisted identifier; generated for new candidates.
        name: Human-readable name, unique across all order types.
        description: Optional free text.
        parent: Non-owning reference to the parent node, if any.
        concept_classes: Tags owned by this node, in submission order.
            ``None`` entries are tolerated and ignored by the rules.
        retired: Soft-delete flag. Retired nodes still hold their name and tags.
        retire_reason: Why the node was retired.
    """

    model_config = ConfigDict(frozen=True)

    uuid: str = Field(default_factory=new_uuid)
    name: str | None = None
    description: str | None = None
    parent: OrderType | None = None
    concept_classes: tuple[ConceptClass | None, ...] = ()
    retired: bool = False
    retire_reason: str | None = None

    def concept_class_positions(self, concept_class: ConceptClass) -> list[int]:
        """Every position of *concept_class* in this node's tags, by identity."""
        return [
            index
            for index, owned in enumerate(self.concept_classes)
            if owned is not None and owned.uuid == concept_class.uuid
        ]


def same_entity(
    a: OrderType | ConceptClass | None,
    b: OrderType | ConceptClass | None,
) -> bool:
    """Check whether *a* and *b* refer to the same persisted record."""
    if a is None or b is None:
        return False
    if isinstance(a, OrderType) != isinstance(b, OrderType):
        return False
    return a.uuid == b.uuid


def has_text(value: str | None) -> bool:
    """True when *value* contains at least one non-whitespace character."""
    return value is not None and value.strip() != ""
