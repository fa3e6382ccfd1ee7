"""SQLAlchemy Core table definitions for the ordertypes database.

Unique constraints back up the validator: ``order_types.name`` and
``order_type_concept_classes.concept_class_uuid`` reject whatever slips
through a race between validation and commit.
"""

from __future__ import annotations

from sqlalchemy import (
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
    UniqueConstraint,
)

metadata = MetaData()

order_types = Table(
    "order_types",
    metadata,
    Column("uuid", Text, primary_key=True),
    Column("name", Text, nullable=False, unique=True),
    Column("description", Text),
    Column("parent_uuid", Text, ForeignKey("order_types.uuid")),
    Column("retired", Integer, default=0, server_default="0"),
    Column("retire_reason", Text),
    Column("created", Text, nullable=False),
    Column("modified", Text, nullable=False),
)

concept_classes = Table(
    "concept_classes",
    metadata,
    Column("uuid", Text, primary_key=True),
    Column("name", Text, nullable=False, unique=True),
    Column("description", Text),
    Column("created", Text, nullable=False),
)

order_type_concept_classes = Table(
    "order_type_concept_classes",
    metadata,
    Column("order_type_uuid", Text, ForeignKey("order_types.uuid"), nullable=False),
    Column("concept_class_uuid", Text, ForeignKey("concept_classes.uuid"), nullable=False),
    Column("position", Integer, nullable=False),
    UniqueConstraint("concept_class_uuid"),
)

Index("ix_order_types_parent", order_types.c.parent_uuid)
Index("ix_order_types_retired", order_types.c.retired)
Index("ix_otcc_order_type", order_type_concept_classes.c.order_type_uuid)
