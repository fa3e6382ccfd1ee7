"""SQLite database engine and schema via SQLAlchemy Core."""

from ordertypes.infrastructure.database.engine import create_db_engine, init_database
from ordertypes.infrastructure.database.schema import (
    concept_classes,
    metadata,
    order_type_concept_classes,
    order_types,
)

__all__ = [
    "concept_classes",
    "create_db_engine",
    "init_database",
    "metadata",
    "order_type_concept_classes",
    "order_types",
]
