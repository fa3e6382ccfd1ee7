"""OrderTypeValidator — rules checked before an order type is saved.

Rule order:
  1. Name present (exclusive: a missing name stops every later check).
  2. Parent not among the node's own descendants (or the node itself).
  3. Name not taken by a different order type.
  4. No concept class shared with any other order type, retired included.

Rules 2-4 are independent and additive.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ordertypes.domain.order_types import OrderType, has_text, same_entity
from ordertypes.validation.errors import indexed_field
from ordertypes.validation.messages import ErrorCode

if TYPE_CHECKING:
    from ordertypes.validation.errors import ValidationErrors
    from ordertypes.validation.ports import HierarchyHelper, OrderTypeLookup

logger = logging.getLogger(__name__)


class OrderTypeValidator:
    """Validates :class:`OrderType` candidates against the persisted population."""

    def __init__(self, lookup: OrderTypeLookup, hierarchy: HierarchyHelper) -> None:
        self._lookup = lookup
        self._hierarchy = hierarchy

    def supports(self, kind: type) -> bool:
        """True if this validator handles objects of *kind*."""
        return isinstance(kind, type) and issubclass(kind, OrderType)

    def validate(self, obj: Any, errors: ValidationErrors) -> None:
        """Check *obj* and record one rejection per violated rule on *errors*.

        Raises:
            TypeError: If *obj* is None or not an OrderType. Nothing is
                recorded on *errors* in that case.
        """
        if obj is None or not isinstance(obj, OrderType):
            msg = f"The parameter obj should not be None and must be of type {OrderType.__name__}"
            raise TypeError(msg)

        order_type = obj
        name = order_type.name
        if not has_text(name):
            errors.reject("name", ErrorCode.NAME_REQUIRED)
            return

        if order_type.parent is not None and self._hierarchy.is_ancestor_or_self(
            order_type, order_type.parent
        ):
            errors.reject(
                "parent",
                ErrorCode.PARENT_AMONG_DESCENDANTS,
                [name],
                f"Parent of {name} is among its descendants",
            )

        duplicate = self._lookup.find_by_name(name)
        if duplicate is not None and not same_entity(order_type, duplicate):
            errors.reject(
                "name",
                ErrorCode.DUPLICATE_NAME,
                [name],
                f"Duplicate order type name: {name}",
            )

        self._check_concept_classes(order_type, errors)

        logger.debug(
            "Validated order type %r: %d rejection(s)",
            name,
            errors.error_count,
        )

    def _check_concept_classes(self, order_type: OrderType, errors: ValidationErrors) -> None:
        """Reject candidate tags already owned by another order type.

        The rejected path uses the tag's index in the candidate's own list
        so it lines up with the submitted form.
        """
        for other in self._lookup.list_all(include_retired=True):
            if other is None or same_entity(order_type, other):
                continue
            for concept_class in other.concept_classes:
                if concept_class is None:
                    continue
                for index in order_type.concept_class_positions(concept_class):
                    errors.reject(
                        indexed_field("concept_classes", index),
                        ErrorCode.DUPLICATE_CONCEPT_CLASS,
                        [concept_class.name, order_type.name],
                        f"{concept_class.name} is already associated to another order type: "
                        f"{order_type.name}",
                    )
