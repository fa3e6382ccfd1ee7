"""ValidatorRegistry — explicit entity-kind to validator mapping.

Built once at startup by :func:`build_registry`. Lookup walks the
object's MRO, so a validator registered for a base kind also covers
its subclasses.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from ordertypes.domain.order_types import OrderType
from ordertypes.validation.errors import ValidationErrors
from ordertypes.validation.order_type import OrderTypeValidator

if TYPE_CHECKING:
    from ordertypes.validation.ports import HierarchyHelper, OrderTypeLookup


class Validator(Protocol):
    """Anything that can check an object and report onto an error sink."""

    def supports(self, kind: type) -> bool: ...

    def validate(self, obj: Any, errors: ValidationErrors) -> None: ...


class ValidatorRegistry:
    """Maps entity kinds to the validator responsible for them."""

    def __init__(self) -> None:
        self._validators: dict[type, Validator] = {}

    def register(self, kind: type, validator: Validator) -> None:
        """Register *validator* for *kind*.

        Raises:
            ValueError: If *validator* does not support *kind*.
        """
        if not validator.supports(kind):
            msg = f"{type(validator).__name__} does not support {kind.__name__}"
            raise ValueError(msg)
        self._validators[kind] = validator

    def validator_for(self, obj: Any) -> Validator:
        """Return the validator registered for *obj*'s kind.

        Raises:
            LookupError: If no validator covers the kind.
        """
        for kind in type(obj).__mro__:
            validator = self._validators.get(kind)
            if validator is not None:
                return validator
        msg = f"No validator registered for {type(obj).__name__}"
        raise LookupError(msg)

    def validate(self, obj: Any) -> ValidationErrors:
        """Run the matching validator on *obj* and return its errors."""
        validator = self.validator_for(obj)
        errors = ValidationErrors(type(obj).__name__)
        validator.validate(obj, errors)
        return errors

    def __contains__(self, kind: object) -> bool:
        return kind in self._validators


def build_registry(lookup: OrderTypeLookup, hierarchy: HierarchyHelper) -> ValidatorRegistry:
    """Create the registry with every built-in validator wired in."""
    registry = ValidatorRegistry()
    registry.register(OrderType, OrderTypeValidator(lookup, hierarchy))
    return registry
