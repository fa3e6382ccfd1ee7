"""Validation layer — rule sets, error sink, and validator registry.

Validators may import from domain. They reach persisted data only through
the protocols in :mod:`ordertypes.validation.ports`.
"""

from ordertypes.validation.errors import FieldRejection, ValidationErrors
from ordertypes.validation.messages import ErrorCode
from ordertypes.validation.order_type import OrderTypeValidator
from ordertypes.validation.registry import ValidatorRegistry, build_registry

__all__ = [
    "ErrorCode",
    "FieldRejection",
    "OrderTypeValidator",
    "ValidationErrors",
    "ValidatorRegistry",
    "build_registry",
]
