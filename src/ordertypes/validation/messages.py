"""Rejection codes and their default English messages.

Codes mirror the platform's message keys so translated bundles can be
plugged in by key. Templates use positional ``{0}``-style arguments.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ordertypes.validation.errors import FieldRejection


class ErrorCode(StrEnum):
    """Message codes emitted by the order type rules."""

    NAME_REQUIRED = "error.name"
    PARENT_AMONG_DESCENDANTS = "OrderType.parent.amongDescendants"
    DUPLICATE_NAME = "OrderType.duplicate.name"
    DUPLICATE_CONCEPT_CLASS = "OrderType.duplicate"


MESSAGES: dict[str, str] = {
    ErrorCode.NAME_REQUIRED: "Name is required",
    ErrorCode.PARENT_AMONG_DESCENDANTS: "Parent of {0} is among its descendants",
    ErrorCode.DUPLICATE_NAME: "Duplicate order type name: {0}",
    ErrorCode.DUPLICATE_CONCEPT_CLASS: "{0} is already associated to another order type: {1}",
}


def render_message(rejection: FieldRejection) -> str:
    """Resolve display text for *rejection*.

    Template for the code first, then the rejection's default message,
    then the bare code.
    """
    template = MESSAGES.get(rejection.code)
    if template is not None:
        try:
            return template.format(*rejection.args)
        except IndexError:
            pass  # not enough args for the template
    if rejection.default_message:
        return rejection.default_message
    return rejection.code
