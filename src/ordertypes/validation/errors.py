"""Field-level rejection records and the per-object error sink.

Data violations are never raised. Validators call
:meth:`ValidationErrors.reject` and keep going, so the caller can show
every applicable problem at once.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict

from ordertypes.validation.messages import render_message


class FieldRejection(BaseModel):
    """One structured field error.

    Attributes:
        field: Field path; collection fields use an index suffix
            (``concept_classes[2]``).
        code: Message code used to look up the display template.
        args: Positional formatting arguments for the template.
        default_message: Text to show when no template exists for *code*.
    """

    model_config = ConfigDict(frozen=True)

    field: str
    code: str
    args: tuple[Any, ...] = ()
    default_message: str | None = None


def indexed_field(field: str, index: int) -> str:
    """Build a collection field path, e.g. ``concept_classes[1]``."""
    return f"{field}[{index}]"


class ValidationErrors:
    """Accumulates rejections for a single validated object."""

    def __init__(self, object_name: str = "object") -> None:
        self.object_name = object_name
        self._rejections: list[FieldRejection] = []

    def reject(
        self,
        field: str,
        code: str,
        args: Sequence[Any] | None = None,
        default_message: str | None = None,
    ) -> None:
        """Record a rejection of *field* with *code*."""
        self._rejections.append(
            FieldRejection(
                field=field,
                code=str(code),
                args=tuple(args or ()),
                default_message=default_message,
            )
        )

    @property
    def rejections(self) -> list[FieldRejection]:
        return list(self._rejections)

    @property
    def has_errors(self) -> bool:
        return bool(self._rejections)

    @property
    def error_count(self) -> int:
        return len(self._rejections)

    def field_rejections(self, field: str) -> list[FieldRejection]:
        """Return rejections recorded against exactly *field*."""
        return [r for r in self._rejections if r.field == field]

    def to_dicts(self) -> list[dict[str, Any]]:
        """Serialize rejections with rendered messages for service payloads."""
        return [
            {
                "field": r.field,
                "code": r.code,
                "args": list(r.args),
                "message": render_message(r),
            }
            for r in self._rejections
        ]

    def __repr__(self) -> str:
        return f"ValidationErrors({self.object_name!r}, {self.error_count} rejection(s))"
