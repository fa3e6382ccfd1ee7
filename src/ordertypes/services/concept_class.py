"""ConceptClassService — register and list concept class tags."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError

from ordertypes.domain.order_types import ConceptClass, has_text
from ordertypes.services._helpers import now_iso
from ordertypes.services.base import BaseService
from ordertypes.services.result import ServiceResult


class ConceptClassService(BaseService):
    """Concept classes are created here and attached via OrderTypeService."""

    def add(self, name: str, *, description: str | None = None) -> ServiceResult:
        op = "add_concept_class"
        if not has_text(name):
            return ServiceResult.failure(op, "INVALID_INPUT", "Concept class name is required")
        if self._store.repository.find_concept_class(name) is not None:
            return ServiceResult.failure(op, "CONFLICT", f"Concept class {name!r} already exists")

        concept_class = ConceptClass(name=name, description=description)
        try:
            self._store.repository.add_concept_class(concept_class, timestamp=now_iso())
        except IntegrityError:
            return ServiceResult.failure(op, "CONFLICT", f"Concept class {name!r} already exists")
        return ServiceResult(
            ok=True,
            op=op,
            data={"uuid": concept_class.uuid, "name": name, "description": description},
        )

    def list_concept_classes(self) -> ServiceResult:
        """List all concept classes and the order type each belongs to."""
        items = self._store.repository.list_concept_classes()
        return ServiceResult(
            ok=True,
            op="list_concept_classes",
            data={"count": len(items), "items": items},
        )
