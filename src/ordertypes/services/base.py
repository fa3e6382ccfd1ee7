"""BaseService — abstract foundation for all ordertypes services.

Every service receives a :class:`Store` at construction time. The Store
provides the repository, hierarchy graph, and validator registry.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ordertypes.infrastructure.store import Store


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class OrderTypeService(BaseService):
            def create(self, name: str, ...) -> ServiceResult:
                errors = self._store.validators.validate(candidate)
                ...
    """

    def __init__(self, store: Store) -> None:
        self._store = store
