"""BaseService: foundation for all shipctl services.

Every service receives a :class:`Store` at construction time. Services
own their transaction boundaries via ``self._store.transaction()`` for
writes and ``self._store.snapshot()`` for reads.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shipctl.infrastructure.store import Store


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class ShipmentService(BaseService):
            def delete(self, shipment_id: int) -> ServiceResult:
                with self._store.transaction() as txn:
                    ...
    """

    def __init__(self, store: Store) -> None:
        self._store = store
