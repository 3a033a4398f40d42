"""BaseService — shared foundation for cmdsync services.

Every service receives a :class:`RemoteStore` at construction time. The
store is injected rather than looked up, so tests run services against
an :class:`InMemoryRemoteStore`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cmdsync.infrastructure.store import RemoteStore


class BaseService:
    """Base for service-layer classes.

    Usage::

        class SyncService(BaseService):
            async def sync(self, definitions, ...) -> ServiceResult:
                result = await Synchronizer(self._store).run(definitions)
                ...
    """

    def __init__(self, store: RemoteStore) -> None:
        self._store = store
