"""RemoteStore — the interface a reconciliation pass talks to.

A store owns the remote registry of commands for one application. The
Synchronizer only reads snapshots and issues single-item mutations through
it; it never touches the network itself.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from cmdsync.domain.commands import CommandDefinition, RemoteCommand

# Discord JSON error code for "Missing Access".
MISSING_ACCESS = 50001


class RemoteStoreError(Exception):
    """A remote call failed.

    Attributes:
        status: HTTP status code, if the failure came from a response.
        code: Service-specific error code from the response body, if any.
    """

    def __init__(self, message: str, *, status: int | None = None, code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code

    @property
    def missing_access(self) -> bool:
        return self.code == MISSING_ACCESS


@runtime_checkable
class RemoteStore(Protocol):
    """Async access to the registered commands of one application."""

    def is_ready(self) -> bool: ...

    async def wait_until_ready(self) -> None: ...

    async def fetch(self, scope: str | None) -> Sequence[RemoteCommand]: ...

    async def create(self, definition: CommandDefinition, scope: str | None) -> RemoteCommand: ...

    async def delete(self, remote: RemoteCommand) -> None: ...

    async def edit(self, remote: RemoteCommand, definition: CommandDefinition) -> RemoteCommand: ...
