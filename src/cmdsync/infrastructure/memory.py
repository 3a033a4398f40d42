"""InMemoryRemoteStore — a deterministic RemoteStore for tests and dry runs.

Commands are kept per scope (``None`` is the global scope) and get
sequential string ids. Every call is appended to :attr:`calls` so tests
can assert exactly which mutations a pass issued.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from cmdsync.domain.commands import CommandDefinition, RemoteCommand
from cmdsync.infrastructure.store import MISSING_ACCESS, RemoteStoreError

UNKNOWN_COMMAND = 10063

SeedCommands = Mapping[str | None, Iterable[CommandDefinition | Mapping[str, Any]]]


class InMemoryRemoteStore:
    """RemoteStore backed by plain dicts.

    Usage::

        store = InMemoryRemoteStore({None: [{"name": "old", "description": "x"}]})
        store.fail_on("create", "broken")
        result = await synchronize(store, desired)
        assert ("delete", "old") in store.calls
    """

    def __init__(
        self,
        commands: SeedCommands | None = None,
        *,
        ready: bool = True,
        application_id: str = "1",
    ) -> None:
        self.application_id = application_id
        self.calls: list[tuple[str, str | None]] = []
        self.ready_waits = 0
        self._ready = ready
        self._scopes: dict[str | None, dict[str, RemoteCommand]] = {}
        self._next_id = 1
        self._failures: dict[tuple[str, str], Exception] = {}
        self._fetch_error: Exception | None = None
        for scope, definitions in (commands or {}).items():
            for definition in definitions:
                self.seed(definition, scope)

    # ------------------------------------------------------------------
    # Test controls
    # ------------------------------------------------------------------

    def seed(
        self, definition: CommandDefinition | Mapping[str, Any], scope: str | None = None
    ) -> RemoteCommand:
        """Register a command without recording a call."""
        if not isinstance(definition, CommandDefinition):
            definition = CommandDefinition.model_validate(definition)
        remote = self._materialize(definition, scope)
        self._scopes.setdefault(scope, {})[remote.id] = remote
        return remote

    def commands(self, scope: str | None = None) -> list[RemoteCommand]:
        """Current registry contents for *scope*, in registration order."""
        return list(self._scopes.get(scope, {}).values())

    def fail_on(self, op: str, name: str, error: Exception | None = None) -> None:
        """Make every *op* (create/delete/edit) on *name* fail."""
        self._failures[(op, name)] = error or RemoteStoreError(
            f"{op} rejected for {name}", status=400
        )

    def fail_fetch(self, error: Exception | None = None) -> None:
        """Make every fetch fail; defaults to a Missing Access error."""
        self._fetch_error = error or RemoteStoreError(
            "Missing Access", status=403, code=MISSING_ACCESS
        )

    # ------------------------------------------------------------------
    # RemoteStore protocol
    # ------------------------------------------------------------------

    def is_ready(self) -> bool:
        return self._ready

    async def wait_until_ready(self) -> None:
        self.calls.append(("ready", None))
        self.ready_waits += 1
        self._ready = True

    async def fetch(self, scope: str | None) -> list[RemoteCommand]:
        self.calls.append(("fetch", scope))
        if self._fetch_error is not None:
            raise self._fetch_error
        return self.commands(scope)

    async def create(self, definition: CommandDefinition, scope: str | None) -> RemoteCommand:
        self.calls.append(("create", definition.name))
        self._maybe_fail("create", definition.name)
        registry = self._scopes.setdefault(scope, {})
        for existing in list(registry.values()):
            if existing.name == definition.name:
                del registry[existing.id]
        remote = self._materialize(definition, scope)
        registry[remote.id] = remote
        return remote

    async def delete(self, remote: RemoteCommand) -> None:
        self.calls.append(("delete", remote.name))
        self._maybe_fail("delete", remote.name)
        registry = self._scopes.get(remote.guild_id, {})
        if remote.id not in registry:
            raise RemoteStoreError("Unknown application command", status=404, code=UNKNOWN_COMMAND)
        del registry[remote.id]

    async def edit(self, remote: RemoteCommand, definition: CommandDefinition) -> RemoteCommand:
        self.calls.append(("edit", remote.name))
        self._maybe_fail("edit", remote.name)
        registry = self._scopes.get(remote.guild_id, {})
        if remote.id not in registry:
            raise RemoteStoreError("Unknown application command", status=404, code=UNKNOWN_COMMAND)
        updated = self._materialize(definition, remote.guild_id, command_id=remote.id)
        registry[remote.id] = updated
        return updated

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _maybe_fail(self, op: str, name: str) -> None:
        error = self._failures.get((op, name))
        if error is not None:
            raise error

    def _materialize(
        self,
        definition: CommandDefinition,
        scope: str | None,
        *,
        command_id: str | None = None,
    ) -> RemoteCommand:
        version = str(self._next_id)
        if command_id is None:
            command_id = version
        self._next_id += 1
        return RemoteCommand.model_validate(
            {
                **definition.to_payload(),
                "id": command_id,
                "application_id": self.application_id,
                "guild_id": scope,
                "version": version,
            }
        )
