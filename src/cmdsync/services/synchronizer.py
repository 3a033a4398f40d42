"""Synchronizer — one reconciliation pass against a RemoteStore.

A pass takes a single snapshot, diffs it against the desired definitions,
then applies creates, deletes, and updates in that order, one awaited call
at a time. Every phase works from the initial snapshot. A failing item is
recorded and skipped; only argument validation and the snapshot fetch can
abort the pass.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping, Sequence
from functools import partial
from typing import Any

import structlog
from pydantic import ValidationError

from cmdsync.domain.commands import CommandDefinition
from cmdsync.domain.differ import ReconciliationPlan, reconcile
from cmdsync.domain.errors import (
    AuthorizationMissingError,
    InvalidArgumentError,
    RemoteFailureError,
)
from cmdsync.domain.types import Phase
from cmdsync.infrastructure.store import RemoteStore, RemoteStoreError
from cmdsync.services.result import ItemOutcome, ReconciliationResult
from cmdsync.services.telemetry import trace_span

MISSING_SCOPE_MESSAGE = 'The client does not have the "applications.commands" scope authorized.'

_DONE_EVENTS = {
    Phase.CREATE: "command.created",
    Phase.DELETE: "command.deleted",
    Phase.UPDATE: "command.updated",
}


def coerce_definitions(desired: Any) -> list[CommandDefinition]:
    """Validate the caller's command list before any I/O.

    Accepts a list or tuple of CommandDefinition instances or mappings that
    validate into one.
    """
    if not isinstance(desired, (list, tuple)):
        msg = f"Commands must be a list, got {type(desired).__name__}"
        raise InvalidArgumentError(msg)

    definitions: list[CommandDefinition] = []
    for index, item in enumerate(desired):
        if isinstance(item, CommandDefinition):
            definitions.append(item)
        elif isinstance(item, Mapping):
            try:
                definitions.append(CommandDefinition.model_validate(item))
            except ValidationError as exc:
                msg = f"Invalid command definition at index {index}"
                raise InvalidArgumentError(
                    msg,
                    detail={
                        "index": index,
                        "errors": exc.errors(
                            include_url=False, include_context=False, include_input=False
                        ),
                    },
                ) from exc
        else:
            msg = f"Command at index {index} must be a mapping, got {type(item).__name__}"
            raise InvalidArgumentError(msg, detail={"index": index})
    return definitions


def _check_scope(scope: Any) -> None:
    if scope is not None and (not isinstance(scope, str) or not scope):
        msg = "Scope must be None (global) or a non-empty guild id"
        raise InvalidArgumentError(msg)


class Synchronizer:
    """Runs reconciliation passes against one remote store.

    Holds no state between passes; concurrent passes on the same scope are
    not serialized.

    Usage::

        result = await Synchronizer(store, debug=True).run(commands, scope="1234")
    """

    def __init__(self, store: RemoteStore, *, debug: bool = False) -> None:
        if not isinstance(store, RemoteStore):
            msg = f"A RemoteStore instance is required, got {type(store).__name__}"
            raise InvalidArgumentError(msg)
        self._store = store
        self._debug_enabled = debug
        self._log = structlog.get_logger(__name__)

    async def plan(self, desired: Sequence[Any], scope: str | None = None) -> ReconciliationPlan:
        """Snapshot and diff without mutating anything."""
        definitions = coerce_definitions(desired)
        _check_scope(scope)
        return await self._snapshot_plan(definitions, scope)

    async def run(self, desired: Sequence[Any], scope: str | None = None) -> ReconciliationResult:
        """Run one full pass and return the per-phase success counts."""
        definitions = coerce_definitions(desired)
        _check_scope(scope)
        plan = await self._snapshot_plan(definitions, scope)
        outcomes: list[ItemOutcome] = []

        with trace_span("create") as span:
            for definition in plan.to_create:
                outcomes.append(
                    await self._apply(
                        Phase.CREATE,
                        definition.name,
                        partial(self._store.create, definition, scope),
                    )
                )
            created = _succeeded(outcomes, Phase.CREATE)
            self._debug("sync.created", count=created)
            if span:
                span.annotate("created", created)

        with trace_span("delete") as span:
            for remote in plan.to_delete:
                outcomes.append(
                    await self._apply(
                        Phase.DELETE, remote.name, partial(self._store.delete, remote)
                    )
                )
            deleted = _succeeded(outcomes, Phase.DELETE)
            self._debug("sync.deleted", count=deleted)
            if span:
                span.annotate("deleted", deleted)

        with trace_span("update") as span:
            for definition, remote in plan.to_update:
                outcomes.append(
                    await self._apply(
                        Phase.UPDATE,
                        definition.name,
                        partial(self._store.edit, remote, definition),
                    )
                )
            updated = _succeeded(outcomes, Phase.UPDATE)
            self._debug("sync.updated", count=updated)
            if span:
                span.annotate("updated", updated)

        result = ReconciliationResult(
            scope=scope,
            observed_count=plan.observed_count,
            created_count=created,
            deleted_count=deleted,
            updated_count=updated,
            outcomes=tuple(outcomes),
            ignored_duplicates=tuple(plan.duplicates),
        )
        self._debug("sync.complete", failed=len(result.failures))
        return result

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _snapshot_plan(
        self, definitions: list[CommandDefinition], scope: str | None
    ) -> ReconciliationPlan:
        self._debug("sync.start", scope=scope or "global")
        with trace_span("fetch") as span:
            try:
                if not self._store.is_ready():
                    await self._store.wait_until_ready()
                observed = list(await self._store.fetch(scope))
            except RemoteStoreError as exc:
                self._debug("sync.failed", error=exc.message)
                if exc.missing_access:
                    raise AuthorizationMissingError(
                        MISSING_SCOPE_MESSAGE, detail={"status": exc.status, "code": exc.code}
                    ) from exc
                raise RemoteFailureError(
                    exc.message, detail={"status": exc.status, "code": exc.code}
                ) from exc
            except Exception as exc:
                self._debug("sync.failed", error=str(exc))
                raise RemoteFailureError(str(exc) or type(exc).__name__) from exc
            if span:
                span.annotate("observed", len(observed))

        self._debug("sync.snapshot", registered=len(observed))
        plan = reconcile(definitions, observed)
        if plan.duplicates:
            self._debug("sync.duplicates_ignored", names=plan.duplicates)
        return plan

    async def _apply(
        self, phase: Phase, name: str, call: Callable[[], Awaitable[Any]]
    ) -> ItemOutcome:
        try:
            await call()
        except Exception as exc:
            error = str(exc) or type(exc).__name__
            self._debug(f"command.{phase}_failed", command=name, error=error)
            return ItemOutcome(phase=phase, name=name, ok=False, error=error)
        self._debug(_DONE_EVENTS[phase], command=name)
        return ItemOutcome(phase=phase, name=name, ok=True)

    def _debug(self, event: str, **fields: Any) -> None:
        if self._debug_enabled:
            self._log.info(event, **fields)


def _succeeded(outcomes: list[ItemOutcome], phase: Phase) -> int:
    return sum(1 for o in outcomes if o.phase is phase and o.ok)


async def synchronize(
    store: RemoteStore,
    desired: Sequence[Any],
    *,
    scope: str | None = None,
    debug: bool = False,
) -> ReconciliationResult:
    """Run one reconciliation pass of *desired* against *store*.

    Raises:
        InvalidArgumentError: *store* or *desired* has the wrong shape.
        AuthorizationMissingError: The remote refused the snapshot fetch
            because the commands scope is not authorized.
        RemoteFailureError: The snapshot fetch failed for any other reason.
    """
    return await Synchronizer(store, debug=debug).run(desired, scope)
