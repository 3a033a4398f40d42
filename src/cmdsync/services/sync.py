"""SyncService — reconciliation passes behind the ServiceResult contract.

Wraps the Synchronizer for the CLI: classified errors become
``ServiceResult(ok=False)`` with the error kind as code, and per-item
failures become warnings so a partial pass is never silent.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from cmdsync.domain.errors import SyncError
from cmdsync.services.base import BaseService
from cmdsync.services.result import ServiceError, ServiceResult
from cmdsync.services.synchronizer import Synchronizer
from cmdsync.services.telemetry import traced


def error_result(op: str, exc: SyncError) -> ServiceResult:
    """Convert a classified error into a failed ServiceResult."""
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=exc.kind.name, message=exc.message, detail=exc.detail),
    )


def _duplicate_warnings(names: Sequence[str]) -> list[str]:
    return [f"Duplicate command name '{n}' ignored (first definition wins)" for n in names]


class SyncService(BaseService):
    """Runs reconciliation passes and dry runs against the injected store."""

    @traced
    async def sync(
        self,
        definitions: Sequence[Any],
        *,
        scope: str | None = None,
        debug: bool = False,
    ) -> ServiceResult:
        """Apply *definitions* to *scope* and report what changed."""
        try:
            result = await Synchronizer(self._store, debug=debug).run(definitions, scope)
        except SyncError as exc:
            return error_result("sync", exc)

        warnings = _duplicate_warnings(result.ignored_duplicates)
        warnings.extend(f"{o.phase} failed for '{o.name}': {o.error}" for o in result.failures)

        return ServiceResult(
            ok=True,
            op="sync",
            data={
                "scope": scope or "global",
                "observed": result.observed_count,
                "created": result.created_count,
                "deleted": result.deleted_count,
                "updated": result.updated_count,
                "failed": len(result.failures),
                "outcomes": [o.model_dump(mode="json") for o in result.outcomes],
            },
            warnings=warnings,
        )

    @traced
    async def diff(
        self,
        definitions: Sequence[Any],
        *,
        scope: str | None = None,
        debug: bool = False,
    ) -> ServiceResult:
        """Report what a sync would do, without mutating the remote."""
        try:
            plan = await Synchronizer(self._store, debug=debug).plan(definitions, scope)
        except SyncError as exc:
            return error_result("diff", exc)

        return ServiceResult(
            ok=True,
            op="diff",
            data={
                "scope": scope or "global",
                "observed": plan.observed_count,
                "in_sync": plan.is_empty,
                "create": [d.name for d in plan.to_create],
                "delete": [r.name for r in plan.to_delete],
                "update": [d.name for d, _ in plan.to_update],
                "unchanged": [d.name for d, _ in plan.unchanged],
            },
            warnings=_duplicate_warnings(plan.duplicates),
        )
