"""Result types for reconciliation passes and the service contract.

INVARIANT: SyncService methods return ServiceResult.
The CLI and any future interface consume this type. The Synchronizer
itself returns a ReconciliationResult and raises classified errors.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, NonNegativeInt

from cmdsync.domain.types import Phase


class ItemOutcome(BaseModel):
    """What happened to one create, delete, or update within a pass."""

    model_config = {"frozen": True}

    phase: Phase
    name: str
    ok: bool
    error: str | None = None


class ReconciliationResult(BaseModel):
    """Summary of one reconciliation pass.

    Counts include only mutations that succeeded. Failed items appear in
    ``outcomes`` (and ``failures``) but never in the counts.

    Attributes:
        scope: Guild id the pass ran against, or None for global commands.
        observed_count: Size of the snapshot taken at the start of the pass.
        outcomes: One entry per attempted mutation, in application order.
        ignored_duplicates: Desired names that appeared more than once;
            only the first definition was used.
    """

    model_config = {"frozen": True}

    scope: str | None = None
    observed_count: NonNegativeInt = 0
    created_count: NonNegativeInt = 0
    deleted_count: NonNegativeInt = 0
    updated_count: NonNegativeInt = 0
    outcomes: tuple[ItemOutcome, ...] = ()
    ignored_duplicates: tuple[str, ...] = ()

    @property
    def failures(self) -> list[ItemOutcome]:
        return [o for o in self.outcomes if not o.ok]


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (``"sync"`` or ``"diff"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timing, telemetry).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
