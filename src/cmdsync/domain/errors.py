"""Classified errors that abort a reconciliation pass.

Per-item mutation failures never raise; they are recorded as outcomes on
the result instead. Only argument validation and snapshot fetch failures
surface as exceptions.
"""

from __future__ import annotations

from typing import Any

from cmdsync.domain.types import ErrorKind


class SyncError(Exception):
    """Base class for errors raised by a reconciliation pass."""

    kind: ErrorKind = ErrorKind.REMOTE_FAILURE

    def __init__(self, message: str, *, detail: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail or {}


class InvalidArgumentError(SyncError):
    """The caller passed a store or command list of the wrong shape."""

    kind = ErrorKind.INVALID_ARGUMENT


class AuthorizationMissingError(SyncError):
    """The remote rejected the snapshot fetch for lack of an authorized scope."""

    kind = ErrorKind.AUTHORIZATION_MISSING


class RemoteFailureError(SyncError):
    """The snapshot fetch failed for any other reason."""

    kind = ErrorKind.REMOTE_FAILURE
