"""cmdsync — reconcile declared application commands with a remote registry."""

from __future__ import annotations

from cmdsync.domain.commands import (
    CommandDefinition,
    GroupOption,
    LeafOption,
    OptionChoice,
    RemoteCommand,
)
from cmdsync.domain.differ import ReconciliationPlan, reconcile
from cmdsync.domain.equality import commands_equal
from cmdsync.domain.errors import (
    AuthorizationMissingError,
    InvalidArgumentError,
    RemoteFailureError,
    SyncError,
)
from cmdsync.domain.types import CommandType, ErrorKind, OptionType
from cmdsync.infrastructure.memory import InMemoryRemoteStore
from cmdsync.infrastructure.store import RemoteStore, RemoteStoreError
from cmdsync.services.result import ItemOutcome, ReconciliationResult
from cmdsync.services.synchronizer import Synchronizer, synchronize

__version__ = "0.1.0"

__all__ = [
    "AuthorizationMissingError",
    "CommandDefinition",
    "CommandType",
    "ErrorKind",
    "GroupOption",
    "InMemoryRemoteStore",
    "InvalidArgumentError",
    "ItemOutcome",
    "LeafOption",
    "OptionChoice",
    "OptionType",
    "ReconciliationPlan",
    "ReconciliationResult",
    "RemoteCommand",
    "RemoteFailureError",
    "RemoteStore",
    "RemoteStoreError",
    "SyncError",
    "Synchronizer",
    "__version__",
    "commands_equal",
    "reconcile",
    "synchronize",
]
