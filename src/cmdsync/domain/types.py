"""Command, option, and outcome classification enums.

Integer values follow the Discord application command wire format.
"""

from __future__ import annotations

from enum import IntEnum, StrEnum
from typing import Any


class _WireEnum(IntEnum):
    """Integer enum that admits values newer than this release knows about.

    An unlisted integer becomes an unnamed pseudo-member (``UNKNOWN_<n>``)
    that compares and serializes as the plain integer.
    """

    @classmethod
    def _missing_(cls, value: object) -> _WireEnum | None:
        if not isinstance(value, int) or isinstance(value, bool):
            return None
        member = int.__new__(cls, value)
        member._name_ = f"UNKNOWN_{value}"
        member._value_ = value
        return member

    @classmethod
    def parse(cls, value: Any) -> Any:
        """Map an integer or digit string onto the enum; pass anything else through."""
        if isinstance(value, str) and value.strip().isdigit():
            value = int(value)
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(value)
        return value


class CommandType(_WireEnum):
    """Application command kinds."""

    CHAT_INPUT = 1
    USER = 2
    MESSAGE = 3
    PRIMARY_ENTRY_POINT = 4


class OptionType(_WireEnum):
    """Application command option kinds."""

    SUB_COMMAND = 1
    SUB_COMMAND_GROUP = 2
    STRING = 3
    INTEGER = 4
    BOOLEAN = 5
    USER = 6
    CHANNEL = 7
    ROLE = 8
    MENTIONABLE = 9
    NUMBER = 10
    ATTACHMENT = 11


GROUP_OPTION_TYPES = frozenset({OptionType.SUB_COMMAND, OptionType.SUB_COMMAND_GROUP})


class ErrorKind(StrEnum):
    """Classification of errors that abort a reconciliation pass."""

    INVALID_ARGUMENT = "invalid_argument"
    AUTHORIZATION_MISSING = "authorization_missing"
    REMOTE_FAILURE = "remote_failure"


class Phase(StrEnum):
    """Mutation phases of a pass, in application order."""

    CREATE = "create"
    DELETE = "delete"
    UPDATE = "update"
