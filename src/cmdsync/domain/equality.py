"""Structural equality for command definitions.

Decides whether a name-matched desired/observed pair needs an update.
Comparison is positional: options and choices are matched by index, not
by name, so reordering otherwise identical options reports a difference.
"""

from __future__ import annotations

from collections.abc import Sequence

from cmdsync.domain.commands import (
    CommandDefinition,
    GroupOption,
    LeafOption,
    OptionChoice,
    OptionDefinition,
)


def commands_equal(a: CommandDefinition, b: CommandDefinition) -> bool:
    """Return True if *a* and *b* need no update to converge.

    Checks, in order: description, default member permissions (raw value),
    the nsfw flag, then the option tree. Stops at the first mismatch.
    """
    if a.description != b.description:
        return False
    if a.default_member_permissions != b.default_member_permissions:
        return False
    if bool(a.nsfw) != bool(b.nsfw):
        return False
    return options_equal(a.options, b.options)


def options_equal(a: Sequence[OptionDefinition], b: Sequence[OptionDefinition]) -> bool:
    """Compare two option sequences position by position, recursing into groups."""
    if len(a) != len(b):
        return False
    return all(_option_equal(left, right) for left, right in zip(a, b, strict=True))


def _option_equal(a: OptionDefinition, b: OptionDefinition) -> bool:
    if (
        a.name != b.name
        or a.description != b.description
        or a.type != b.type
        or bool(a.required) != bool(b.required)
    ):
        return False

    if isinstance(a, GroupOption) or isinstance(b, GroupOption):
        # Nested options on one side only.
        if not (isinstance(a, GroupOption) and isinstance(b, GroupOption)):
            return False
        return options_equal(a.options, b.options)

    if isinstance(a, LeafOption) and isinstance(b, LeafOption):
        return _choices_equal(a.choices, b.choices)
    return False


def _choices_equal(
    a: Sequence[OptionChoice] | None,
    b: Sequence[OptionChoice] | None,
) -> bool:
    if a is None and b is None:
        return True
    if a is None or b is None:
        return False
    if len(a) != len(b):
        return False
    return all(
        left.name == right.name and left.value == right.value
        for left, right in zip(a, b, strict=True)
    )
