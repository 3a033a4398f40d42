"""Name-keyed diff between desired definitions and an observed snapshot."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from cmdsync.domain.commands import CommandDefinition, RemoteCommand
from cmdsync.domain.equality import commands_equal


@dataclass(frozen=True)
class ReconciliationPlan:
    """Mutations needed to move the observed snapshot to the desired state.

    Attributes:
        to_create: Desired definitions with no observed counterpart.
        to_delete: Observed commands with no desired counterpart.
        to_update: ``(desired, observed)`` pairs that differ structurally.
        unchanged: ``(desired, observed)`` pairs that already match.
        observed_count: Size of the snapshot the plan was computed from.
        duplicates: Desired names seen more than once; only the first
            occurrence takes part in matching.
    """

    to_create: list[CommandDefinition] = field(default_factory=list)
    to_delete: list[RemoteCommand] = field(default_factory=list)
    to_update: list[tuple[CommandDefinition, RemoteCommand]] = field(default_factory=list)
    unchanged: list[tuple[CommandDefinition, RemoteCommand]] = field(default_factory=list)
    duplicates: list[str] = field(default_factory=list)
    observed_count: int = 0

    @property
    def is_empty(self) -> bool:
        """True when no mutation call is needed."""
        return not (self.to_create or self.to_delete or self.to_update)


def reconcile(
    desired: Sequence[CommandDefinition],
    observed: Sequence[RemoteCommand],
) -> ReconciliationPlan:
    """Partition *desired* vs *observed* into create/delete/update sets.

    Output lists keep the input order of *desired* and *observed*.
    """
    plan = ReconciliationPlan(observed_count=len(observed))

    desired_by_name: dict[str, CommandDefinition] = {}
    for definition in desired:
        if definition.name in desired_by_name:
            plan.duplicates.append(definition.name)
            continue
        desired_by_name[definition.name] = definition

    observed_by_name: dict[str, RemoteCommand] = {}
    for remote in observed:
        observed_by_name.setdefault(remote.name, remote)

    for definition in desired_by_name.values():
        remote = observed_by_name.get(definition.name)
        if remote is None:
            plan.to_create.append(definition)
        elif commands_equal(remote, definition):
            plan.unchanged.append((definition, remote))
        else:
            plan.to_update.append((definition, remote))

    plan.to_delete.extend(r for r in observed if r.name not in desired_by_name)
    return plan
