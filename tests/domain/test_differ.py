"""Tests for the name-keyed reconciliation diff."""

from __future__ import annotations

from typing import Any

from cmdsync.domain.commands import CommandDefinition, RemoteCommand
from cmdsync.domain.differ import ReconciliationPlan, reconcile


def _desired(name: str, description: str = "desc", **fields: Any) -> CommandDefinition:
    return CommandDefinition(name=name, description=description, **fields)


def _remote(name: str, description: str = "desc", command_id: str | None = None) -> RemoteCommand:
    return RemoteCommand(
        id=command_id or f"id-{name}", application_id="1", name=name, description=description
    )


def _names(items: list[Any]) -> list[str]:
    return [i.name for i in items]


class TestReconcile:
    def test_empty_inputs(self) -> None:
        plan = reconcile([], [])
        assert plan.is_empty
        assert plan.observed_count == 0
        assert plan.unchanged == []

    def test_only_desired_creates_everything(self) -> None:
        plan = reconcile([_desired("a"), _desired("b")], [])
        assert _names(plan.to_create) == ["a", "b"]
        assert plan.to_delete == []
        assert plan.to_update == []

    def test_only_observed_deletes_everything(self) -> None:
        plan = reconcile([], [_remote("a"), _remote("b")])
        assert _names(plan.to_delete) == ["a", "b"]
        assert plan.observed_count == 2

    def test_matching_pairs_are_unchanged(self) -> None:
        desired = [_desired("a"), _desired("b")]
        observed = [_remote("b"), _remote("a")]
        plan = reconcile(desired, observed)
        assert plan.is_empty
        assert [(d.name, r.name) for d, r in plan.unchanged] == [("a", "a"), ("b", "b")]

    def test_structural_difference_is_an_update(self) -> None:
        remote = _remote("ping", description="old")
        plan = reconcile([_desired("ping", description="new")], [remote])
        assert len(plan.to_update) == 1
        definition, observed = plan.to_update[0]
        assert definition.description == "new"
        assert observed is remote

    def test_mixed_plan(self) -> None:
        desired = [_desired("keep"), _desired("change", "v2"), _desired("add")]
        observed = [_remote("change", "v1"), _remote("drop"), _remote("keep")]
        plan = reconcile(desired, observed)
        assert _names(plan.to_create) == ["add"]
        assert _names(plan.to_delete) == ["drop"]
        assert [d.name for d, _ in plan.to_update] == ["change"]
        assert [d.name for d, _ in plan.unchanged] == ["keep"]
        assert plan.observed_count == 3

    def test_partitions_are_disjoint(self) -> None:
        desired = [_desired(n) for n in ("a", "b", "c")] + [_desired("d", "changed")]
        observed = [_remote(n) for n in ("b", "d", "e")]
        plan = reconcile(desired, observed)
        created = set(_names(plan.to_create))
        updated = {d.name for d, _ in plan.to_update}
        unchanged = {d.name for d, _ in plan.unchanged}
        deleted = set(_names(plan.to_delete))
        assert created == {"a", "c"}
        assert updated == {"d"}
        assert unchanged == {"b"}
        assert deleted == {"e"}
        assert not (created & updated or created & unchanged or updated & unchanged)

    def test_lookup_is_case_sensitive(self) -> None:
        plan = reconcile([_desired("Ping")], [_remote("ping")])
        assert _names(plan.to_create) == ["Ping"]
        assert _names(plan.to_delete) == ["ping"]


class TestDuplicates:
    def test_first_desired_definition_wins(self) -> None:
        desired = [_desired("a", "first"), _desired("a", "second")]
        plan = reconcile(desired, [_remote("a", "first")])
        assert plan.duplicates == ["a"]
        assert plan.is_empty
        assert plan.unchanged[0][0].description == "first"

    def test_duplicate_never_creates_twice(self) -> None:
        plan = reconcile([_desired("a"), _desired("a"), _desired("a")], [])
        assert _names(plan.to_create) == ["a"]
        assert plan.duplicates == ["a", "a"]

    def test_first_observed_match_is_used(self) -> None:
        first = _remote("a", command_id="1")
        second = _remote("a", command_id="2")
        plan = reconcile([_desired("a")], [first, second])
        assert plan.unchanged[0][1] is first
        assert plan.to_delete == []


class TestPlanDefaults:
    def test_default_plan_is_empty(self) -> None:
        plan = ReconciliationPlan()
        assert plan.is_empty
        assert plan.duplicates == []
