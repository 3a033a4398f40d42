"""Tests for structural, position-sensitive command equality."""

from __future__ import annotations

from typing import Any

import pytest

from cmdsync.domain.commands import CommandDefinition
from cmdsync.domain.equality import commands_equal, options_equal


def _cmd(**fields: Any) -> CommandDefinition:
    data: dict[str, Any] = {"name": "ping", "description": "Replies with Pong!"}
    data.update(fields)
    return CommandDefinition.model_validate(data)


def _string(name: str, /, **fields: Any) -> dict[str, Any]:
    return {"name": name, "description": f"{name} option", "type": 3, **fields}


RICH = _cmd(
    default_member_permissions="8",
    nsfw=True,
    options=[
        {
            "name": "files",
            "description": "Manage files",
            "type": 2,
            "options": [
                {
                    "name": "get",
                    "description": "Get a file",
                    "type": 1,
                    "options": [
                        _string("path", required=True),
                        _string("mode", choices=[{"name": "Raw", "value": "raw"}]),
                    ],
                }
            ],
        },
        _string("top"),
    ],
)


class TestReflexivity:
    @pytest.mark.parametrize(
        "command",
        [_cmd(), RICH, CommandDefinition(name="bare")],
        ids=["simple", "nested", "bare"],
    )
    def test_equal_to_itself(self, command: CommandDefinition) -> None:
        assert commands_equal(command, command) is True

    def test_equal_to_rebuilt_copy(self) -> None:
        copy = CommandDefinition.model_validate(RICH.to_payload())
        assert commands_equal(RICH, copy) is True


class TestTopLevelFields:
    def test_description_change(self) -> None:
        assert commands_equal(_cmd(description="A"), _cmd(description="B")) is False

    def test_permissions_compared_raw(self) -> None:
        assert commands_equal(_cmd(default_member_permissions="8"), _cmd()) is False
        # No normalization between a string and an int bitfield.
        assert (
            commands_equal(
                _cmd(default_member_permissions="8"), _cmd(default_member_permissions=8)
            )
            is False
        )

    def test_nsfw_missing_means_false(self) -> None:
        assert commands_equal(_cmd(nsfw=None), _cmd(nsfw=False)) is True
        assert commands_equal(_cmd(), _cmd(nsfw=True)) is False

    def test_name_and_type_not_compared(self) -> None:
        assert commands_equal(_cmd(name="a"), _cmd(name="b")) is True
        assert commands_equal(_cmd(type=1), _cmd(type=2)) is True

    def test_install_fields_not_compared(self) -> None:
        scoped = _cmd(contexts=[0], integration_types=[1], dm_permission=False)
        assert commands_equal(_cmd(), scoped) is True

    def test_localizations_not_compared(self) -> None:
        assert commands_equal(_cmd(), _cmd(description_localizations={"fr": "Pong"})) is True


class TestOptions:
    def test_length_mismatch(self) -> None:
        assert commands_equal(_cmd(options=[_string("a")]), _cmd()) is False

    def test_reordering_is_a_difference(self) -> None:
        a, b = _string("a"), _string("b")
        assert commands_equal(_cmd(options=[a, b]), _cmd(options=[b, a])) is False

    @pytest.mark.parametrize(
        "change",
        [
            {"name": "other"},
            {"description": "changed"},
            {"type": 4},
            {"required": True},
        ],
        ids=["name", "description", "type", "required"],
    )
    def test_compared_option_fields(self, change: dict[str, Any]) -> None:
        before = _cmd(options=[_string("a")])
        after = _cmd(options=[_string("a", **change)])
        assert commands_equal(before, after) is False

    def test_required_missing_means_false(self) -> None:
        before = _cmd(options=[_string("a")])
        after = _cmd(options=[_string("a", required=False)])
        assert commands_equal(before, after) is True

    def test_constraints_not_compared(self) -> None:
        before = _cmd(options=[_string("a")])
        after = _cmd(options=[_string("a", max_length=10, autocomplete=True)])
        assert commands_equal(before, after) is True


class TestChoices:
    def test_choices_on_one_side(self) -> None:
        before = _cmd(options=[_string("a")])
        after = _cmd(options=[_string("a", choices=[{"name": "x", "value": "x"}])])
        assert commands_equal(before, after) is False
        assert commands_equal(after, before) is False

    def test_empty_choices_differ_from_absent(self) -> None:
        before = _cmd(options=[_string("a")])
        after = _cmd(options=[_string("a", choices=[])])
        assert commands_equal(before, after) is False

    def test_choice_value_change(self) -> None:
        before = _cmd(options=[_string("a", choices=[{"name": "x", "value": "1"}])])
        after = _cmd(options=[_string("a", choices=[{"name": "x", "value": "2"}])])
        assert commands_equal(before, after) is False

    def test_choice_order_matters(self) -> None:
        one = {"name": "one", "value": 1}
        two = {"name": "two", "value": 2}
        before = _cmd(options=[{"name": "n", "type": 4, "choices": [one, two]}])
        after = _cmd(options=[{"name": "n", "type": 4, "choices": [two, one]}])
        assert commands_equal(before, after) is False

    def test_choice_length_mismatch(self) -> None:
        one = {"name": "one", "value": 1}
        before = _cmd(options=[{"name": "n", "type": 4, "choices": [one]}])
        after = _cmd(options=[{"name": "n", "type": 4, "choices": [one, one]}])
        assert commands_equal(before, after) is False


class TestNestedOptions:
    def test_subcommand_without_options_matches_empty_group(self) -> None:
        bare = {"name": "status", "description": "s", "type": 1}
        empty = {"name": "status", "description": "s", "type": 1, "options": []}
        assert commands_equal(_cmd(options=[bare]), _cmd(options=[empty])) is True

    def test_string_subcommand_type_matches_remote(self) -> None:
        declared = {"name": "status", "description": "s", "type": "1"}
        remote = {"name": "status", "description": "s", "type": 1, "options": []}
        assert commands_equal(_cmd(options=[declared]), _cmd(options=[remote])) is True

    def test_leaf_versus_group(self) -> None:
        leaf = {"name": "status", "description": "s", "type": 3}
        group = {"name": "status", "description": "s", "type": 1, "options": [leaf]}
        assert commands_equal(_cmd(options=[leaf]), _cmd(options=[group])) is False

    def test_nested_change_detected(self) -> None:
        payload = RICH.to_payload()
        payload["options"][0]["options"][0]["options"][1]["choices"][0]["value"] = "cooked"
        changed = CommandDefinition.model_validate(payload)
        assert commands_equal(RICH, changed) is False

    def test_nested_reorder_detected(self) -> None:
        payload = RICH.to_payload()
        nested = payload["options"][0]["options"][0]["options"]
        nested.reverse()
        changed = CommandDefinition.model_validate(payload)
        assert commands_equal(RICH, changed) is False

    def test_options_equal_on_empty(self) -> None:
        assert options_equal((), ()) is True
