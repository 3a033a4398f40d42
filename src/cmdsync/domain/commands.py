"""Command definition models.

Options are a tagged variant: :class:`LeafOption` for value-carrying
parameters and :class:`GroupOption` for subcommands and subcommand groups.
The wire format carries no kind flag, so parsing picks the variant
structurally (see :func:`_option_kind`).

All models are frozen. Unknown keys in payloads (ids, versions, flags the
remote adds) are ignored.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Annotated, Any, Union

from pydantic import BaseModel, Discriminator, Field, Tag, ValidationInfo, field_validator

from cmdsync.domain.types import GROUP_OPTION_TYPES, CommandType, OptionType


class OptionChoice(BaseModel):
    """A fixed value offered for a leaf option."""

    model_config = {"frozen": True, "extra": "ignore"}

    name: str
    value: str | int | float
    name_localizations: dict[str, str] | None = None


class _OptionBase(BaseModel):
    model_config = {"frozen": True, "extra": "ignore"}

    name: str
    description: str = ""
    type: OptionType
    required: bool = False
    name_localizations: dict[str, str] | None = None
    description_localizations: dict[str, str] | None = None

    @field_validator("required", mode="before")
    @classmethod
    def _default_required(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("type", mode="before")
    @classmethod
    def _parse_type(cls, value: Any) -> Any:
        return OptionType.parse(value)


class LeafOption(_OptionBase):
    """A parameter that carries a value (string, integer, user, ...)."""

    choices: tuple[OptionChoice, ...] | None = None
    min_value: int | float | None = None
    max_value: int | float | None = None
    min_length: int | None = None
    max_length: int | None = None
    channel_types: tuple[int, ...] | None = None
    autocomplete: bool | None = None

    @field_validator("type")
    @classmethod
    def _check_leaf_type(cls, value: OptionType) -> OptionType:
        if value in GROUP_OPTION_TYPES:
            msg = f"{value.name} options carry nested options, not values"
            raise ValueError(msg)
        return value


class GroupOption(_OptionBase):
    """A subcommand or subcommand group with its own nested options."""

    options: tuple[OptionDefinition, ...] = ()

    @field_validator("type")
    @classmethod
    def _check_group_type(cls, value: OptionType) -> OptionType:
        if value not in GROUP_OPTION_TYPES:
            msg = f"option with nested options must be a subcommand or group, got {value.name}"
            raise ValueError(msg)
        return value

    @field_validator("options", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return () if value is None else value


def _option_kind(value: Any) -> str | None:
    """Pick the option variant for a payload or model instance."""
    if isinstance(value, GroupOption):
        return "group"
    if isinstance(value, LeafOption):
        return "leaf"
    if isinstance(value, Mapping):
        if value.get("options") is not None:
            return "group"
        kind = OptionType.parse(value.get("type"))
        return "group" if isinstance(kind, OptionType) and kind in GROUP_OPTION_TYPES else "leaf"
    return None


OptionDefinition = Annotated[
    Union[Annotated[LeafOption, Tag("leaf")], Annotated[GroupOption, Tag("group")]],  # noqa: UP007
    Discriminator(_option_kind),
]

GroupOption.model_rebuild()


class CommandDefinition(BaseModel):
    """Desired (or observed) state of one application command.

    Attributes:
        name: Identifying key, unique within a scope.
        options: Ordered parameters; order is significant for comparison.
        default_member_permissions: Opaque permission value, compared raw.
        nsfw: Age-restricted flag; a missing value means False.
        contexts: Interaction contexts where the command is offered. Sent on
            create and edit, never compared.
        integration_types: Installation kinds that expose the command. Sent
            on create and edit, never compared.
    """

    model_config = {"frozen": True, "extra": "ignore"}

    name: str = Field(min_length=1)
    description: str = ""
    type: CommandType = CommandType.CHAT_INPUT
    options: tuple[OptionDefinition, ...] = ()
    default_member_permissions: str | int | None = None
    dm_permission: bool | None = None
    nsfw: bool = False
    contexts: tuple[int, ...] | None = None
    integration_types: tuple[int, ...] | None = None
    name_localizations: dict[str, str] | None = None
    description_localizations: dict[str, str] | None = None

    @field_validator("nsfw", mode="before")
    @classmethod
    def _default_nsfw(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("type", mode="before")
    @classmethod
    def _parse_type(cls, value: Any) -> Any:
        return CommandType.parse(value)

    @field_validator("options", "description", mode="before")
    @classmethod
    def _none_to_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return "" if info.field_name == "description" else ()
        return value

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JSON body used for create and edit calls.

        ``default_member_permissions`` is always present so an edit can
        clear it.
        """
        payload = self.model_dump(
            mode="json",
            exclude_none=True,
            include=set(CommandDefinition.model_fields),
        )
        payload["default_member_permissions"] = self.default_member_permissions
        return payload


class RemoteCommand(CommandDefinition):
    """A command as registered with the remote service at snapshot time."""

    id: str
    application_id: str | None = None
    guild_id: str | None = None
    version: str | None = None
    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
