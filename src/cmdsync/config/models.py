"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, cmdsync.toml only contains
overrides. The bot token normally comes from ``CMDSYNC_DISCORD__TOKEN``
rather than the file.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, SecretStr

from cmdsync.infrastructure.discord_rest import DEFAULT_API_BASE

# --- cmdsync.toml sections ---


class DiscordConfig(BaseModel):
    """[discord] section."""

    model_config = {"frozen": True}

    token: SecretStr | None = None
    application_id: str | None = None
    api_base: str = DEFAULT_API_BASE
    timeout: float = Field(default=10.0, gt=0)


class SyncConfig(BaseModel):
    """[sync] section."""

    model_config = {"frozen": True}

    commands_file: str = "commands.toml"
    guild_id: str | None = None
