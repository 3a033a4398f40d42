"""DiscordRestStore — RemoteStore over the Discord HTTP API.

Talks to the application command endpoints with a bot token::

    GET/POST   /applications/{app}/commands
    GET/POST   /applications/{app}/guilds/{guild}/commands
    PATCH/DELETE .../commands/{command_id}

The ready gate resolves the application id (``/oauth2/applications/@me``)
when it was not configured.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import httpx

from cmdsync.domain.commands import CommandDefinition, RemoteCommand
from cmdsync.infrastructure.store import RemoteStoreError

if TYPE_CHECKING:
    from cmdsync.config.models import DiscordConfig

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://discord.com/api/v10"


class DiscordRestStore:
    """Async Discord client for application command registration."""

    def __init__(
        self,
        token: str,
        *,
        application_id: str | None = None,
        api_base: str = DEFAULT_API_BASE,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.application_id = application_id
        self._token = token
        self._api_base = api_base.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_config(cls, config: DiscordConfig) -> DiscordRestStore:
        """Build a store from the ``[discord]`` settings section."""
        if config.token is None:
            msg = "A Discord bot token is required (set CMDSYNC_DISCORD__TOKEN)"
            raise ValueError(msg)
        return cls(
            config.token.get_secret_value(),
            application_id=config.application_id,
            api_base=config.api_base,
            timeout=config.timeout,
        )

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._api_base,
                headers={
                    "Authorization": f"Bot {self._token}",
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
                timeout=httpx.Timeout(self._timeout),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> DiscordRestStore:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # RemoteStore protocol
    # ------------------------------------------------------------------

    def is_ready(self) -> bool:
        return self.application_id is not None

    async def wait_until_ready(self) -> None:
        if self.application_id is not None:
            return
        app = await self._request("GET", "/oauth2/applications/@me")
        self.application_id = str(app["id"])
        logger.debug("Resolved application id %s", self.application_id)

    async def fetch(self, scope: str | None) -> list[RemoteCommand]:
        data = await self._request(
            "GET", self._collection_path(scope), params={"with_localizations": "true"}
        )
        return [RemoteCommand.model_validate(item) for item in data]

    async def create(self, definition: CommandDefinition, scope: str | None) -> RemoteCommand:
        data = await self._request(
            "POST", self._collection_path(scope), json=definition.to_payload()
        )
        return RemoteCommand.model_validate(data)

    async def delete(self, remote: RemoteCommand) -> None:
        await self._request("DELETE", self._item_path(remote))

    async def edit(self, remote: RemoteCommand, definition: CommandDefinition) -> RemoteCommand:
        data = await self._request("PATCH", self._item_path(remote), json=definition.to_payload())
        return RemoteCommand.model_validate(data)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _collection_path(self, scope: str | None) -> str:
        if self.application_id is None:
            msg = "Application id is not resolved; await wait_until_ready() first"
            raise RemoteStoreError(msg)
        if scope is None:
            return f"/applications/{self.application_id}/commands"
        return f"/applications/{self.application_id}/guilds/{scope}/commands"

    def _item_path(self, remote: RemoteCommand) -> str:
        return f"{self._collection_path(remote.guild_id)}/{remote.id}"

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self.client.request(method, path, **kwargs)
        except httpx.HTTPError as err:
            raise RemoteStoreError(f"{method} {path} failed: {err}") from err
        return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> Any:
        """Decode a response body or raise RemoteStoreError for error statuses."""
        if response.status_code >= 400:
            code: int | None = None
            message = f"API error: {response.status_code}"
            try:
                error_data = response.json()
                code = error_data.get("code")
                message = error_data.get("message", message)
            except (json.JSONDecodeError, AttributeError):
                pass
            raise RemoteStoreError(message, status=response.status_code, code=code)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except json.JSONDecodeError as err:
            raise RemoteStoreError("Invalid response format from API") from err
