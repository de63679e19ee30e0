"""Adapter for the singleton bot configuration.

- GET /config → BotConfig
- PUT /config {BotConfig} → status message string
"""

from __future__ import annotations

import pydantic

from errors import NetworkError
from models.bot_config import BotConfig
from services.admin_client import AdminClient


class ConfigAdapter:
    path = "/config"

    def __init__(self, client: AdminClient) -> None:
        self.client = client

    async def get(self) -> BotConfig:
        resp = await self.client.get(self.path)
        try:
            return BotConfig.model_validate(resp)
        except pydantic.ValidationError as exc:
            raise NetworkError(None, "malformed response from /config", url=self.path) from exc

    async def update(self, config: BotConfig) -> str:
        """Replace the whole document; returns the backend's status message."""
        resp = await self.client.put(self.path, json_body=config.to_payload())
        return resp if isinstance(resp, str) else ""
