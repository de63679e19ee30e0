"""Bot configuration screen: fetch the singleton, edit, replace it whole."""

from __future__ import annotations

from typing import Any

from adapters.config_adapter import ConfigAdapter
from errors import ActionInProgressError, AdminError
from models.bot_config import BotConfig
from services.notifications import Notifier
from services.resource_page import error_detail

# Initial form values before anything has been loaded.
DEFAULT_VALUES = {"logging_level": "INFO", "cmd_suffix": "/", "admins": []}

# Must be non-blank; group fields only when that group is present.
REQUIRED_FIELDS = (
    "logging_level",
    "cmd_suffix",
    "database.url",
    "llm.api_key",
    "llm.base_url",
    "llm.model",
    "llm.system_prompt",
)


def admins_to_text(admins: list[str]) -> str:
    return "\n".join(admins)


def admins_from_text(text: str) -> list[str]:
    """One admin id per line, blanks dropped, first occurrence kept."""
    admins = [line.strip() for line in text.split("\n") if line.strip()]
    return list(dict.fromkeys(admins))


def missing_fields(config: BotConfig) -> dict[str, str]:
    missing = {}
    for name in REQUIRED_FIELDS:
        group, _, field = name.rpartition(".")
        owner = getattr(config, group) if group else config
        if owner is None:
            continue
        value = getattr(owner, field)
        if value is None or not str(value).strip():
            missing[name] = f"{name} is required"
    return missing


class ConfigPage:
    def __init__(self, adapter: ConfigAdapter, notifier: Notifier | None = None) -> None:
        self.adapter = adapter
        self.notifier = notifier or Notifier()
        self.config: BotConfig | None = None
        self.field_errors: dict[str, str] = {}
        self.loading = False
        self.saving = False

    async def load(self) -> BotConfig | None:
        self.loading = True
        try:
            self.config = await self.adapter.get()
        except AdminError as exc:
            self.notifier.error(f"Failed to load configuration: {error_detail(exc)}")
            return None
        finally:
            self.loading = False
        return self.config

    async def save(self, config: BotConfig) -> str | None:
        """Replace the whole document; returns the backend's status message."""
        if self.saving:
            raise ActionInProgressError("save configuration")
        self.field_errors = missing_fields(config)
        if self.field_errors:
            self.notifier.warning("Please fill in the required fields")
            return None
        self.saving = True
        try:
            status = await self.adapter.update(config)
        except AdminError as exc:
            self.notifier.error(f"Failed to update configuration: {error_detail(exc)}")
            return None
        finally:
            self.saving = False
        self.config = config
        self.notifier.success(status or "Configuration updated")
        return status

    def form_values(self) -> dict[str, Any]:
        if self.config is None:
            return {**DEFAULT_VALUES, "admins": []}
        return self.config.model_dump()

    def snapshot(self) -> dict[str, Any]:
        values = self.form_values()
        return {
            "values": values,
            "admins_text": admins_to_text(values["admins"]),
            "field_errors": self.field_errors,
            "loading": self.loading,
            "saving": self.saving,
        }
