"""Runtime configuration of the QQ bot, edited as one document.

There is a single instance per deployment with no identity: it is fetched
with ``GET /config`` and replaced whole with ``PUT /config``. Durations are
kept as the backend's humantime strings (``"60s"``, ``"5m"``).
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CacheConfig(BaseModel):
    cache_lifetime: str = "60s"
    cache_capacity: int = 1000
    cache_idletime: str = "30s"
    conversation_capacity: int = 1000
    max_conversation_history: int = 20
    conversation_timeout_minutes: int = 30


class DatabaseConfig(BaseModel):
    url: str = ""
    max_connections: int = 10
    connect_timeout: str = "8s"
    acquire_timeout: str = "8s"
    idle_timeout: str = "8s"
    max_lifetime: str = "8s"
    sqlx_logging: bool = False


class LlmConfig(BaseModel):
    api_key: str = ""
    base_url: str = ""
    model: str = ""
    system_prompt: str = ""
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = 2048
    top_p: float = Field(default=1.0, ge=0.0, le=1.0)
    timeout_seconds: int = 60
    auto_capture_group_messages: bool = False


class BotConfig(BaseModel):
    """Top-level settings are required; the three groups may be absent."""

    logging_level: str
    cmd_suffix: str
    admins: list[str] = Field(default_factory=list)
    cache: CacheConfig | None = None
    database: DatabaseConfig | None = None
    llm: LlmConfig | None = None

    def to_payload(self) -> dict:
        """Whole-document body for ``PUT /config``; absent groups are omitted."""
        payload = self.model_dump(exclude={"cache", "database", "llm"})
        for group in ("cache", "database", "llm"):
            value = getattr(self, group)
            if value is not None:
                payload[group] = value.model_dump()
        return payload
