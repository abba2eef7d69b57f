"""
netkit.tier0_core.config
─────────────────────────
Typed configuration. ``NetkitConfig`` reads the library's own settings from
.env → environment variables; ``ClientConfig`` describes one reusable HTTP
client and is built in code, never from the environment.

The request helpers do not consult NetkitConfig: their timeouts and default
headers are fixed constants (see tier0_core.http).

Configure via: NETKIT_LOG_LEVEL, NETKIT_LOG_FORMAT=json|console
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class NetkitConfig(BaseSettings):
    """Library-level settings. All env vars are prefixed with NETKIT_."""

    model_config = SettingsConfigDict(
        env_prefix="NETKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Logging ───────────────────────────────────────────────────────────────
    log_level: str = Field(default="WARNING")
    log_format: str = Field(default="json")

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        allowed = {"json", "console"}
        if v.lower() not in allowed:
            raise ValueError(f"log_format must be one of {allowed}, got {v!r}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()


class ClientConfig(BaseModel):
    """
    Settings for one reusable client built by ``create_http_client``.

    Values are stored exactly as given. Zero or negative numbers are not
    rejected; the client factory decides how the transport interprets them.
    """

    model_config = ConfigDict(frozen=True)

    timeout: float
    max_idle_conns: int
    max_idle_conns_per_host: int
    max_conns_per_host: int


@lru_cache(maxsize=1)
def get_config() -> NetkitConfig:
    """
    Return the singleton netkit config. Cached after first call.
    Call _reset_config() in tests to pick up new env vars.
    """
    return NetkitConfig()


def _reset_config() -> None:
    """For tests: clear the config cache."""
    get_config.cache_clear()


__sdk_export__ = {
    "exports": ["NetkitConfig", "ClientConfig", "get_config"],
    "description": "Typed library settings and per-client configuration",
    "tier": "tier0_core",
    "module": "config",
}
