"""Runtime settings for faultline.

Configuration is read once from the environment (prefix ``FAULTLINE_``) and
an optional ``.env`` file, validated by pydantic, and cached for the
lifetime of the process.

Fields
──────
log_level        : structlog log level
json_logs        : True for JSON, False for console, unset for auto (JSON if not a tty)
service          : service name stamped on every log event
strict_specify   : raise on template/argument mismatch instead of degrading
max_stack_depth  : frames kept per captured stack (0 keeps all)

Examples:
    >>> from faultline.core.settings import get_settings
    >>> get_settings().strict_specify
    False

    $ FAULTLINE_STRICT_SPECIFY=true python app.py

Tags:
    settings, configuration, pydantic, environment, faultline-core

Doc-Types:
    - API Reference
    - Configuration Guide
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FaultlineSettings(BaseSettings):
    """Process-wide faultline configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FAULTLINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    json_logs: bool | None = None
    service: str = "faultline"

    # ── Error construction ───────────────────────────────────────
    strict_specify: bool = False
    max_stack_depth: int = Field(default=32, ge=0)

    @property
    def stack_limit(self) -> int | None:
        """``max_stack_depth`` as a capture limit (None means unbounded)."""
        return self.max_stack_depth or None


@lru_cache(maxsize=1)
def get_settings() -> FaultlineSettings:
    """Return the cached settings instance."""
    return FaultlineSettings()


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()


def settings_to_text(settings: BaseSettings, title: str | None = None) -> str:
    """Render settings as ``key = value`` lines.

    Fields without a value are listed as a bare ``key``. An optional title is
    written on the first line.
    """
    lines = [] if title is None else [title]
    for name, value in settings.model_dump().items():
        if value is None or value == "":
            lines.append(name)
        else:
            lines.append(f"{name} = {value}")
    return "\n".join(lines) + "\n"


__all__ = [
    "FaultlineSettings",
    "get_settings",
    "reset_settings",
    "settings_to_text",
]
