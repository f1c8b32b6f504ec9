"""
Runtime configuration for the MoodMint service.

Settings are read once from ``MOODMINT_*`` environment variables, after
loading a ``.env`` file from the working directory if one is present.
Anything unset falls back to the defaults below, which match a local
development setup with the dashboard on port 3000.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from .seed import DEFAULT_WINDOW_MS

ENV_PREFIX = "MOODMINT_"

DEFAULT_CORS_ORIGINS: tuple[str, ...] = (
    "http://localhost:3000",
    "http://127.0.0.1:3000",
)

LOG_LEVELS = frozenset({"critical", "error", "warning", "info", "debug"})

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


@dataclass(frozen=True)
class Settings:
    """
    Immutable service settings.

    Attributes:
        host: Interface uvicorn binds to.
        port: Port uvicorn listens on.
        window_ms: Length of a rendering time window in milliseconds.
        log_level: Logging level name, also passed to uvicorn.
        reload: Whether uvicorn reloads on code changes.
        cors_origins: Origins allowed to call the API from a browser.
    """

    host: str = "0.0.0.0"
    port: int = 8000
    window_ms: int = DEFAULT_WINDOW_MS
    log_level: str = "info"
    reload: bool = False
    cors_origins: tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if not 0 < self.port < 65536:
            raise ValueError(f"port must be in 1-65535, got {self.port}")
        if self.window_ms <= 0:
            raise ValueError(f"window_ms must be positive, got {self.window_ms}")
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Unknown log_level {self.log_level!r}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``)

        Returns:
            Settings with every ``MOODMINT_*`` override applied
        """
        env = os.environ if environ is None else environ

        def get(name: str) -> str | None:
            return env.get(ENV_PREFIX + name)

        overrides: dict[str, object] = {}
        if (host := get("HOST")) is not None:
            overrides["host"] = host
        if (port := get("PORT")) is not None:
            overrides["port"] = _parse_int("PORT", port)
        if (window_ms := get("WINDOW_MS")) is not None:
            overrides["window_ms"] = _parse_int("WINDOW_MS", window_ms)
        if (log_level := get("LOG_LEVEL")) is not None:
            overrides["log_level"] = log_level.lower()
        if (reload := get("RELOAD")) is not None:
            overrides["reload"] = _parse_bool("RELOAD", reload)
        if (origins := get("CORS_ORIGINS")) is not None:
            overrides["cors_origins"] = tuple(
                origin.strip() for origin in origins.split(",") if origin.strip()
            )

        return cls(**overrides)  # type: ignore[arg-type]


def load_settings(env_file: str | Path | None = None) -> Settings:
    """
    Load a ``.env`` file into the environment and build settings from it.

    Variables already set in the environment win over the file.

    Args:
        env_file: Path to the dotenv file (defaults to the nearest ``.env``
            from the working directory)

    Returns:
        Settings built from the resulting environment
    """
    env_file = env_file or find_dotenv(usecwd=True)
    if env_file:
        load_dotenv(env_file)
    return Settings.from_env()


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from None


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{ENV_PREFIX}{name} must be a boolean, got {raw!r}")
