"""Environment-driven settings shared by the engine services."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

ENV_PREFIX = "OUTLINER_ENGINE_"
DEFAULT_PENDING_TIMEOUT_MS = 1000
DEFAULT_LOGGER_NAME = "outliner_engine"
DEFAULT_BUFFER_SIZE = 2048


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def env_int(name: str, default: int) -> int:
    raw = env(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True, slots=True)
class LogSettings:
    """Everything ``telemetry`` needs to build a telelog configuration.

    ``buffer_size`` of ``None`` means records are written unbuffered.
    """

    logger_name: str = DEFAULT_LOGGER_NAME
    level: str = "INFO"
    console: bool = True
    colored: bool = True
    json: bool = False
    file: Optional[str] = None
    buffer_size: Optional[int] = None

    @classmethod
    def from_env(cls) -> "LogSettings":
        buffered = env_flag("LOG_BUFFERED", False)
        return cls(
            logger_name=env("LOGGER") or DEFAULT_LOGGER_NAME,
            level=(env("LOG_LEVEL") or "INFO").upper(),
            console=not env_flag("DISABLE_CONSOLE", False),
            colored=not env_flag("NO_COLOR", False),
            json=env_flag("LOG_JSON", False),
            file=env("LOG_FILE") or None,
            buffer_size=(
                env_int("LOG_BUFFER_SIZE", DEFAULT_BUFFER_SIZE) if buffered else None
            ),
        )


@dataclass(frozen=True, slots=True)
class EngineSettings:
    """Knobs for the modal host; logging options live in ``LogSettings``."""

    pending_timeout_ms: int = DEFAULT_PENDING_TIMEOUT_MS
    report_missing_query: bool = True

    def __post_init__(self) -> None:
        if self.pending_timeout_ms <= 0:
            raise ValueError("pending_timeout_ms must be positive")

    @classmethod
    def from_env(cls) -> "EngineSettings":
        return cls(
            pending_timeout_ms=env_int(
                "PENDING_TIMEOUT_MS", DEFAULT_PENDING_TIMEOUT_MS
            ),
            report_missing_query=env_flag("REPORT_MISSING_QUERY", True),
        )


__all__ = [
    "DEFAULT_BUFFER_SIZE",
    "DEFAULT_LOGGER_NAME",
    "ENV_PREFIX",
    "EngineSettings",
    "LogSettings",
    "env",
    "env_flag",
    "env_int",
]
