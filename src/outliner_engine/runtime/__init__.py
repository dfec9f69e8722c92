"""Process-wide services: telemetry and environment configuration."""

from . import telemetry
from .config import ENV_PREFIX, EngineSettings, LogSettings

__all__ = ["ENV_PREFIX", "EngineSettings", "LogSettings", "telemetry"]
