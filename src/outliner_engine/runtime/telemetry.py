"""Telemetry services built directly on telelog.

Engine code goes through ``get_logger``, ``record_event`` and ``span``;
hosts call ``configure`` once with a preset name, a ``LogSettings`` or a
ready-made ``telelog.Config``. Without a call the configuration comes from
``OUTLINER_ENGINE_*`` environment variables.
"""

from __future__ import annotations

from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

from .config import DEFAULT_BUFFER_SIZE, LogSettings, env

tl = cast(Any, telelog)

LOG_PRESETS: Mapping[str, LogSettings] = MappingProxyType(
    {
        "development": LogSettings(level="DEBUG"),
        "production": LogSettings(
            console=False,
            file="outliner_engine.log",
            buffer_size=DEFAULT_BUFFER_SIZE,
        ),
    }
)

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None
_DEFAULT_LOGGER = LogSettings.from_env().logger_name


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _pairs(data: Mapping[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


def build_config(settings: LogSettings) -> Any:
    """Translate ``settings`` into a ``telelog.Config`` with profiling on."""

    config = tl.Config()
    config.with_min_level(settings.level)
    config.with_console_output(settings.console)
    if settings.console:
        config.with_colored_output(settings.colored)
    config.with_json_format(settings.json)
    if settings.file:
        config.with_file_output(settings.file)
    if settings.buffer_size:
        config.with_buffering(True)
        config.with_buffer_size(settings.buffer_size)
    config.with_profiling(True)
    return config


def preset_settings(preset: str) -> LogSettings:
    try:
        settings = LOG_PRESETS[preset.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown preset '{preset}', expected one of {sorted(LOG_PRESETS)}."
        ) from None
    log_file = env("LOG_FILE")
    if log_file and settings.file:
        settings = replace(settings, file=log_file)
    return settings


def configure(
    *,
    config: Optional[Any] = None,
    preset: Optional[str] = None,
    settings: Optional[LogSettings] = None,
) -> None:
    """Swap the active telelog configuration and drop cached loggers.

    At most one of ``config``, ``preset`` and ``settings`` may be given.
    """

    global _ACTIVE_CONFIG
    if sum(option is not None for option in (config, preset, settings)) > 1:
        raise ValueError("Provide only one of `config`, `preset` or `settings`.")

    if config is not None:
        config.with_profiling(True)
    elif preset is not None:
        config = build_config(preset_settings(preset))
    else:
        config = build_config(settings or LogSettings.from_env())

    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` bound to the active configuration."""

    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = build_config(LogSettings.from_env())
    logger_name = name or _DEFAULT_LOGGER
    logger = _LOGGER_CACHE.get(logger_name)
    if logger is None:
        logger = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
        _LOGGER_CACHE[logger_name] = logger
    return logger


def _level_method(logger: Any, level: Any) -> Tuple[Any, bool]:
    """Pick ``<level>_with`` when the logger has it, else plain ``<level>``."""

    name = str(level).lower()
    with_data = getattr(logger, f"{name}_with", None)
    if with_data is not None:
        return with_data, True
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return plain, False


def _log(logger: Any, level: Any, message: str, payload: Mapping[str, Any]) -> None:
    method, accepts_data = _level_method(logger, level)
    if accepts_data:
        method(message, _pairs(payload))
    else:
        method(f"{message} {dict(payload)}")


def record_event(
    name: str,
    *,
    level: str | Any = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` attached as key/value pairs."""

    payload = {"event": name, **(data or {})}
    _log(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    """Handle yielded by ``span`` for attaching results to the span."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def _emit(
        self, level: str, message: str, extra: Optional[Dict[str, Any]] = None
    ) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload.update(extra or {})
        _log(self.logger, level, message, payload)

    def fail(self, reason: str) -> None:
        self._emit("error", "span::fail", {"reason": reason})


@contextmanager
def _transient_context(logger: Any, metadata: Mapping[str, Any]) -> Iterator[Dict[str, str]]:
    serialized = {key: _stringify(value) for key, value in metadata.items()}
    for key, value in serialized.items():
        logger.add_context(key, value)
    try:
        yield serialized
    finally:
        for key in serialized:
            logger.remove_context(key)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a code block and (optionally) track it as a component.

    Parameters
    ----------
    name:
        Operation name passed to ``logger.profile``.
    logger_name:
        Target logger; defaults to the engine logger.
    component:
        ``True`` reuses ``name`` as the component identifier, a string is used
        verbatim, anything else disables component tracking.
    metadata:
        Values pushed as transient logger context for the duration of the
        block and copied onto the yielded handle.

    Exceptions are reported through ``SpanHandle.fail`` and re-raised.
    """

    log = get_logger(logger_name)
    component_name: Optional[str] = None
    if component is True:
        component_name = name
    elif isinstance(component, str):
        component_name = component

    with ExitStack() as stack:
        context = stack.enter_context(_transient_context(log, metadata or {}))
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        handle = SpanHandle(log, name, component_name, dict(context))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


configure()

__all__ = [
    "LOG_PRESETS",
    "SpanHandle",
    "build_config",
    "configure",
    "get_logger",
    "preset_settings",
    "record_event",
    "span",
]
