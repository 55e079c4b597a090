"""Telemetry services for the editor, built on telelog.

Everything else in the package goes through a handful of entry points:

``configure(...)`` -- pick a preset or an explicit telelog configuration
``get_logger(name)`` -- fetch (and cache) a configured component logger
``record_event(name, ...)`` -- emit a structured ``event::<name>`` line
``span(name, ...)`` -- profile a block and optionally track it as a component
``session(...)`` -- tag every line logged while a document is open

The editor owns the terminal while it runs, so only the ``development``
preset (and the environment default, unless disabled) writes to the console.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, List, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "MODED_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "moded")

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None
_SESSION_CONTEXT: Dict[str, str] = {}


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _pairs(data: Dict[str, Any]) -> List[Tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


@dataclass(frozen=True)
class LogSettings:
    """Plain description of a telelog configuration."""

    level: str = "INFO"
    console: bool = True
    colour: bool = True
    json: bool = False
    log_file: str = ""
    buffer_size: Optional[int] = None

    def build(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level.upper())
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.colour)
        if self.json:
            config.with_json_format(True)
        if self.log_file:
            config.with_file_output(self.log_file)
        if self.buffer_size is not None:
            config.with_buffering(True)
            config.with_buffer_size(self.buffer_size)
        config.with_profiling(True)
        return config


_PRESET_SETTINGS: Dict[str, LogSettings] = {
    "development": LogSettings(level="DEBUG"),
    "production": LogSettings(console=False, log_file="moded.log", buffer_size=2048),
    "performance": LogSettings(
        level="DEBUG",
        console=False,
        json=True,
        log_file="moded-performance.log",
        buffer_size=2048,
    ),
}

PRESETS = tuple(_PRESET_SETTINGS)


def preset_settings(preset: str) -> LogSettings:
    """Settings for ``preset``; ``MODED_LOG_FILE`` overrides its file."""

    try:
        settings = _PRESET_SETTINGS[preset.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown preset '{preset}', expected one of {', '.join(PRESETS)}"
        ) from None
    log_file = _env("LOG_FILE")
    if log_file and settings.log_file:
        settings = replace(settings, log_file=log_file)
    return settings


def env_settings() -> LogSettings:
    buffered = _env_flag("LOG_BUFFERED", False)
    return LogSettings(
        level=_env("LOG_LEVEL") or "INFO",
        console=not _env_flag("DISABLE_CONSOLE", False),
        colour=not _env_flag("NO_COLOR", False),
        json=_env_flag("LOG_JSON", False),
        log_file=_env("LOG_FILE") or "",
        buffer_size=int(_env("LOG_BUFFER_SIZE") or "2048") if buffered else None,
    )


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Replace the active telelog configuration.

    ``config`` and ``preset`` are mutually exclusive. With neither, the
    configuration is rebuilt from the ``MODED_*`` environment variables.
    Cached loggers are dropped so the next ``get_logger`` call picks up the
    new settings.
    """

    global _ACTIVE_CONFIG
    if config and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset:
        config = preset_settings(preset).build()
    elif config is None:
        config = env_settings().build()

    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def _ensure_config() -> Any:
    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = env_settings().build()
    return _ACTIVE_CONFIG


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` for ``name``.

    Loggers created during a ``session`` start with its context attached.
    """

    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        log = tl.Logger.with_config(logger_name, _ensure_config())
        for key, value in _SESSION_CONTEXT.items():
            log.add_context(key, value)
        _LOGGER_CACHE[logger_name] = log
    return _LOGGER_CACHE[logger_name]


def _log(log: Any, level: Any, message: str, payload: Dict[str, Any]) -> None:
    """Log through ``<level>_with`` when telelog offers it, else inline the payload."""

    level_name = str(level).lower()
    structured = getattr(log, f"{level_name}_with", None)
    if structured is not None:
        structured(message, _pairs(payload))
        return
    plain = getattr(log, level_name, None)
    if plain is None:
        raise ValueError(f"Unknown log level {level!r}")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str | Any = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit a structured ``event::<name>`` line."""

    _log(
        get_logger(logger_name),
        level,
        f"event::{name}",
        {"event": name, **(data or {})},
    )


@dataclass
class SpanHandle:
    """Handle yielded by ``span`` for attaching metadata mid-flight."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def fail(self, reason: str) -> None:
        payload = {"span": self.span_name, **self.metadata, "reason": reason}
        if self.component_name:
            payload["component"] = self.component_name
        _log(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a code block and, if ``component`` is set, track it.

    ``component=True`` reuses ``name`` as the component id; a string names
    the component explicitly. ``metadata`` is pushed as logger context for
    the duration of the block. Exceptions are logged through
    ``SpanHandle.fail`` and re-raised.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else component or None
    serialized = {key: _stringify(value) for key, value in (metadata or {}).items()}

    with ExitStack() as stack:
        for key, value in serialized.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))

        handle = SpanHandle(
            logger=log,
            span_name=name,
            component_name=cast(Optional[str], component_name),
            metadata=dict(serialized),
        )
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


@contextmanager
def session(**context: Any) -> Iterator[None]:
    """Attach ``context`` to every logger for the duration of an editing session."""

    added: List[str] = []
    for key, value in context.items():
        serialized = _stringify(value)
        _SESSION_CONTEXT[key] = serialized
        added.append(key)
        for log in _LOGGER_CACHE.values():
            log.add_context(key, serialized)
    try:
        yield
    finally:
        for key in added:
            _SESSION_CONTEXT.pop(key, None)
            for log in _LOGGER_CACHE.values():
                log.remove_context(key)


configure()
logger = get_logger()

__all__ = [
    "PRESETS",
    "LogSettings",
    "SpanHandle",
    "configure",
    "env_settings",
    "get_logger",
    "preset_settings",
    "record_event",
    "session",
    "span",
    "logger",
]
