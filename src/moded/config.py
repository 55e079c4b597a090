"""Editor settings resolved from ``MODED_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from moded.buffer import DEFAULT_HISTORY_SIZE
from moded.runtime import telemetry

ENV_PREFIX = telemetry.ENV_PREFIX
DEFAULT_LOG_PRESET = "production"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@dataclass(frozen=True, slots=True)
class EditorConfig:
    history_size: int = DEFAULT_HISTORY_SIZE
    highlight: bool = True
    log_preset: str = DEFAULT_LOG_PRESET

    def __post_init__(self) -> None:
        if self.history_size <= 0:
            raise ValueError("history_size must be positive")
        if self.log_preset not in telemetry.PRESETS:
            raise ValueError(
                f"Unknown log preset '{self.log_preset}', "
                f"expected one of {', '.join(telemetry.PRESETS)}"
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EditorConfig":
        """Build a config from the environment, ignoring malformed values."""

        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            history_size=_int_setting(
                env.get(f"{ENV_PREFIX}HISTORY_SIZE"), defaults.history_size
            ),
            highlight=_flag_setting(env.get(f"{ENV_PREFIX}HIGHLIGHT"), defaults.highlight),
            log_preset=_preset_setting(
                env.get(f"{ENV_PREFIX}LOG_PRESET"), defaults.log_preset
            ),
        )

    def override(
        self,
        *,
        history_size: Optional[int] = None,
        highlight: Optional[bool] = None,
        log_preset: Optional[str] = None,
    ) -> "EditorConfig":
        changes = {
            key: value
            for key, value in (
                ("history_size", history_size),
                ("highlight", highlight),
                ("log_preset", log_preset),
            )
            if value is not None
        }
        return replace(self, **changes)


def _int_setting(raw: Optional[str], default: int) -> int:
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        _ignored("HISTORY_SIZE", raw)
        return default
    if value <= 0:
        _ignored("HISTORY_SIZE", raw)
        return default
    return value


def _flag_setting(raw: Optional[str], default: bool) -> bool:
    if raw is None:
        return default
    lowered = raw.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    _ignored("HIGHLIGHT", raw)
    return default


def _preset_setting(raw: Optional[str], default: str) -> str:
    if raw is None:
        return default
    lowered = raw.strip().lower()
    if lowered in telemetry.PRESETS:
        return lowered
    _ignored("LOG_PRESET", raw)
    return default


def _ignored(name: str, raw: str) -> None:
    telemetry.record_event(
        "config.ignored",
        level="warning",
        data={"variable": f"{ENV_PREFIX}{name}", "value": raw},
        logger_name="moded.config",
    )


__all__ = ["DEFAULT_LOG_PRESET", "EditorConfig"]
