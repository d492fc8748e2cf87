"""Threshold configuration loaded from a TOML file or the environment.

Any problem with the configuration source is logged and the built-in
defaults are used instead, so the clock always starts.
"""

from __future__ import annotations

import logging
import os
import sys
import tomllib
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Mapping


logger = logging.getLogger(__name__)

CONFIG_FILENAME = "breakclock.toml"
ENV_PREFIX = "BREAKCLOCK_"

DEFAULT_WARN_SECONDS = 20 * 60
DEFAULT_ALERT_SECONDS = 25 * 60

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class TimerConfig:
    warn_threshold_seconds: int = DEFAULT_WARN_SECONDS
    alert_threshold_seconds: int = DEFAULT_ALERT_SECONDS
    start_running: bool = True
    always_on_top: bool = False
    window_size: tuple[int, int] = (150, 80)
    window_position: tuple[int, int] = (40, 40)

    def __post_init__(self) -> None:
        for name in ("warn_threshold_seconds", "alert_threshold_seconds"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ConfigError(f"{name} must be a non-negative integer, got {value!r}")
        if self.warn_threshold_seconds >= self.alert_threshold_seconds:
            raise ConfigError(
                "warn_threshold_seconds must be lower than alert_threshold_seconds "
                f"({self.warn_threshold_seconds} >= {self.alert_threshold_seconds})"
            )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> TimerConfig:
        """Build a config from a TOML table; unknown keys are ignored.

        The older keys ``warn_after_minutes``, ``danger_after_minutes`` and
        ``start_unpaused`` are accepted as well; the current keys win over them.
        """
        values: dict[str, Any] = {}

        warn_key, warn = _threshold(data, "warn_threshold_seconds", "warn_after_minutes")
        if warn is not None:
            values["warn_threshold_seconds"] = warn
        alert_key, alert = _threshold(data, "alert_threshold_seconds", "danger_after_minutes")
        if alert is not None:
            values["alert_threshold_seconds"] = alert
        _check_order(warn_key, warn, alert_key, alert)

        for key in ("start_running", "always_on_top"):
            if key in data:
                values[key] = _as_bool(key, data[key])
        if "start_running" not in data and "start_unpaused" in data:
            values["start_running"] = _as_bool("start_unpaused", data["start_unpaused"])
        for key in ("window_size", "window_position"):
            if key in data:
                values[key] = _as_pair(key, data[key])

        return cls(**values)


def default_config_path() -> Path:
    if sys.platform == "win32" and os.environ.get("APPDATA"):
        base = Path(os.environ["APPDATA"])
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    elif os.environ.get("XDG_CONFIG_HOME"):
        base = Path(os.environ["XDG_CONFIG_HOME"])
    else:
        base = Path.home() / ".config"
    return base / CONFIG_FILENAME


def render_config(config: TimerConfig) -> str:
    lines = []
    for key, value in asdict(config).items():
        if isinstance(value, bool):
            rendered = "true" if value else "false"
        elif isinstance(value, (tuple, list)):
            rendered = "[" + ", ".join(str(item) for item in value) + "]"
        else:
            rendered = str(value)
        lines.append(f"{key} = {rendered}")
    return "\n".join(lines) + "\n"


def write_default_config(path: str | Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_config(TimerConfig()), encoding="utf-8")


def load_config_file(path: str | Path | None = None, create: bool = True) -> TimerConfig:
    """Read the TOML config, writing the defaults first if the file is missing."""
    path = Path(path) if path is not None else default_config_path()
    if not path.exists():
        if create:
            try:
                write_default_config(path)
                logger.info("Wrote default config to %s", path)
            except OSError as exc:
                logger.warning("Could not write default config to %s: %s", path, exc)
        return TimerConfig()

    try:
        with path.open("rb") as fh:
            data = tomllib.load(fh)
        config = TimerConfig.from_mapping(data)
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring config %s, using defaults: %s", path, exc)
        return TimerConfig()

    logger.debug("Loaded config from %s: %s", path, config)
    return config


def load_config_env(environ: Mapping[str, str] | None = None) -> TimerConfig:
    environ = os.environ if environ is None else environ
    data: dict[str, Any] = {}
    try:
        for key in ("warn_threshold_seconds", "alert_threshold_seconds"):
            raw = environ.get(ENV_PREFIX + key.upper())
            if raw is not None and raw.strip():
                data[key] = _parse_int(ENV_PREFIX + key.upper(), raw)
        config = TimerConfig.from_mapping(data)
    except ConfigError as exc:
        logger.warning("Ignoring %s* environment, using defaults: %s", ENV_PREFIX, exc)
        return TimerConfig()

    logger.debug("Loaded config from environment: %s", config)
    return config


def _threshold(data: Mapping[str, Any], seconds_key: str, minutes_key: str) -> tuple[str, int | None]:
    if seconds_key in data:
        return seconds_key, _as_int(seconds_key, data[seconds_key])
    if minutes_key in data:
        return minutes_key, _as_int(minutes_key, data[minutes_key]) * 60
    return seconds_key, None


def _check_order(warn_key: str, warn: int | None, alert_key: str, alert: int | None) -> None:
    if warn is None and alert is None:
        return
    warn_source = f"{warn_key}={warn}s" if warn is not None else f"default {warn_key}={DEFAULT_WARN_SECONDS}s"
    alert_source = f"{alert_key}={alert}s" if alert is not None else f"default {alert_key}={DEFAULT_ALERT_SECONDS}s"
    effective_warn = DEFAULT_WARN_SECONDS if warn is None else warn
    effective_alert = DEFAULT_ALERT_SECONDS if alert is None else alert
    if effective_warn >= effective_alert:
        raise ConfigError(f"{warn_source} must be lower than {alert_source}")


def _as_int(key: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{key} must be an integer, got {value!r}")
    return value


def _parse_int(key: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from None


def _as_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
    raise ConfigError(f"{key} must be a boolean, got {value!r}")


def _as_pair(key: str, value: Any) -> tuple[int, int]:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ConfigError(f"{key} must be a list of two numbers, got {value!r}")
    pair = []
    for item in value:
        if isinstance(item, bool) or not isinstance(item, (int, float)):
            raise ConfigError(f"{key} must be a list of two numbers, got {value!r}")
        pair.append(int(item))
    return pair[0], pair[1]
