"""Telemetry services built on :mod:`logging` with rich console output.

This module exposes a narrow surface area for the rest of the engine:

``configure(...)`` -- override or preset the logging configuration
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit structured events at a chosen level
``span(name, ...)`` -- context manager timing a block and tagging its component
"""

from __future__ import annotations

import json
import logging
import os
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, MutableMapping, Optional

from rich.console import Console
from rich.logging import RichHandler

ENV_PREFIX = "VIBEVIM_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "vibevim")
DEFAULT_LOG_FILE = os.getenv(f"{ENV_PREFIX}LOG_FILE", "")

_LOGGER_CACHE: MutableMapping[str, logging.Logger] = {}
_ACTIVE_CONFIG: Optional["TelemetryConfig"] = None


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


def _format_pairs(data: Dict[str, Any]) -> str:
    return " ".join(f"{key}={_stringify(value)}" for key, value in data.items())


class JsonFormatter(logging.Formatter):
    """One JSON object per record, structured fields merged in."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        fields = getattr(record, "fields", None)
        if isinstance(fields, dict):
            payload.update({key: _stringify(val) for key, val in fields.items()})
        return json.dumps(payload, ensure_ascii=False)


@dataclass
class TelemetryConfig:
    """Declarative logging setup applied to the engine's root logger."""

    min_level: str = "INFO"
    console_output: bool = False
    colored_output: bool = True
    json_format: bool = False
    file_output: Optional[str] = None

    def with_min_level(self, level: str) -> "TelemetryConfig":
        self.min_level = level.upper()
        return self

    def with_console_output(self, enabled: bool) -> "TelemetryConfig":
        self.console_output = enabled
        return self

    def with_colored_output(self, enabled: bool) -> "TelemetryConfig":
        self.colored_output = enabled
        return self

    def with_json_format(self, enabled: bool) -> "TelemetryConfig":
        self.json_format = enabled
        return self

    def with_file_output(self, path: str) -> "TelemetryConfig":
        self.file_output = path
        return self

    def build_handlers(self) -> List[logging.Handler]:
        handlers: List[logging.Handler] = []
        if self.console_output:
            console = Console(stderr=True, no_color=not self.colored_output)
            handlers.append(
                RichHandler(console=console, show_path=False, rich_tracebacks=True)
            )
        if self.file_output:
            file_handler = logging.FileHandler(self.file_output, encoding="utf-8")
            if self.json_format:
                file_handler.setFormatter(JsonFormatter())
            else:
                file_handler.setFormatter(
                    logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
                )
            handlers.append(file_handler)
        if not handlers:
            handlers.append(logging.NullHandler())
        return handlers


def _resolve_level() -> str:
    return (_env("LOG_LEVEL") or "INFO").upper()


def _build_preset_config(preset: str) -> TelemetryConfig:
    config = TelemetryConfig()
    key = preset.lower()

    if key == "development":
        config.with_min_level("DEBUG")
        config.with_console_output(True)
        config.with_colored_output(True)
        config.with_json_format(False)
    elif key == "production":
        config.with_min_level("INFO")
        config.with_console_output(False)
        log_path = _env("LOG_FILE", DEFAULT_LOG_FILE) or "vibevim.log"
        config.with_file_output(log_path)
    elif key in {"performance", "performance_analysis"}:
        config.with_min_level("DEBUG")
        config.with_console_output(False)
        config.with_json_format(True)
        log_path = _env("LOG_FILE", DEFAULT_LOG_FILE) or "vibevim-performance.log"
        config.with_file_output(log_path)
    else:
        raise ValueError(f"Unknown preset '{preset}'.")

    return config


def _build_default_config() -> TelemetryConfig:
    config = TelemetryConfig()
    config.with_min_level(_resolve_level())

    # The host owns the terminal, so console output is opt-in.
    if _env_flag("LOG_CONSOLE", False):
        config.with_console_output(True)
        config.with_colored_output(not _env_flag("NO_COLOR", False))

    if _env_flag("LOG_JSON", False):
        config.with_json_format(True)

    log_file = _env("LOG_FILE") or DEFAULT_LOG_FILE
    if log_file:
        config.with_file_output(log_file)

    return config


def _apply(config: TelemetryConfig) -> None:
    root = logging.getLogger(DEFAULT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in config.build_handlers():
        root.addHandler(handler)
    root.setLevel(config.min_level)
    root.propagate = False


def configure(
    *, config: Optional[TelemetryConfig] = None, preset: Optional[str] = None
) -> None:
    """Override the active logging configuration.

    Parameters
    ----------
    config:
        Explicit ``TelemetryConfig`` instance to adopt.
    preset:
        Named preset (``"development"``, ``"production"``, ``"performance"``).
        ``config`` and ``preset`` are mutually exclusive.
    """

    global _ACTIVE_CONFIG
    if config and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset:
        config = _build_preset_config(preset)
    elif config is None:
        config = _build_default_config()

    _ACTIVE_CONFIG = config
    _apply(config)
    _LOGGER_CACHE.clear()


def _ensure_config() -> TelemetryConfig:
    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        configure()
    assert _ACTIVE_CONFIG is not None
    return _ACTIVE_CONFIG


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a cached logger living under the engine's root logger."""

    _ensure_config()
    logger_name = name or DEFAULT_LOGGER_NAME
    if not logger_name.startswith(DEFAULT_LOGGER_NAME):
        logger_name = f"{DEFAULT_LOGGER_NAME}.{logger_name}"
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = logging.getLogger(logger_name)
    return _LOGGER_CACHE[logger_name]


def _level_number(level: str | int) -> int:
    if isinstance(level, int):
        return level
    name = str(level).upper()
    if name == "WARN":
        name = "WARNING"
    number = logging.getLevelName(name)
    if not isinstance(number, int):
        raise ValueError(f"Unsupported log level '{level}'.")
    return number


def record_event(
    name: str,
    *,
    level: str | int = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit a structured ``event::<name>`` record."""

    log = get_logger(logger_name)
    payload = {"event": name, **(data or {})}
    log.log(
        _level_number(level),
        "event::%s %s",
        name,
        _format_pairs(payload),
        extra={"fields": payload},
    )


@dataclass
class SpanHandle:
    """Handle returned from ``span`` for optional metadata updates."""

    logger: logging.Logger
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    failed: bool = False

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def _emit(
        self, level: str, message: str, extra: Optional[Dict[str, Any]] = None
    ) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        if extra:
            payload.update({key: _stringify(val) for key, val in extra.items()})
        self.logger.log(
            _level_number(level),
            "%s %s",
            message,
            _format_pairs(payload),
            extra={"fields": payload},
        )

    def fail(self, reason: str) -> None:
        self.failed = True
        self._emit("error", "span::fail", {"reason": reason})

    def cancel(self, reason: str | None = None) -> None:
        extra = {"reason": reason} if reason else None
        self._emit("warning", "span::cancel", extra)

    def finish(self, elapsed_ms: float) -> None:
        self._emit("debug", "span::end", {"elapsed_ms": f"{elapsed_ms:.3f}"})


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Time a code block and (optionally) tag it with a component.

    Parameters
    ----------
    name:
        Operation name written on the ``span::end`` record.
    logger_name:
        Target logger; defaults to the engine logger.
    component:
        If ``True`` use the same name as the span; if a string, use it as the
        component identifier.
    metadata:
        Optional metadata attached to every record the span emits.
    """

    log = get_logger(logger_name)
    component_name = None
    if component is True:
        component_name = name
    elif isinstance(component, str):
        component_name = component

    handle = SpanHandle(
        logger=log,
        span_name=name,
        component_name=component_name,
        metadata={key: _stringify(value) for key, value in (metadata or {}).items()},
    )
    started = time.perf_counter()
    try:
        yield handle
    except Exception as exc:
        handle.fail(str(exc))
        raise
    finally:
        if log.isEnabledFor(logging.DEBUG):
            handle.finish((time.perf_counter() - started) * 1000.0)


# Initialize the module-level logger once the config is ready.
configure()
logger = get_logger()

__all__ = [
    "JsonFormatter",
    "SpanHandle",
    "TelemetryConfig",
    "configure",
    "get_logger",
    "record_event",
    "span",
    "logger",
]
