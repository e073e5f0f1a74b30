"""Logging and profiling for the editor, on top of telelog.

The editor owns the terminal, so the app sends everything to a file through
``setup_logging(verbosity)``. Library and test use fall back to settings read
from ``MODAL_EDIT_*`` variables the first time a logger is requested.

``get_logger(name)`` returns a cached ``telelog.Logger``; ``record_event``
writes one structured ``event::<name>`` line; ``span`` profiles a block and
logs ``span::fail`` if it raises.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "MODAL_EDIT_"
DEFAULT_LOGGER_NAME = "modal_edit"
DEFAULT_LOG_FILE = "output.log"

# Index is the numeric verbosity accepted on the command line.
VERBOSITY_LEVELS: Tuple[str, ...] = ("ERROR", "WARNING", "INFO", "DEBUG")

_loggers: Dict[str, Any] = {}
_settings: Optional["LogSettings"] = None


def level_for_verbosity(verbosity: int) -> str:
    index = max(0, min(verbosity, len(VERBOSITY_LEVELS) - 1))
    return VERBOSITY_LEVELS[index]


def _flag(env: Mapping[str, str], name: str) -> bool:
    return env.get(f"{ENV_PREFIX}{name}", "").lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class LogSettings:
    """Declarative form of a ``telelog.Config``."""

    level: str = "INFO"
    console: bool = True
    colored: bool = True
    json: bool = False
    file: Optional[str] = None
    buffer_size: Optional[int] = None

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "LogSettings":
        source = os.environ if env is None else env
        buffer_size = None
        if _flag(source, "LOG_BUFFERED"):
            raw_size = source.get(f"{ENV_PREFIX}LOG_BUFFER_SIZE", "")
            buffer_size = int(raw_size) if raw_size.isdigit() else 2048
        return cls(
            level=source.get(f"{ENV_PREFIX}LOG_LEVEL", "INFO").upper(),
            console=not _flag(source, "DISABLE_CONSOLE"),
            colored=not _flag(source, "NO_COLOR"),
            json=_flag(source, "LOG_JSON"),
            file=source.get(f"{ENV_PREFIX}LOG_FILE") or None,
            buffer_size=buffer_size,
        )

    @classmethod
    def preset(cls, name: str) -> "LogSettings":
        presets = {
            "development": cls(level="DEBUG"),
            "quiet": cls(level="ERROR", console=False),
            "file": cls(console=False, file=DEFAULT_LOG_FILE),
        }
        try:
            return presets[name.lower()]
        except KeyError as exc:
            raise ValueError(f"Unknown preset '{name}'.") from exc

    def to_config(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level)
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.colored)
        if self.json:
            config.with_json_format(True)
        if self.file:
            config.with_file_output(self.file)
        if self.buffer_size:
            config.with_buffering(True)
            config.with_buffer_size(self.buffer_size)
        config.with_profiling(True)
        return config


def configure(
    settings: Optional[LogSettings] = None, *, preset: Optional[str] = None
) -> LogSettings:
    """Install new settings (explicit, a named preset, or from the environment).

    Loggers handed out earlier keep their old configuration; callers that
    cache loggers across a reconfigure should fetch them again.
    """

    global _settings
    if settings is not None and preset is not None:
        raise ValueError("Provide either `settings` or `preset`, not both.")
    if preset is not None:
        settings = LogSettings.preset(preset)
    _settings = settings or LogSettings.from_env()
    _loggers.clear()
    return _settings


def setup_logging(
    verbosity: int, *, log_file: str | os.PathLike[str] | None = None
) -> Path:
    """Log only to ``log_file`` (truncated first) at the given verbosity."""

    env_file = os.environ.get(f"{ENV_PREFIX}LOG_FILE")
    path = Path(log_file or env_file or DEFAULT_LOG_FILE)
    path.write_text("", encoding="utf-8")
    configure(
        replace(
            LogSettings.preset("file"),
            level=level_for_verbosity(verbosity),
            file=str(path),
        )
    )
    return path


def get_logger(name: Optional[str] = None) -> Any:
    logger_name = name or DEFAULT_LOGGER_NAME
    logger = _loggers.get(logger_name)
    if logger is None:
        settings = _settings if _settings is not None else configure()
        logger = tl.Logger.with_config(logger_name, settings.to_config())
        _loggers[logger_name] = logger
    return logger


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _emit(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    """Log ``message`` with key/value data, using ``<level>_with`` if present."""

    name = level.lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        structured(message, [(str(k), _text(v)) for k, v in payload.items()])
        return
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    payload = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload["reason"] = reason
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def _logger_context(logger: Any, values: Dict[str, str]) -> Iterator[None]:
    pushed: List[str] = []
    try:
        for key, value in values.items():
            logger.add_context(key, value)
            pushed.append(key)
        yield
    finally:
        for key in pushed:
            logger.remove_context(key)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the block as ``name``.

    ``component=True`` also tracks it as a component of the same name, a
    string names the component. ``metadata`` is attached as logger context
    while the block runs.
    """

    logger = get_logger(logger_name)
    component_name = component if isinstance(component, str) else None
    if component is True:
        component_name = name
    values = {key: _text(value) for key, value in (metadata or {}).items()}
    handle = SpanHandle(
        logger=logger,
        span_name=name,
        component_name=component_name,
        metadata=dict(values),
    )
    with ExitStack() as stack:
        stack.enter_context(_logger_context(logger, values))
        if component_name:
            stack.enter_context(logger.track_component(component_name))
        stack.enter_context(logger.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


__all__ = [
    "LogSettings",
    "SpanHandle",
    "configure",
    "setup_logging",
    "level_for_verbosity",
    "get_logger",
    "record_event",
    "span",
]
