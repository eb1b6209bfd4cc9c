"""
Mini-game logging.

Each core module owns a named logger. A session logger can also carry the
id of the game it runs, so one noisy game can be traced without turning
up every other game.

Usage:
    from minigames.logging import get_logger

    log = get_logger('game_loop')                      # [game_loop]
    session_log = get_logger('game_loop', 'gap_hop')   # [game_loop:gap_hop]
    session_log.debug("Spawned entity %d", entity.id)

Configuration:
    Environment variables:
        MINIGAMES_LOG_LEVEL=DEBUG        # Default for every logger
        MINIGAMES_LOG_COLLISION=TRACE    # One core module
        MINIGAMES_LOG_GAP_HOP=TRACE      # Everything logged for one game

    Or programmatically:
        from minigames.logging import configure_logging
        configure_logging(level='DEBUG', modules={'collision': 'TRACE'})

A game-id level wins over a module level, which wins over the default.
"""

import os
import sys
import traceback
from enum import IntEnum
from functools import lru_cache
from typing import Any, Dict, Mapping, Optional, TextIO


class LogLevel(IntEnum):
    """Log levels, numerically compatible with the stdlib logging module."""
    TRACE = 5      # Per-frame detail (spawns, timer fires)
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50
    OFF = 100


ENV_PREFIX = 'MINIGAMES_LOG_'

_ALIASES = {'WARN': LogLevel.WARNING, 'CRIT': LogLevel.CRITICAL}
_LABELS = {LogLevel.WARNING: 'WARN', LogLevel.CRITICAL: 'CRIT'}


def parse_level(name: str) -> LogLevel:
    """Level for a name like ``debug`` or ``WARN``; unknown names mean INFO."""
    key = name.strip().upper()
    if key in _ALIASES:
        return _ALIASES[key]
    try:
        return LogLevel[key]
    except KeyError:
        return LogLevel.INFO


class LogSettings:
    """Process-wide levels and output stream."""

    def __init__(self) -> None:
        self.default = LogLevel.INFO
        self.overrides: Dict[str, LogLevel] = {}
        self.stream: Optional[TextIO] = None   # None = sys.stdout at write time

    def level_for(self, *keys: Optional[str]) -> LogLevel:
        """First override found among ``keys``, else the default."""
        for key in keys:
            if key and key in self.overrides:
                return self.overrides[key]
        return self.default

    def load_environment(self, environ: Mapping[str, str]) -> None:
        """Apply MINIGAMES_LOG_* variables from ``environ``."""
        for name, value in environ.items():
            if not name.startswith(ENV_PREFIX):
                continue
            key = name[len(ENV_PREFIX):].lower()
            if key == 'level':
                self.default = parse_level(value)
            else:
                self.overrides[key] = parse_level(value)


_settings = LogSettings()
_settings.load_environment(os.environ)


def _key(name: str) -> str:
    return name.lower().replace('.', '_').replace('-', '_').replace('/', '_')


def configure_logging(
    level: str = 'INFO',
    modules: Optional[Dict[str, str]] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Configure the logging system.

    Args:
        level: Default log level
        modules: Module name or game id -> level overrides
        stream: File-like object to write to (default: stdout)
    """
    _settings.default = parse_level(level)
    for name, mod_level in (modules or {}).items():
        _settings.overrides[_key(name)] = parse_level(mod_level)
    if stream is not None:
        _settings.stream = stream


class GameLogger:
    """Logger for one core module, optionally tagged with a game id."""

    def __init__(self, module: str, game_id: Optional[str] = None):
        self.module = module
        self.game_id = game_id
        self.name = f"{module}:{game_id}" if game_id else module

    @property
    def level(self) -> LogLevel:
        game_key = _key(self.game_id) if self.game_id else None
        return _settings.level_for(game_key, _key(self.module))

    def _emit(self, level: LogLevel, msg: str, args: tuple, detail: str = "") -> None:
        if level < self.level:
            return
        if args:
            try:
                msg = msg % args
            except (TypeError, ValueError):
                msg = f"{msg} {args}"
        label = _LABELS.get(level, level.name)
        stream = _settings.stream or sys.stdout
        stream.write(f"[{self.name}] {label}: {msg}\n{detail}")

    def trace(self, msg: str, *args: Any) -> None:
        self._emit(LogLevel.TRACE, msg, args)

    def debug(self, msg: str, *args: Any) -> None:
        self._emit(LogLevel.DEBUG, msg, args)

    def info(self, msg: str, *args: Any) -> None:
        self._emit(LogLevel.INFO, msg, args)

    def warning(self, msg: str, *args: Any) -> None:
        self._emit(LogLevel.WARNING, msg, args)

    def error(self, msg: str, *args: Any) -> None:
        self._emit(LogLevel.ERROR, msg, args)

    def critical(self, msg: str, *args: Any) -> None:
        self._emit(LogLevel.CRITICAL, msg, args)

    def exception(self, msg: str, *args: Any, exc: Optional[BaseException] = None) -> None:
        """
        Log an error with the traceback indented below it.

        Args:
            msg: Message describing what failed
            exc: Exception to log (uses the exception being handled if None)
        """
        if exc is None:
            exc = sys.exc_info()[1]
        detail = ""
        if exc is not None:
            formatted = ''.join(traceback.format_exception(type(exc), exc, exc.__traceback__))
            detail = ''.join(f"    {line}\n" for line in formatted.splitlines() if line.strip())
        self._emit(LogLevel.ERROR, msg, args, detail)


@lru_cache(maxsize=128)
def get_logger(module: str, game_id: Optional[str] = None) -> GameLogger:
    """
    Get the cached logger for ``module`` (and ``game_id``, for session logs).

    Args:
        module: Core module name (e.g., 'game_loop', 'collision', 'storage')
        game_id: Game the messages belong to, if any
    """
    return GameLogger(module, game_id)
