"""
debug.py - Logging and diagnostics for the Connect Four game

This module wraps the standard logging package in a small manager with
named verbosity levels, per-component filtering, an optional log file and
simple performance markers. A single shared instance, ``debug``, is used
by every other module in the package.
"""

import logging
import os
import sys
import threading
import time
from enum import Enum
from typing import Dict, List, Optional, Set

LOGGER_NAME = "connect_four"
TRACE = 5

logging.addLevelName(TRACE, "TRACE")


class DebugLevel(Enum):
    """Verbosity names accepted by --debug_level and CONNECT_FOUR_DEBUG_LEVEL."""
    NONE = 0
    ERROR = 1
    WARNING = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5


LEVEL_MAP = {
    DebugLevel.NONE: logging.CRITICAL + 10,
    DebugLevel.ERROR: logging.ERROR,
    DebugLevel.WARNING: logging.WARNING,
    DebugLevel.INFO: logging.INFO,
    DebugLevel.DEBUG: logging.DEBUG,
    DebugLevel.TRACE: TRACE,
}

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class DebugManager:
    """Routes game diagnostics to the ``connect_four`` logger."""

    def __init__(self):
        self._level = DebugLevel.WARNING
        self._enabled = True
        self._log_file: Optional[str] = None
        self._enabled_components: Set[str] = set()  # empty means all
        self._logger = self._setup_logger()
        self._timers = threading.local()

    def _setup_logger(self) -> logging.Logger:
        """Attach a console handler once and return the package logger."""
        logger = logging.getLogger(LOGGER_NAME)
        logger.setLevel(LEVEL_MAP[self._level])

        if not any(getattr(h, "_connect_four_console", False) for h in logger.handlers):
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S'))
            console_handler._connect_four_console = True
            logger.addHandler(console_handler)

        return logger

    @property
    def level(self) -> DebugLevel:
        return self._level

    @property
    def log_file(self) -> Optional[str]:
        return self._log_file

    def configure(self, level: DebugLevel = None,
                  enabled: bool = None,
                  log_file: str = None,
                  components: List[str] = None):
        """
        Change any of the settings; arguments left as None are untouched.

        ``log_file=""`` detaches the current log file. ``components`` limits
        output to messages tagged with one of the names (board, detector,
        game, env, web, cli); an empty list lets every component through.
        """
        if level is not None:
            self._level = level
            self._logger.setLevel(LEVEL_MAP[level])

        if enabled is not None:
            self._enabled = enabled

        if log_file is not None:
            for handler in self._logger.handlers[:]:
                if isinstance(handler, logging.FileHandler):
                    self._logger.removeHandler(handler)
                    handler.close()

            self._log_file = log_file or None
            if self._log_file:
                file_handler = logging.FileHandler(self._log_file)
                file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
                self._logger.addHandler(file_handler)

        if components is not None:
            self._enabled_components = set(components)

    def configure_from_env(self, environ=None):
        """Apply CONNECT_FOUR_DEBUG_LEVEL and CONNECT_FOUR_LOG_FILE if set."""
        environ = os.environ if environ is None else environ

        level_str = environ.get("CONNECT_FOUR_DEBUG_LEVEL")
        if level_str:
            self.set_from_string(level_str)

        log_file = environ.get("CONNECT_FOUR_LOG_FILE")
        if log_file:
            self.configure(log_file=log_file)

    def _should_log(self, level: DebugLevel, component: str = None) -> bool:
        if not self._enabled or self._level == DebugLevel.NONE:
            return False

        if level.value > self._level.value:
            return False

        if component and self._enabled_components and component not in self._enabled_components:
            return False

        return True

    def log(self, level: DebugLevel, message: str, component: str = None):
        """Emit ``message`` tagged as ``[component]`` if level and filter allow it."""
        if level == DebugLevel.NONE or not self._should_log(level, component):
            return

        if component:
            message = f"[{component}] {message}"

        self._logger.log(LEVEL_MAP[level], message)

    def error(self, message: str, component: str = None):
        self.log(DebugLevel.ERROR, message, component)

    def warning(self, message: str, component: str = None):
        self.log(DebugLevel.WARNING, message, component)

    def info(self, message: str, component: str = None):
        self.log(DebugLevel.INFO, message, component)

    def debug(self, message: str, component: str = None):
        self.log(DebugLevel.DEBUG, message, component)

    def trace(self, message: str, component: str = None):
        self.log(DebugLevel.TRACE, message, component)

    def _markers(self) -> Dict[str, float]:
        if not hasattr(self._timers, "markers"):
            self._timers.markers = {}
        return self._timers.markers

    def start_timer(self, marker_name: str):
        """Start a timer; markers are kept per thread."""
        self._markers()[marker_name] = time.perf_counter()

    def end_timer(self, marker_name: str, component: str = None) -> Optional[float]:
        """Stop a timer, trace the elapsed seconds and return them (None if never started)."""
        started = self._markers().pop(marker_name, None)
        if started is None:
            self.warning(f"Timer '{marker_name}' not started", "debug")
            return None

        elapsed = time.perf_counter() - started
        self.trace(f"{marker_name} took {elapsed:.6f}s", component)
        return elapsed

    def set_from_string(self, level_str: str) -> bool:
        """Set the level by name, case-insensitively. Returns False for unknown names."""
        try:
            level = DebugLevel[level_str.strip().upper()]
        except KeyError:
            self.warning(f"Ignoring unknown log level {level_str!r}")
            return False

        self.configure(level=level)
        self.info(f"Log level is now {level.name}")
        return True


debug = DebugManager()
