"""Environment-driven settings and logging setup.

There is no parameter file; the CLI flags take their defaults from the
environment variables below.
"""

from __future__ import annotations

import logging
import os
import sys

import click

from dereplicator_adapter.errors import InvalidEnvironmentError
from dereplicator_adapter.types import AdapterSettings

DEBUG_ENV = "DEREPLICATOR_ADAPTER_DEBUG"
FORMAT_CHECK_ENV = "DEREPLICATOR_ADAPTER_FORMAT_CHECK"
EXECUTABLE_ENV = "DEREPLICATOR_EXECUTABLE"

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def env_flag(name: str, default: bool) -> bool:
    """Read a boolean variable with the spellings the CLI's ``envvar`` accepts."""
    value = os.getenv(name)
    if not value:
        return default
    try:
        return click.BOOL.convert(value, None, None)
    except click.BadParameter as exc:
        raise InvalidEnvironmentError(name, value) from exc


def debug_enabled() -> bool:
    return env_flag(DEBUG_ENV, False)


def format_check_enabled() -> bool:
    return env_flag(FORMAT_CHECK_ENV, True)


def load_settings() -> AdapterSettings:
    """Build settings from the environment."""
    return AdapterSettings(debug=debug_enabled(), check_formats=format_check_enabled())


def configure_logging(debug: bool) -> logging.Logger:
    """Attach a stderr handler to the package logger once."""
    logger = logging.getLogger("dereplicator_adapter")
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
