"""Logging setup for suite-runner.

All diagnostics go to stderr. stdout is reserved for the result document
read by the host.
"""

import logging
import sys
from typing import Dict, Optional, TextIO

ROOT_LOGGER = "suite_runner"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

_loggers: Dict[str, logging.Logger] = {}
_logging_configured = False


def setup_logging(
    level: int = logging.WARNING,
    stream: Optional[TextIO] = None,
    force_reconfigure: bool = False,
) -> None:
    """Attach a single stderr handler to the suite_runner logger.

    Args:
        level: Logging level for the suite_runner hierarchy.
        stream: Output stream. Defaults to sys.stderr.
        force_reconfigure: Replace an existing configuration.
    """
    global _logging_configured

    if _logging_configured and not force_reconfigure:
        return

    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)

    # Keep our records out of the framework's own log capture
    root_logger.propagate = False

    _logging_configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger below the suite_runner hierarchy.

    Args:
        name: Logger name, e.g. 'suite_runner.runner'.
    """
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"

    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)

    return _loggers[name]
