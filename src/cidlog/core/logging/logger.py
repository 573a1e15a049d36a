"""
Diagnostics logging for cidlog itself.

cidlog is a logger, but it still needs somewhere to report its own trouble:
sink writes that failed and were swallowed, format strings that did not match
their arguments, release failures, destination switches. Those diagnostics
never go through the severity channels (a broken sink would swallow them);
they go through structlog bound loggers backed by a dedicated stdlib
``cidlog`` logger that writes to stderr.

Functions:
    setup_logging(): Attach handlers and build the processor chain
    get_logger(name): Get a diagnostics logger instance

Configuration:
    - CIDLOG_DIAGNOSTICS_LEVEL: Minimum level (default: WARNING)
    - CIDLOG_DIAGNOSTICS_FORMAT: Output format (text/json)
    - CIDLOG_DEBUG: Rich console rendering on stderr

Example:
    >>> from cidlog.core.logging.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.warning("Sink write failed", sink="BufferSink", level="warn")

structlog is wrapped around the ``cidlog`` stdlib logger only; the global
structlog and root logging configuration of the host application is left
untouched.
"""

import logging
import sys
from typing import List, Optional

import structlog
from rich.console import Console
from rich.logging import RichHandler

from cidlog.core.config.settings import Settings, settings as default_settings

DIAGNOSTICS_LOGGER_NAME = "cidlog"

_processors: List = []
_configured = False


class _StderrHandler(logging.StreamHandler):
    """Stream handler bound to whatever sys.stderr is at emit time."""

    def __init__(self) -> None:
        logging.Handler.__init__(self)

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value):
        pass


def setup_logging(config: Optional[Settings] = None) -> None:
    """
    Initialize the diagnostics logging configuration.

    Builds the structlog processor chain and attaches exactly one handler to
    the ``cidlog`` stdlib logger. Calling it again replaces the handler, so it
    can be re-run after settings change.

    The handler is selected from settings:
        - DEBUG: Rich console handler on stderr with tracebacks
        - otherwise: Plain stream handler on stderr

    Args:
        config (Settings, optional): Settings to apply, defaults to the
            module-level settings loaded from the environment
    """
    global _configured
    config = config or default_settings

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if config.DIAGNOSTICS_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    _processors[:] = processors
    _configured = True

    if config.DEBUG:
        console = Console(stderr=True)
        handler = RichHandler(
            console=console,
            show_time=True,
            show_level=True,
            show_path=True,
            markup=False,
            rich_tracebacks=True,
        )
    else:
        handler = _StderrHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
    handler.setLevel(config.DIAGNOSTICS_LEVEL)

    stdlib_logger = logging.getLogger(DIAGNOSTICS_LOGGER_NAME)
    for old in list(stdlib_logger.handlers):
        stdlib_logger.removeHandler(old)
    stdlib_logger.addHandler(handler)
    stdlib_logger.setLevel(config.DIAGNOSTICS_LEVEL)
    stdlib_logger.propagate = False


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a diagnostics logger instance.

    The logger is a child of the ``cidlog`` stdlib logger, so it inherits its
    handler and level.

    Args:
        name (str): Logger name, typically __name__ of the calling module

    Returns:
        structlog.stdlib.BoundLogger: Logger with the diagnostics processors

    Note:
        If logging hasn't been configured yet, this function will
        automatically call setup_logging() to ensure proper initialization.
    """
    if not _configured:
        setup_logging()
    if name != DIAGNOSTICS_LOGGER_NAME and not name.startswith(
        DIAGNOSTICS_LOGGER_NAME + "."
    ):
        name = f"{DIAGNOSTICS_LOGGER_NAME}.{name}"
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_processors,
        wrapper_class=structlog.stdlib.BoundLogger,
    )
