"""
Public entry points, one per severity.

``Info``, ``Trace``, ``Warn`` and ``Error`` are stable objects: they look up
the controller's current binding on every call, so holding on to one (or
importing it by name) keeps working across ``switch`` and ``close``.

Example:
    >>> from cidlog import Cid, Trace, warnf
    >>> conn = Cid()
    >>> Trace.println(conn, "accepted", "127.0.0.1:51022")
    >>> warnf(conn, "slow handshake, %dms", 830)
    >>> Trace.println(None, "listener ready")   # tag: [pid]
    >>> Trace.println("raw", "no tag at all")   # passthrough
"""

from typing import Any, Optional

from cidlog.core.exceptions.custom_exceptions import SinkReleaseError
from cidlog.routing.channel import Level
from cidlog.routing.controller import DestinationController, get_controller
from cidlog.sinks.base import Sink


class LevelLogger:
    """
    Entry point for one severity.

    Args:
        level (Level): Severity written by this logger
        controller (DestinationController, optional): Registry to route
            through, the process-wide one by default
    """

    def __init__(
        self, level: Level, controller: Optional[DestinationController] = None
    ) -> None:
        self.level = level
        self._controller = controller

    @property
    def controller(self) -> DestinationController:
        return self._controller or get_controller()

    def println(self, ctx: Any, *args: Any) -> None:
        """
        Log the space-separated arguments.

        Args:
            ctx: Correlation context, None for the process tag only, or any
                other value to skip tagging
        """
        self.controller.println(self.level, ctx, *args)

    def printf(self, ctx: Any, fmt: str, *args: Any) -> None:
        """Log a %-formatted message."""
        self.controller.printf(self.level, ctx, fmt, *args)

    def __repr__(self) -> str:
        return f"LevelLogger({self.level.name})"


# Info, the verbose level, discarded unless explicitly routed.
Info = LevelLogger(Level.INFO)
# Trace, something important, the default level, to stdout.
Trace = LevelLogger(Level.TRACE)
# Warn, dangerous information, to stdout in yellow.
Warn = LevelLogger(Level.WARN)
# Error, failures, to stdout in red.
Error = LevelLogger(Level.ERROR)


def info(ctx: Any, *args: Any) -> None:
    Info.println(ctx, *args)


def infof(ctx: Any, fmt: str, *args: Any) -> None:
    Info.printf(ctx, fmt, *args)


def trace(ctx: Any, *args: Any) -> None:
    Trace.println(ctx, *args)


def tracef(ctx: Any, fmt: str, *args: Any) -> None:
    Trace.printf(ctx, fmt, *args)


def warn(ctx: Any, *args: Any) -> None:
    Warn.println(ctx, *args)


def warnf(ctx: Any, fmt: str, *args: Any) -> None:
    Warn.printf(ctx, fmt, *args)


def error(ctx: Any, *args: Any) -> None:
    Error.println(ctx, *args)


def errorf(ctx: Any, fmt: str, *args: Any) -> None:
    Error.printf(ctx, fmt, *args)


def switch(sink: Sink) -> None:
    """
    Switch the process-wide destination.

    The caller must close the previous sink; the logger never closes it
    during a switch.
    """
    get_controller().switch(sink)


def close() -> Optional[SinkReleaseError]:
    """Discard all logs until the next switch and release the tracked sink."""
    return get_controller().close()


def init() -> None:
    """Restore the default destinations."""
    get_controller().init()
