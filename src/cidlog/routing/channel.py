"""
Severity levels and the channel that writes one level's lines.

A :class:`SeverityChannel` binds a level to a sink. It is frozen: the
destination controller never mutates a channel, it builds new ones and swaps
them in, so a writer holding a channel always sees a consistent binding.

Every call performs exactly one write of one complete line::

    2024/05/01 10:22:03.120573 [warn] [4242][101] upstream slow, rtt=830ms

The write is fire and forget. A sink that raises does not reach the caller;
the failure is reported through the package diagnostics and the line is lost.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Sequence

from cidlog.core.logging.logger import get_logger
from cidlog.correlation.resolver import resolve_tag
from cidlog.sinks.base import Sink

logger = get_logger(__name__)

TIMESTAMP_FORMAT = "%Y/%m/%d %H:%M:%S.%f"
LINE_ENCODING = "utf-8"


class Level(Enum):
    """
    The four severities, lowest first.

    Attributes:
        INFO: Verbose detail, discarded unless explicitly routed
        TRACE: Something important, the default level
        WARN: Dangerous situations
        ERROR: Failures
    """

    INFO = "info"
    TRACE = "trace"
    WARN = "warn"
    ERROR = "error"

    @property
    def label(self) -> str:
        return f"[{self.value}]"


def render_args(tag: Optional[str], args: Sequence[Any]) -> str:
    """Join the arguments with spaces behind the correlation tag, if any."""
    message = " ".join(str(a) for a in args)
    return message if tag is None else tag + message


def render_format(fmt: str, args: Sequence[Any]) -> str:
    """
    Apply %-formatting to the caller's format without ever raising.

    With no arguments the format is emitted literally. A mismatched format is
    emitted literally followed by its arguments. The correlation tag is added
    afterwards, so neither case can disturb it.
    """
    if not args:
        return fmt
    try:
        return fmt % tuple(args)
    except (TypeError, ValueError, KeyError) as e:
        logger.warning(
            "Format string does not match arguments", format=fmt, error=str(e)
        )
        return " ".join([fmt] + [str(a) for a in args])


@dataclass(frozen=True)
class SeverityChannel:
    """
    Binding of one level to its sink.

    Attributes:
        level (Level): Severity of the lines written here
        sink (Sink): Current destination
        timestamps (bool): Prefix lines with date and microsecond time
    """

    level: Level
    sink: Sink
    timestamps: bool = True

    def decorate(self, message: str, now: Optional[datetime] = None) -> str:
        if not message.endswith("\n"):
            message += "\n"
        if not self.timestamps:
            return f"{self.level.label} {message}"
        now = now or datetime.now()
        return f"{now.strftime(TIMESTAMP_FORMAT)} {self.level.label} {message}"

    def println(self, ctx: Any, *args: Any) -> None:
        """
        Write the space-separated arguments as one line.

        Args:
            ctx: Execution context, None, or any passthrough value
            *args: Values rendered with str()
        """
        self._emit(render_args(resolve_tag(ctx), args))

    def printf(self, ctx: Any, fmt: str, *args: Any) -> None:
        """
        Write a %-formatted line.

        Args:
            ctx: Execution context, None, or any passthrough value
            fmt: printf-style format
            *args: Format arguments
        """
        message = render_format(fmt, args)
        tag = resolve_tag(ctx)
        self._emit(message if tag is None else tag + message)

    def _emit(self, message: str) -> None:
        line = self.decorate(message).encode(LINE_ENCODING, errors="replace")
        try:
            self.sink.write(line)
        except Exception as e:
            logger.debug(
                "Sink write failed, line dropped",
                level=self.level.value,
                sink=repr(self.sink),
                error=str(e),
            )
