"""
cidlog - Connection-Oriented Logging

cidlog is a process-wide, level-based text logger that stamps every line with
the process id and, when the caller supplies one, the correlation id of the
unit of work (connection, request, session) producing it. Lines from many
concurrent units of work written to one stream can then be grepped apart.

Key Features:
    - Four levels: info (discarded by default), trace, warn, error
    - ``[pid][cid]`` correlation tags from any object with a ``cid()`` method
    - Runtime destination switching without tearing in-flight writes
    - Release of the installed destination on close
    - Yellow/red hints for warn/error on the default console

Modules:
    correlation: Correlation contexts and tag resolution
    sinks: Destinations for formatted lines
    routing: Severity channels, color hints, destination controller
    core: Settings, diagnostics logging, exceptions

Example:
    >>> import cidlog
    >>> conn = cidlog.Cid()
    >>> cidlog.trace(conn, "accepted", "10.0.0.7:40112")
    >>> cidlog.warnf(conn, "retry %d/%d", 1, 3)
    >>>
    >>> with open("server.log", "ab") as f:
    ...     cidlog.switch(f)
    ...     cidlog.error(None, "disk almost full")
    ...     err = cidlog.close()

Line format:
    2024/05/01 10:22:03.120573 [trace] [4242][101] accepted 10.0.0.7:40112
"""

__version__ = "0.1.0"
__description__ = (
    "Process-wide level logger that tags every line with the process id and "
    "the correlation id of the connection or request producing it."
)

from cidlog.core.config.settings import Settings
from cidlog.core.exceptions.custom_exceptions import CidLogError, SinkReleaseError
from cidlog.correlation.context import Cid, CidContext
from cidlog.routing.channel import Level
from cidlog.routing.levels import (
    Error,
    Info,
    Trace,
    Warn,
    close,
    error,
    errorf,
    info,
    infof,
    init,
    switch,
    trace,
    tracef,
    warn,
    warnf,
)
from cidlog.sinks.builtin import BufferSink, ConsoleSink, DiscardSink, StreamSink

__all__ = [
    "BufferSink",
    "Cid",
    "CidContext",
    "CidLogError",
    "ConsoleSink",
    "DiscardSink",
    "Error",
    "Info",
    "Level",
    "Settings",
    "SinkReleaseError",
    "StreamSink",
    "Trace",
    "Warn",
    "close",
    "error",
    "errorf",
    "info",
    "infof",
    "init",
    "switch",
    "trace",
    "tracef",
    "warn",
    "warnf",
]
