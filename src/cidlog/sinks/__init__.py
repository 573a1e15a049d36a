"""
Destinations for formatted log lines.
"""

from cidlog.sinks.base import BaseSink, Releasable, Sink, is_releasable
from cidlog.sinks.builtin import BufferSink, ConsoleSink, DiscardSink, StreamSink

__all__ = [
    "BaseSink",
    "BufferSink",
    "ConsoleSink",
    "DiscardSink",
    "Releasable",
    "Sink",
    "StreamSink",
    "is_releasable",
]
