"""
Sink abstractions for cidlog destinations.

A sink is anything that accepts a formatted line as bytes. That is the whole
contract the routing engine relies on, so plain binary file objects, sockets
wrapped with ``makefile("wb")`` and the built-in sinks all qualify. A sink
that also has ``close()`` is *releasable*: the destination controller
remembers the last releasable sink it was switched to and releases it on
``close()``.

Classes:
    - Sink: Capability to receive bytes
    - Releasable: Capability to be released
    - BaseSink: Base class for the built-in sinks, serializing writes

Writing a custom sink:
    >>> class ListSink(BaseSink):
    ...     def __init__(self):
    ...         super().__init__()
    ...         self.lines = []
    ...
    ...     def _write(self, data: bytes) -> None:
    ...         self.lines.append(data)
"""

import threading
from abc import ABC, abstractmethod
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Sink(Protocol):
    """Somewhere bytes can be written."""

    def write(self, data: bytes) -> Any:
        ...


@runtime_checkable
class Releasable(Protocol):
    """A sink that must be released once it is no longer the destination."""

    def close(self) -> Any:
        ...


def is_releasable(sink: Any) -> bool:
    """Check whether a sink exposes the release capability."""
    return isinstance(sink, Releasable)


class BaseSink(ABC):
    """
    Abstract base class for the built-in sinks.

    Concurrent callers share one sink, so ``write`` holds a per-sink lock
    around ``_write``. A line handed to ``write`` is therefore never
    interleaved with another line, while distinct calls are not ordered
    beyond that.

    Subclasses implement ``_write`` and, when they hold a resource, ``close``.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def write(self, data: bytes) -> int:
        with self._lock:
            self._write(data)
        return len(data)

    @abstractmethod
    def _write(self, data: bytes) -> None:
        """
        Deliver one complete line to the destination.

        Called with the sink lock held.
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
