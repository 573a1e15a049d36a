"""
Destination controller: the process-wide registry of channel bindings.

The controller owns the four severity channels and the single releasable sink
it may owe a release to. Its only mutators are ``init``, ``switch`` and
``close``; each builds a complete new :class:`Bindings` snapshot and swaps it
in under one lock. Writers never take that lock. They read the current
snapshot once and write through it, so a write racing a switch lands on
either the old or the new destination, never on a half-updated one.

State machine::

    DEFAULT --switch--> CUSTOM --switch--> CUSTOM --close--> DISCARDED
                                                                |
                           CUSTOM <-----------switch------------+

``init`` is the only way back to DEFAULT.

Release contract:
    ``switch`` never releases the sink it replaces; the caller owns that.
    The controller only tracks the most recent releasable sink passed to
    ``switch`` and releases it on ``close``. A non-releasable sink does not
    clear the tracked one.
"""

import io
import threading
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from cidlog.core.config.settings import Settings, settings as default_settings
from cidlog.core.exceptions.custom_exceptions import SinkReleaseError
from cidlog.core.logging.logger import get_logger
from cidlog.routing.channel import Level, SeverityChannel
from cidlog.routing.color import ColorAnnotator
from cidlog.sinks.base import Sink, is_releasable
from cidlog.sinks.builtin import ConsoleSink, DiscardSink, StreamSink

logger = get_logger(__name__)


class ControllerState(Enum):
    """
    Where the non-info levels currently write.

    Attributes:
        DEFAULT: The process console, with color hints
        CUSTOM: A sink installed by switch
        DISCARDED: Nowhere, after close
    """

    DEFAULT = "default"
    CUSTOM = "custom"
    DISCARDED = "discarded"


@dataclass(frozen=True)
class Bindings:
    """Immutable snapshot of the four channels and the controller state."""

    state: ControllerState
    channels: Mapping[Level, SeverityChannel]

    def channel(self, level: Level) -> SeverityChannel:
        return self.channels[level]


def _bindings(state: ControllerState, info: Sink, others: Sink) -> Bindings:
    channels = {Level.INFO: SeverityChannel(Level.INFO, info)}
    for level in (Level.TRACE, Level.WARN, Level.ERROR):
        channels[level] = SeverityChannel(level, others)
    return Bindings(state=state, channels=MappingProxyType(channels))


class DestinationController:
    """
    Registry of the current channel bindings.

    Args:
        console (ConsoleSink, optional): Default destination, standard output
            unless given
        config (Settings, optional): Settings, defaults to the environment
    """

    def __init__(
        self,
        console: Optional[ConsoleSink] = None,
        config: Optional[Settings] = None,
    ) -> None:
        config = config or default_settings
        self._lock = threading.Lock()
        self._console = console or ConsoleSink()
        self._discard = DiscardSink()
        self._annotator = ColorAnnotator(self._console, enabled=config.COLOR)
        self._tracked: Optional[Any] = None
        self._bindings = _bindings(
            ControllerState.DEFAULT, self._discard, self._console
        )

    @property
    def bindings(self) -> Bindings:
        return self._bindings

    @property
    def state(self) -> ControllerState:
        return self._bindings.state

    @property
    def tracked_sink(self) -> Optional[Any]:
        """The releasable sink close() would release, if any."""
        return self._tracked

    def init(self) -> None:
        """
        Restore the default bindings.

        Info is discarded; trace, warn and error go to the console. The
        tracked sink is forgotten without being released.
        """
        with self._lock:
            self._bindings = _bindings(
                ControllerState.DEFAULT, self._discard, self._console
            )
            self._tracked = None

    def switch(self, sink: Sink) -> None:
        """
        Route trace, warn and error to ``sink``; info is discarded.

        The sink active before this call is not released; the caller must
        close it. If ``sink`` has ``close()`` it replaces the tracked sink.
        Text streams (``io.StringIO``, ``open(path, "w")``) are wrapped in a
        :class:`StreamSink`, whose ``close()`` closes the stream.

        Raises:
            TypeError: If ``sink`` has no ``write`` method
        """
        if not isinstance(sink, Sink):
            raise TypeError(
                f"sink must have a write() method, got {type(sink).__name__}"
            )
        if isinstance(sink, io.TextIOBase):
            sink = StreamSink(sink)
        new = _bindings(ControllerState.CUSTOM, self._discard, sink)
        with self._lock:
            self._bindings = new
            if is_releasable(sink):
                self._tracked = sink
        logger.debug("Destination switched", sink=repr(sink))

    def close(self) -> Optional[SinkReleaseError]:
        """
        Discard all levels and release the tracked sink.

        The release runs after the bindings lock is dropped, so a slow
        ``close()`` never holds up writers or switches.

        Returns:
            Optional[SinkReleaseError]: The release failure, or None when the
            release succeeded or nothing was tracked
        """
        with self._lock:
            self._bindings = _bindings(
                ControllerState.DISCARDED, self._discard, self._discard
            )
            tracked, self._tracked = self._tracked, None

        if tracked is None:
            return None
        try:
            tracked.close()
        except Exception as e:
            logger.warning("Sink release failed", sink=repr(tracked), error=str(e))
            return SinkReleaseError(tracked, e)
        logger.debug("Sink released", sink=repr(tracked))
        return None

    def println(self, level: Level, ctx: Any, *args: Any) -> None:
        bindings = self._bindings
        channel = bindings.channel(level)
        self._annotator.wrap(
            level,
            bindings.state is ControllerState.DEFAULT,
            lambda: channel.println(ctx, *args),
        )

    def printf(self, level: Level, ctx: Any, fmt: str, *args: Any) -> None:
        bindings = self._bindings
        channel = bindings.channel(level)
        self._annotator.wrap(
            level,
            bindings.state is ControllerState.DEFAULT,
            lambda: channel.printf(ctx, fmt, *args),
        )


_controller = DestinationController()


def get_controller() -> DestinationController:
    """Get the process-wide controller."""
    return _controller
