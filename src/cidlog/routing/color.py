"""
ANSI color hints for warn and error lines on the default console.

The hint is three separate writes to the console: the start sequence, the
line itself, the reset sequence. They are not synchronized with each other,
so under heavy concurrency a color may bleed onto a neighbouring line; the
lines themselves stay intact. Once any custom destination is installed the
hints stop for good, since escape codes would corrupt files and pipes.
"""

from typing import Callable, Dict

from cidlog.core.logging.logger import get_logger
from cidlog.routing.channel import Level
from cidlog.sinks.builtin import ConsoleSink

logger = get_logger(__name__)

COLOR_YELLOW = "\033[33m"
COLOR_RED = "\033[31m"
COLOR_RESET = "\033[0m"

LEVEL_COLORS: Dict[Level, str] = {
    Level.WARN: COLOR_YELLOW,
    Level.ERROR: COLOR_RED,
}


class ColorAnnotator:
    """
    Wraps console writes of colored levels with escape sequences.

    Attributes:
        console (ConsoleSink): The stream receiving the escape sequences
        enabled (bool): Master switch, from the COLOR setting
    """

    def __init__(self, console: ConsoleSink, enabled: bool = True) -> None:
        self.console = console
        self.enabled = enabled

    def applies(self, level: Level, on_default_console: bool) -> bool:
        return self.enabled and on_default_console and level in LEVEL_COLORS

    def wrap(
        self, level: Level, on_default_console: bool, write: Callable[[], None]
    ) -> None:
        """
        Run ``write``, bracketed by color sequences when they apply.

        Args:
            level: Level of the line being written
            on_default_console: Whether the controller is still on its
                default console destination
            write: Performs the channel write
        """
        if not self.applies(level, on_default_console):
            write()
            return
        self._escape(LEVEL_COLORS[level])
        write()
        self._escape(COLOR_RESET)

    def _escape(self, sequence: str) -> None:
        try:
            self.console.write_escape(sequence)
        except Exception as e:
            logger.debug("Console color write failed", error=str(e))
