"""
Level routing: channels, color hints, the destination controller and the
per-level entry points.
"""

from cidlog.routing.channel import Level, SeverityChannel
from cidlog.routing.color import ColorAnnotator
from cidlog.routing.controller import (
    Bindings,
    ControllerState,
    DestinationController,
    get_controller,
)
from cidlog.routing.levels import LevelLogger

__all__ = [
    "Bindings",
    "ColorAnnotator",
    "ControllerState",
    "DestinationController",
    "Level",
    "LevelLogger",
    "SeverityChannel",
    "get_controller",
]
