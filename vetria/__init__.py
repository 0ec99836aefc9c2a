"""Vetria: glass works production tracker."""

from .shared.core.event_bus import EventBus

__version__ = "0.3.0"

__all__ = ["EventBus"]
