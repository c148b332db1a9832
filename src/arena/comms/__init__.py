"""Internal messaging between the opponent AI and the rest of the match."""
from .event_bus import EventBus

__all__ = ["EventBus"]
