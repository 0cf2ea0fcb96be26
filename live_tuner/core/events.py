"""Event system for live_tuner components."""

from enum import Enum, auto
from typing import Any, Callable, Dict, List

from ..logging_config import get_logger

logger = get_logger(__name__)


class TunerEventType(Enum):
    """Event types emitted by a tuner session."""

    READING = auto()
    NO_PITCH = auto()


class EventEmitter:
    """Minimal synchronous event emitter."""

    def __init__(self):
        self._listeners: Dict[Any, List[Callable]] = {}

    def on(self, event_type: Any, callback: Callable) -> None:
        """Register a callback for an event type.

        Registering the same callback twice has no effect.
        """
        listeners = self._listeners.setdefault(event_type, [])
        if callback not in listeners:
            listeners.append(callback)
            logger.debug(f"Added listener for event {event_type}")

    def off(self, event_type: Any, callback: Callable) -> None:
        """Remove a callback; unknown callbacks are ignored."""
        listeners = self._listeners.get(event_type, [])
        if callback in listeners:
            listeners.remove(callback)

    def emit(self, event_type: Any, *args, **kwargs) -> None:
        """Call every listener for event_type.

        A failing listener is logged and does not stop the others.
        """
        for callback in list(self._listeners.get(event_type, ())):
            try:
                callback(*args, **kwargs)
            except Exception as e:
                logger.error(f"Error in event listener for {event_type}: {e}", exc_info=True)
