"""
Event system for batch translation observability.

Lets callers follow a batch (per-key outcomes, progress) without coupling
to the orchestrator loop.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List
import time

from i18n_manager.utils.unified_logger import get_logger, LogType


class EventType(Enum):
    """Batch translation event types."""

    # Batch-level events
    BATCH_STARTED = "batch_started"
    BATCH_COMPLETED = "batch_completed"
    BATCH_CANCELLED = "batch_cancelled"

    # Item-level events
    ITEM_STARTED = "item_started"
    ITEM_TRANSLATED = "item_translated"
    ITEM_FAILED = "item_failed"

    PROGRESS = "progress"


@dataclass
class Event:
    """Batch translation event.

    Attributes:
        type: Event type
        data: Event-specific data dictionary
        timestamp: Unix timestamp when event occurred
        source: Optional source identifier (e.g., "orchestrator")
    """
    type: EventType
    data: Dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)
    source: str = "unknown"


class EventBus:
    """Central event bus for batch translation."""

    def __init__(self):
        self._listeners: Dict[EventType, List[Callable]] = {}
        self._history: List[Event] = []
        self._record_history = False

    def subscribe(self, event_type: EventType, callback: Callable[[Event], None]) -> None:
        """Subscribe to an event type.

        Args:
            event_type: Type of event to listen for
            callback: Function to call when event occurs (receives Event object)
        """
        self._listeners.setdefault(event_type, []).append(callback)

    def subscribe_multiple(
        self,
        event_types: List[EventType],
        callback: Callable[[Event], None]
    ) -> None:
        """Subscribe to multiple event types with same callback."""
        for event_type in event_types:
            self.subscribe(event_type, callback)

    def unsubscribe(self, event_type: EventType, callback: Callable) -> None:
        """Unsubscribe from an event type."""
        listeners = self._listeners.get(event_type, [])
        if callback in listeners:
            listeners.remove(callback)

    def publish(self, event: Event) -> None:
        """Publish an event to all subscribers.

        A failing listener is logged and skipped; it never stops the batch.
        """
        if self._record_history:
            self._history.append(event)

        for listener in self._listeners.get(event.type, []):
            try:
                listener(event)
            except Exception as e:
                get_logger().error(f"Event listener failed: {e}", LogType.ERROR_DETAIL,
                                   {'details': repr(e)})

    def enable_history(self) -> None:
        self._record_history = True

    def disable_history(self) -> None:
        self._record_history = False

    def get_history(self) -> List[Event]:
        """Recorded events in chronological order."""
        return self._history.copy()

    def clear_history(self) -> None:
        self._history.clear()

    def get_events_by_type(self, event_type: EventType) -> List[Event]:
        return [e for e in self._history if e.type == event_type]


# === Convenience Event Builders ===

def create_item_event(
    event_type: EventType,
    index: int,
    total: int,
    path: str,
    target_language: str,
    error: str = None
) -> Event:
    """Create an item-level event.

    Args:
        event_type: ITEM_STARTED, ITEM_TRANSLATED or ITEM_FAILED
        index: Zero-based position of the item in the job
        total: Number of items in the job
        path: Dotted key path
        target_language: Language being filled
        error: Failure message (ITEM_FAILED only)
    """
    data = {
        "index": index,
        "total": total,
        "path": path,
        "target_language": target_language,
    }
    if error is not None:
        data["error"] = error
    return Event(type=event_type, data=data, source="orchestrator")


def create_progress_event(completed: int, total: int, percentage: int) -> Event:
    return Event(
        type=EventType.PROGRESS,
        data={
            "completed": completed,
            "total": total,
            "percentage": percentage
        },
        source="orchestrator"
    )
