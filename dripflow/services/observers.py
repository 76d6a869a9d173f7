"""
Observer Pattern: observers for flow-editor events.

The store notifies every subscribed observer after a command changed the
snapshot. The activity log shown in the editor is one such observer.
"""
from abc import ABC, abstractmethod
from collections import deque
from datetime import datetime, UTC
from logging import getLogger
from typing import Any, Deque, Dict, Iterable, List, Optional

from dripflow.models import ActivityEntry, ActivityIcon, ActivityType, TriggerRunConfig
from dripflow.util.ids import new_id
from . import triggers

logger = getLogger(__name__)


class FlowEvent:
    """A change applied to the flow state."""

    def __init__(self, event_type: str, block_id: Optional[str], data: Dict[str, Any]):
        self.event_type = event_type
        self.block_id = block_id
        self.data = data
        self.timestamp = datetime.now(UTC).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": self.event_type,
            "block_id": self.block_id,
            "data": self.data,
            "timestamp": self.timestamp,
        }


class FlowObserver(ABC):
    """Base observer for flow events."""

    @abstractmethod
    def update(self, event: FlowEvent) -> None:
        pass


class LogObserver(FlowObserver):
    """Writes every event to the application log."""

    def update(self, event: FlowEvent) -> None:
        logger.info(f"{event.event_type} block={event.block_id} data={event.data}")


class ActivityObserver(FlowObserver):
    """
    Keeps the recent-activity feed, newest first.

    Only block lifecycle, manual runs and enrollments are recorded; step
    edits are too fine-grained for the feed.
    """

    def __init__(self, limit: int = 20, initial: Iterable[ActivityEntry] = ()):
        self._entries: Deque[ActivityEntry] = deque(list(initial)[:limit], maxlen=limit)

    def update(self, event: FlowEvent) -> None:
        entry = self._to_entry(event)
        if entry is not None:
            self._entries.appendleft(entry)

    def entries(self, limit: Optional[int] = None) -> List[ActivityEntry]:
        items = list(self._entries)
        return items if limit is None else items[:limit]

    def clear(self) -> None:
        self._entries.clear()

    def _to_entry(self, event: FlowEvent) -> Optional[ActivityEntry]:
        journey = event.data.get("block_name", "")
        kind = event.event_type

        if kind == "block_created":
            action, target, icon, type_ = "Block created", journey, ActivityIcon.settings, ActivityType.settings
        elif kind == "block_updated":
            action, target, icon, type_ = "Settings updated", journey, ActivityIcon.settings, ActivityType.settings
        elif kind == "block_toggled":
            active = event.data.get("is_active", False)
            action = "Block activated" if active else "Block paused"
            icon = ActivityIcon.play if active else ActivityIcon.pause
            target, type_ = journey, ActivityType.status
        elif kind == "trigger_run":
            config = TriggerRunConfig(**event.data.get("config", {}))
            action, target, icon, type_ = triggers.run_action_text(config), journey, ActivityIcon.play, ActivityType.trigger
        elif kind == "customer_added":
            action, icon, type_ = "Customer added", ActivityIcon.user_plus, ActivityType.enrollment
            target = event.data.get("customer_name", "")
        else:
            return None

        return ActivityEntry(
            id=new_id("act_"),
            action=action,
            target=target,
            journey=journey,
            icon=icon,
            type=type_,
            timestamp=event.timestamp,
        )
