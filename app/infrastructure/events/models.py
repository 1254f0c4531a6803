"""Event models for infrastructure event system."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict
from uuid import UUID, uuid4


@dataclass
class Event:
    """A named message travelling over the in-process event bus."""

    event_type: str
    """The type of event (e.g., 'messenger.message')."""

    payload: Dict[str, Any] = field(default_factory=dict)
    """Event body, passed to handlers untouched."""

    timestamp: datetime = field(default_factory=datetime.now)
    """When the event occurred."""

    correlation_id: UUID = field(default_factory=uuid4)
    """Unique ID to track related events across the system."""

    def __hash__(self) -> int:
        """Hash based on correlation_id and timestamp."""
        return hash((self.correlation_id, self.timestamp))
