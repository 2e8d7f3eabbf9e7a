"""Event models for infrastructure event system."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict
from uuid import UUID, uuid4


@dataclass(frozen=True)
class Event:
    """Immutable record of something that happened in the process.

    Events carry no behaviour; observers receive them through the
    dispatcher in the order they were emitted.
    """

    event_type: str
    """The type of event (e.g., 'i18n.language_preferences.changed')."""

    timestamp: datetime = field(default_factory=datetime.now)
    """When the event occurred."""

    correlation_id: UUID = field(default_factory=uuid4)
    """Unique ID to track related events across the system."""

    metadata: Dict[str, Any] = field(default_factory=dict)
    """Custom metadata for this event type."""
