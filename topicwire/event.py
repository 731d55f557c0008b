"""EventData class for notification payload and metadata."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class EventData(Generic[T]):
    """Represents one event delivered to the subscribers of a subject."""

    type: str
    payload: T
    timestamp: Optional[datetime] = None

    @classmethod
    def create(cls, type: str, payload: T) -> "EventData[T]":
        """Build an event stamped with the current UTC time."""
        return cls(type=type, payload=payload, timestamp=datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize event for logging."""
        return {
            "type": self.type,
            "payload": self.payload,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
        }
