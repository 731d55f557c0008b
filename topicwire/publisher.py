"""Abstract Publisher and base implementation for observability."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from topicwire.observability import get_logger

if TYPE_CHECKING:
    from topicwire.event import EventData
    from topicwire.subject import Subject
    from topicwire.subscriber import Subscriber


class Publisher(ABC):
    """Abstract base class for publishers that fan events out to subscribers per subject."""

    def __init__(self, publisher_id: str) -> None:
        self._publisher_id = publisher_id
        self._logger = get_logger(f"topicwire.publisher.{publisher_id}")

    @property
    def publisher_id(self) -> str:
        return self._publisher_id

    @abstractmethod
    def subscribe(self, subject: "Subject", subscriber: "Subscriber[Any]") -> bool:
        """
        Register subscriber for subject. Must be implemented by subclasses.
        Returns False (and changes nothing) if it was already registered.
        """
        pass

    @abstractmethod
    def unsubscribe(self, subject: "Subject", subscriber: "Subscriber[Any]") -> bool:
        """
        Remove subscriber from subject. Must be implemented by subclasses.
        Returns False (and changes nothing) if it was not registered.
        """
        pass

    @abstractmethod
    def notify(self, subject: "Subject", event: "EventData[Any]") -> int:
        """Deliver event to every subscriber of subject; returns how many were called."""
        pass

    def on_subscribe(self, subject: "Subject", subscriber: "Subscriber[Any]") -> None:
        """Called after a subscriber is added to a subject (for observability)."""
        self._logger.info(
            "subscribed",
            extra={"subject": str(subject), "subscriber": subscriber.name},
        )

    def on_unsubscribe(self, subject: "Subject", subscriber: "Subscriber[Any]") -> None:
        """Called after a subscriber is removed from a subject (for observability)."""
        self._logger.info(
            "unsubscribed",
            extra={"subject": str(subject), "subscriber": subscriber.name},
        )

    def on_notify(self, subject: "Subject", event: "EventData[Any]", subscriber_count: int) -> None:
        self._logger.debug(
            "notifying",
            extra={
                "subject": str(subject),
                "event_type": event.type,
                "subscriber_count": subscriber_count,
            },
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self._publisher_id!r})"
