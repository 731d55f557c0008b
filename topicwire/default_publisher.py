"""Concrete Publisher implementation (in-memory, synchronous fan-out)."""

from typing import Any, Dict, List, Optional, Union

from topicwire.diagnostics import DELIVERY_FAILED, DUPLICATE_SUBSCRIPTION, UNKNOWN_SUBSCRIBER
from topicwire.event import EventData
from topicwire.observability import Metrics
from topicwire.publisher import Publisher
from topicwire.subject import Subject, coerce_subject
from topicwire.subscriber import Subscriber

SubjectLike = Union[Subject, str]


def _index_of(subscribers: List[Subscriber[Any]], subscriber: Subscriber[Any]) -> int:
    """Position of subscriber in subscribers by identity, or -1."""
    for i, candidate in enumerate(subscribers):
        if candidate is subscriber:
            return i
    return -1


class DefaultPublisher(Publisher):
    """Publisher keeping an ordered subscriber list per subject and notifying in insertion order.

    notify() iterates over a snapshot of the subject's list taken when it
    starts: a callback that subscribes or unsubscribes (itself or others)
    only changes who receives later notifications.
    """

    def __init__(self, publisher_id: str = "news-agency", metrics: Optional[Metrics] = None) -> None:
        super().__init__(publisher_id)
        self._observers: Dict[Subject, List[Subscriber[Any]]] = {}
        self._metrics = metrics if metrics is not None else Metrics()

    @property
    def metrics(self) -> Metrics:
        return self._metrics

    def subscribe(self, subject: SubjectLike, subscriber: Subscriber[Any]) -> bool:
        """Append subscriber to subject's list, creating the list on first use."""
        subject = coerce_subject(subject)
        subscribers = self._observers.setdefault(subject, [])
        if _index_of(subscribers, subscriber) != -1:
            self._metrics.increment("duplicate_subscriptions")
            self._logger.error(
                "duplicate_subscription",
                extra={
                    "code": DUPLICATE_SUBSCRIPTION,
                    "subject": str(subject),
                    "subscriber": subscriber.name,
                },
            )
            return False
        subscribers.append(subscriber)
        self._metrics.increment("subscriptions")
        self._metrics.set_gauge(f"subscribers.{subject.value}", len(subscribers))
        self.on_subscribe(subject, subscriber)
        return True

    def unsubscribe(self, subject: SubjectLike, subscriber: Subscriber[Any]) -> bool:
        """Remove one occurrence of subscriber (by identity) from subject's list."""
        subject = coerce_subject(subject)
        subscribers = self._observers.get(subject)
        index = _index_of(subscribers, subscriber) if subscribers is not None else -1
        if index == -1:
            self._metrics.increment("unknown_unsubscriptions")
            self._logger.error(
                "unknown_subscriber",
                extra={
                    "code": UNKNOWN_SUBSCRIBER,
                    "subject": str(subject),
                    "subscriber": subscriber.name,
                },
            )
            return False
        del subscribers[index]
        self._metrics.increment("unsubscriptions")
        self._metrics.set_gauge(f"subscribers.{subject.value}", len(subscribers))
        self.on_unsubscribe(subject, subscriber)
        return True

    def notify(self, subject: SubjectLike, event: EventData[Any]) -> int:
        """Call next(event) on each subscriber of subject, in order. No subscribers is a no-op."""
        subject = coerce_subject(subject)
        subscribers = self._observers.get(subject)
        if subscribers is None:
            return 0
        snapshot = list(subscribers)
        self.on_notify(subject, event, len(snapshot))
        self._metrics.increment("notifications")
        self._metrics.increment(f"notifications.{subject.value}")
        for subscriber in snapshot:
            try:
                subscriber.next(event)
            except Exception as e:
                self._metrics.increment("delivery_failures")
                self._logger.exception(
                    "delivery_failed",
                    extra={
                        "code": DELIVERY_FAILED,
                        "subject": str(subject),
                        "subscriber": subscriber.name,
                        "event_type": event.type,
                        "error": str(e),
                    },
                )
            else:
                self._metrics.increment("deliveries")
        return len(snapshot)

    def subscribers(self, subject: SubjectLike) -> List[Subscriber[Any]]:
        """Return a copy of subject's subscriber list (empty if none)."""
        return list(self._observers.get(coerce_subject(subject), ()))

    def is_subscribed(self, subject: SubjectLike, subscriber: Subscriber[Any]) -> bool:
        subscribers = self._observers.get(coerce_subject(subject))
        return subscribers is not None and _index_of(subscribers, subscriber) != -1

    def subscriber_count(self, subject: SubjectLike) -> int:
        return len(self._observers.get(coerce_subject(subject), ()))

    def subjects(self) -> List[Subject]:
        """Subjects that have been subscribed to at least once."""
        return list(self._observers)

    def stats(self) -> Dict[str, Dict[str, int]]:
        """Return { subject: { subscribers, notifications } }."""
        return {
            subject.value: {
                "subscribers": len(subscribers),
                "notifications": self._metrics.get_counter(f"notifications.{subject.value}"),
            }
            for subject, subscribers in self._observers.items()
        }

    def __repr__(self) -> str:
        counts = {s.value: len(subs) for s, subs in self._observers.items()}
        return f"{self.__class__.__name__}(id={self._publisher_id!r}, subscribers={counts})"
