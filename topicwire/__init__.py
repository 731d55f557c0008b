"""In-process publish/subscribe (Observer) with per-subject subscribers and observability."""

from topicwire.subject import Subject
from topicwire.event import EventData
from topicwire.publisher import Publisher
from topicwire.subscriber import Subscriber, SubscriberConfig
from topicwire.default_publisher import DefaultPublisher
from topicwire.scheduling import AsyncioScheduler, ManualScheduler, Scheduler

__all__ = [
    "Subject",
    "EventData",
    "Publisher",
    "Subscriber",
    "SubscriberConfig",
    "DefaultPublisher",
    "Scheduler",
    "AsyncioScheduler",
    "ManualScheduler",
]
