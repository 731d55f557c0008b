import logging

import pytest
from pydantic import ValidationError

from topicwire import DefaultPublisher, EventData, Subject, Subscriber, SubscriberConfig


def _counter(publisher, limit=2):
    def on_next(self, event):
        self.state["count"] += event.payload["count"]
        if self.state["count"] >= self.state["limit"]:
            self.complete(Subject.SPORTS)

    def on_complete(self, subject):
        self.unsubscribe_from_publisher(publisher, subject)

    return Subscriber(
        "counter",
        {"count": 0, "limit": limit},
        on_next=on_next,
        on_error=lambda self, err: None,
        on_complete=on_complete,
    )


def test_counter_unsubscribes_itself_at_limit(publisher):
    counter = _counter(publisher)
    publisher.subscribe(Subject.SPORTS, counter)
    event = EventData(type="x", payload={"count": 1})

    publisher.notify(Subject.SPORTS, event)
    assert counter.state["count"] == 1
    assert publisher.is_subscribed(Subject.SPORTS, counter)

    publisher.notify(Subject.SPORTS, event)
    assert counter.state["count"] == 2
    assert not publisher.is_subscribed(Subject.SPORTS, counter)

    publisher.notify(Subject.SPORTS, event)
    assert counter.state["count"] == 2


def test_callbacks_are_bound_to_their_subscriber():
    seen = []
    subscriber = Subscriber("bound", on_next=lambda self, event: seen.append(self))

    callback = subscriber.next
    callback(EventData("x", 1))
    getattr(subscriber, "next")(EventData("x", 2))

    assert seen == [subscriber, subscriber]


def test_initial_state_is_not_copied():
    state = {"count": 0}
    subscriber = Subscriber("s", state, on_next=lambda self, event: None)
    assert subscriber.state is state


def test_error_and_complete_callbacks():
    calls = []
    subscriber = Subscriber(
        "s",
        on_next=lambda self, event: None,
        on_error=lambda self, err: calls.append(("error", self.name, str(err))),
        on_complete=lambda self, subject: calls.append(("complete", self.name, subject)),
    )
    subscriber.error(RuntimeError("lost"))
    subscriber.complete(Subject.POLITICS)
    assert calls == [("error", "s", "lost"), ("complete", "s", Subject.POLITICS)]


def test_default_error_and_complete_log(caplog):
    subscriber = Subscriber("quiet", on_next=lambda self, event: None)
    with caplog.at_level(logging.INFO):
        subscriber.error(ValueError("bad payload"))
        subscriber.complete(Subject.SPORTS)
    messages = [(r.levelno, r.getMessage()) for r in caplog.records]
    assert (logging.ERROR, "subscriber_error") in messages
    assert (logging.INFO, "completed") in messages


def test_resubscribe_after_unsubscribe(publisher):
    log = []
    subscriber = Subscriber("again", on_next=lambda self, event: log.append(event.payload))
    publisher.subscribe(Subject.SPORTS, subscriber)
    subscriber.unsubscribe_from_publisher(publisher, Subject.SPORTS)
    publisher.notify(Subject.SPORTS, EventData("x", 1))
    assert publisher.subscribe(Subject.SPORTS, subscriber) is True
    publisher.notify(Subject.SPORTS, EventData("x", 2))
    assert log == [2]


def test_unsubscribe_from_publisher_reports_unknown():
    publisher = DefaultPublisher("other")
    subscriber = Subscriber("stranger", on_next=lambda self, event: None)
    assert subscriber.unsubscribe_from_publisher(publisher, Subject.SPORTS) is False


def test_from_config():
    config = SubscriberConfig(name="cfg", initial_state=[1], on_next=lambda self, event: None)
    subscriber = Subscriber.from_config(config)
    assert subscriber.name == "cfg"
    assert subscriber.state is config.initial_state
    assert repr(subscriber) == "Subscriber(name='cfg')"


def test_invalid_config_is_rejected():
    with pytest.raises(ValidationError):
        Subscriber("no-next")
    with pytest.raises(ValidationError):
        Subscriber("   ", on_next=lambda self, event: None)
    with pytest.raises(ValidationError):
        Subscriber("bad-callback", on_next="not callable")
