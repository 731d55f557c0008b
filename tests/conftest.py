import pytest

from topicwire import DefaultPublisher, EventData, Subscriber


@pytest.fixture
def publisher():
    return DefaultPublisher("test")


@pytest.fixture
def make_recorder():
    """Factory for subscribers that append (name, payload) to a shared log."""

    def factory(name, log):
        def on_next(self, event):
            log.append((self.name, event.payload))

        return Subscriber(name, {}, on_next=on_next)

    return factory


@pytest.fixture
def event():
    return EventData(type="x", payload={"count": 1})
