"""News agency demo: two subscribers fed staggered sports and politics headlines."""

from dataclasses import dataclass
from typing import Optional, Sequence

from topicwire.config import NewsDeskSettings
from topicwire.default_publisher import DefaultPublisher
from topicwire.event import EventData
from topicwire.observability import get_logger
from topicwire.publisher import Publisher
from topicwire.scheduling import AsyncioScheduler, Scheduler
from topicwire.subject import Subject
from topicwire.subscriber import Subscriber

NEWS_UPDATE = "NewsUpdate"

logger = get_logger("topicwire.newsdesk")


@dataclass(frozen=True)
class NewsUpdate:
    headline: str
    content: str
    count: int = 1


SPORTS_NEWS = (
    NewsUpdate("Team wins championship!", "Team X won against Team Y."),
    NewsUpdate("Player sets new record!", "Player A sets new scoring record."),
    NewsUpdate("Upcoming match scheduled!", "Team A will play against Team B."),
    NewsUpdate("Injury update on key player!", "Player B is recovering well."),
)

POLITICAL_NEWS = (
    NewsUpdate("Election results announced!", "Party A wins majority."),
    NewsUpdate("New policy introduced!", "Government introduces new law."),
)


def make_sports_fan(publisher: Publisher, limit: int = 10) -> Subscriber[NewsUpdate]:
    """Subscriber that adds up update counts and leaves SPORTS once it reaches limit."""

    def on_next(self: Subscriber[NewsUpdate], event: EventData[NewsUpdate]) -> None:
        self.logger.info(
            "received",
            extra={"subscriber": self.name, "headline": event.payload.headline},
        )
        self.state["count"] += event.payload.count
        if self.state["count"] >= self.state["limit"]:
            self.complete(Subject.SPORTS)

    def on_complete(self: Subscriber[NewsUpdate], subject: Subject) -> None:
        self.unsubscribe_from_publisher(publisher, subject)
        self.logger.info("left_subject", extra={"subscriber": self.name, "subject": str(subject)})

    return Subscriber(
        "SportsFan",
        {"count": 0, "limit": limit},
        on_next=on_next,
        on_complete=on_complete,
    )


def make_political_analyst(publisher: Publisher, limit: int = 5) -> Subscriber[NewsUpdate]:
    """Subscriber that counts articles and leaves POLITICS after limit of them."""

    def on_next(self: Subscriber[NewsUpdate], event: EventData[NewsUpdate]) -> None:
        self.logger.info(
            "political_update",
            extra={"subscriber": self.name, "headline": event.payload.headline},
        )
        self.state["article_count"] += 1
        if self.state["article_count"] >= self.state["limit"]:
            self.complete(Subject.POLITICS)

    def on_complete(self: Subscriber[NewsUpdate], subject: Subject) -> None:
        self.unsubscribe_from_publisher(publisher, subject)
        self.logger.info("left_subject", extra={"subscriber": self.name, "subject": str(subject)})

    return Subscriber(
        "PoliticalAnalyst",
        {"article_count": 0, "limit": limit},
        on_next=on_next,
        on_complete=on_complete,
    )


def schedule_news(
    publisher: Publisher,
    scheduler: Scheduler,
    subject: Subject,
    updates: Sequence[NewsUpdate],
    interval: float,
) -> None:
    """Schedule one notification per update, the i-th at i * interval seconds."""
    for index, update in enumerate(updates):
        scheduler.call_later(index * interval, publish_update, publisher, subject, update)


def publish_update(publisher: Publisher, subject: Subject, update: NewsUpdate) -> int:
    """Notify subject with update, stamped at delivery time."""
    return publisher.notify(subject, EventData.create(NEWS_UPDATE, update))


@dataclass
class NewsAgency:
    publisher: Publisher
    sports_fan: Subscriber[NewsUpdate]
    political_analyst: Subscriber[NewsUpdate]
    scheduler: Scheduler


def start_news_agency(
    scheduler: Scheduler,
    settings: Optional[NewsDeskSettings] = None,
    publisher: Optional[Publisher] = None,
) -> NewsAgency:
    """Subscribe the demo subscribers and schedule all sample news on scheduler."""
    settings = settings or NewsDeskSettings()
    publisher = publisher if publisher is not None else DefaultPublisher()
    sports_fan = make_sports_fan(publisher, settings.sports_fan_limit)
    political_analyst = make_political_analyst(publisher, settings.political_analyst_limit)

    publisher.subscribe(Subject.SPORTS, sports_fan)
    publisher.subscribe(Subject.POLITICS, political_analyst)

    schedule_news(publisher, scheduler, Subject.SPORTS, SPORTS_NEWS, settings.sports_interval_sec)
    schedule_news(publisher, scheduler, Subject.POLITICS, POLITICAL_NEWS, settings.politics_interval_sec)
    logger.info(
        "news_scheduled",
        extra={"sports": len(SPORTS_NEWS), "politics": len(POLITICAL_NEWS)},
    )
    return NewsAgency(publisher, sports_fan, political_analyst, scheduler)


async def run_news_agency(settings: Optional[NewsDeskSettings] = None) -> NewsAgency:
    """Run the demo on the running event loop until every scheduled update is delivered."""
    scheduler = AsyncioScheduler()
    agency = start_news_agency(scheduler, settings)
    await scheduler.wait_idle()
    if isinstance(agency.publisher, DefaultPublisher):
        logger.info("news_delivered", extra={"stats": agency.publisher.stats()})
    return agency
