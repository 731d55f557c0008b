"""Subscriber built from a configuration bundle of callbacks and private state."""

import logging
from types import MethodType
from typing import TYPE_CHECKING, Any, Callable, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, field_validator

from topicwire.observability import get_logger

if TYPE_CHECKING:
    from topicwire.event import EventData
    from topicwire.publisher import Publisher
    from topicwire.subject import Subject

T = TypeVar("T")


class SubscriberConfig(BaseModel):
    """Validated construction bundle for a Subscriber.

    Callbacks are plain functions taking the owning subscriber as their first
    argument, followed by the event (on_next), the error (on_error) or the
    subject (on_complete). initial_state is kept as-is, not copied.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    name: str
    initial_state: Any = None
    on_next: Callable[..., Any]
    on_error: Optional[Callable[..., Any]] = None
    on_complete: Optional[Callable[..., Any]] = None

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name is required")
        return value


def _log_error(subscriber: "Subscriber", err: BaseException) -> None:
    subscriber.logger.error(
        "subscriber_error",
        extra={"subscriber": subscriber.name, "error": str(err)},
    )


def _log_complete(subscriber: "Subscriber", subject: "Subject") -> None:
    subscriber.logger.info(
        "completed",
        extra={"subscriber": subscriber.name, "subject": str(subject)},
    )


class Subscriber(Generic[T]):
    """One observer: a name, mutable private state and next/error/complete callbacks.

    The callbacks are bound to the instance, so ``subscriber.next(event)``
    calls ``on_next(subscriber, event)`` however the bound slot is reached.
    """

    def __init__(
        self,
        name: str,
        initial_state: Any = None,
        on_next: Optional[Callable[..., Any]] = None,
        on_error: Optional[Callable[..., Any]] = None,
        on_complete: Optional[Callable[..., Any]] = None,
    ) -> None:
        config = SubscriberConfig(
            name=name,
            initial_state=initial_state,
            on_next=on_next,
            on_error=on_error,
            on_complete=on_complete,
        )
        self._name = config.name
        self._logger = get_logger(f"topicwire.subscriber.{config.name}")
        self.state: Any = config.initial_state
        self.next: Callable[["EventData[T]"], Any] = MethodType(config.on_next, self)
        self.error: Callable[[BaseException], Any] = MethodType(config.on_error or _log_error, self)
        self.complete: Callable[["Subject"], Any] = MethodType(config.on_complete or _log_complete, self)

    @classmethod
    def from_config(cls, config: SubscriberConfig) -> "Subscriber[Any]":
        return cls(
            config.name,
            config.initial_state,
            on_next=config.on_next,
            on_error=config.on_error,
            on_complete=config.on_complete,
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def unsubscribe_from_publisher(self, publisher: "Publisher", subject: "Subject") -> bool:
        """Remove this subscriber from subject on publisher."""
        return publisher.unsubscribe(subject, self)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self._name!r})"
