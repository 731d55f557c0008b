"""Subjects (topics) a publisher can deliver events for."""

from enum import Enum
from typing import Union


class Subject(str, Enum):
    """Closed set of topics. Add a member here to add a topic."""

    SPORTS = "sports"
    POLITICS = "politics"

    def __str__(self) -> str:
        return self.value


def coerce_subject(value: Union[Subject, str]) -> Subject:
    """Return the Subject for value; raises ValueError for unknown topics."""
    if isinstance(value, Subject):
        return value
    try:
        return Subject(value)
    except ValueError:
        raise ValueError(f"Unknown subject: {value!r}") from None
