"""Observability: logging and metrics for the publisher and its subscribers."""

from topicwire.observability.logger import ExtraFormatter, extra_fields, get_logger
from topicwire.observability.metrics import Metrics

__all__ = ["ExtraFormatter", "Metrics", "extra_fields", "get_logger"]
