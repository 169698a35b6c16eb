"""JSONL trace logging for conversions."""

from eqnconv.trace.event import conversion_event, new_event
from eqnconv.trace.logger import TraceLogger

__all__ = ["TraceLogger", "conversion_event", "new_event"]
