"""Injected logging collaborator.

Components take an ``EventLogger`` instead of reaching for a process-wide
logger, so each resolver/reconciler/selector owns its own bound logger.
"""

from __future__ import annotations

from typing import Any, Protocol

import structlog

LOG_LEVELS = ("debug", "info", "warning", "error", "exception")


class EventLogger(Protocol):
    """Protocol for structured event logging."""

    def log(self, level: str, message: str, context: dict[str, Any] | None = None) -> None:
        """Log an event.

        Args:
            level: One of LOG_LEVELS
            message: snake_case event name
            context: Extra key/value pairs attached to the event
        """
        ...


class StructlogEventLogger:
    """EventLogger backed by a structlog logger bound to a component name."""

    def __init__(self, component: str, **bindings: Any) -> None:
        self.component = component
        self._logger = structlog.get_logger().bind(component=component, **bindings)

    def log(self, level: str, message: str, context: dict[str, Any] | None = None) -> None:
        if level not in LOG_LEVELS:
            level = "info"
        getattr(self._logger, level)(message, **(context or {}))


def default_event_logger(component: str) -> EventLogger:
    """Create the default logger for a component."""
    return StructlogEventLogger(component)


__all__ = [
    "EventLogger",
    "LOG_LEVELS",
    "StructlogEventLogger",
    "default_event_logger",
]
