"""Static catalog of the canonical events this plugin emits."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from ghactivity.core.models import EventType, EventTypeInfo

EVENT_TYPES: Mapping[EventType, EventTypeInfo] = MappingProxyType(
    {
        EventType.REPOSITORY_OPEN_SOURCED: EventTypeInfo(
            description="Private repo is open sourced"
        ),
        EventType.PULL_REQUEST_OPENED: EventTypeInfo(
            description="Pull request sent for a public repo"
        ),
        EventType.COMMITS_PUSHED: EventTypeInfo(
            description="One or more commits pushed to a public repo"
        ),
    }
)


def describe(event_type: EventType | str) -> str:
    """Return the human-readable description for an event type."""
    return EVENT_TYPES[EventType(event_type)].description
