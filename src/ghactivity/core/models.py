from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from ghactivity.core.errors import MalformedActivityData


class EventType(str, Enum):
    REPOSITORY_OPEN_SOURCED = "REPOSITORY_OPEN_SOURCED"
    PULL_REQUEST_OPENED = "PULL_REQUEST_OPENED"
    COMMITS_PUSHED = "COMMITS_PUSHED"


@dataclass(frozen=True)
class EventTypeInfo:
    description: str


@dataclass(frozen=True)
class RawActivityRecord:
    """One item of a user's public GitHub activity feed."""

    id: str | None
    type: str | None
    created_at: str | None
    push_size: Any = None

    @classmethod
    def from_api(cls, item: dict[str, Any]) -> RawActivityRecord:
        payload = item.get("payload")
        if not isinstance(payload, dict):
            payload = {}
        # Older feeds carried distinct_size at the top level; the Events API nests it.
        push_size = item.get("distinct_size")
        if push_size is None:
            push_size = payload.get("distinct_size")
        raw_id = item.get("id")
        activity_id = str(raw_id) if raw_id is not None else None
        activity_type = item.get("type")
        if activity_type is not None and not isinstance(activity_type, str):
            raise MalformedActivityData(
                f"Activity {activity_id} has a non-string type: {activity_type!r}",
                activity_id=activity_id,
            )
        return cls(
            id=activity_id,
            type=activity_type,
            created_at=item.get("created_at"),
            push_size=push_size,
        )


@dataclass(frozen=True)
class NormalizedEvent:
    id: str
    timestamp: int  # epoch milliseconds
    type: EventType
    multiplier: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "type": self.type.value,
            "multiplier": self.multiplier,
        }
