"""Classification of raw GitHub activity into canonical gamification events.

The pipeline is synchronous and pure apart from logging: filter the feed down
to the tracked activity types, then map each record to exactly one
``NormalizedEvent``. Feed order is preserved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Sequence

from ghactivity.core.errors import ActivityClassificationError, MalformedActivityData
from ghactivity.core.interfaces import TimestampParser
from ghactivity.core.models import EventType, NormalizedEvent, RawActivityRecord

logger = logging.getLogger("ActivityClassifier")


def _unit_multiplier(record: RawActivityRecord) -> int:
    return 1


def _push_size_multiplier(record: RawActivityRecord) -> int:
    return parse_push_size(record.push_size, activity_id=record.id)


@dataclass(frozen=True)
class _Classification:
    event_type: EventType
    multiplier: Callable[[RawActivityRecord], int]


_DISPATCH: dict[str, _Classification] = {
    "PublicEvent": _Classification(EventType.REPOSITORY_OPEN_SOURCED, _unit_multiplier),
    "PullRequestEvent": _Classification(EventType.PULL_REQUEST_OPENED, _unit_multiplier),
    "PushEvent": _Classification(EventType.COMMITS_PUSHED, _push_size_multiplier),
}

TRACKED_ACTIVITY_TYPES: frozenset[str] = frozenset(_DISPATCH)


def parse_push_size(value: Any, activity_id: str | None = None) -> int:
    """Parse a push's distinct commit count as a non-negative integer."""
    if isinstance(value, bool):
        raise MalformedActivityData(
            f"PushEvent {activity_id} has a non-numeric distinct_size: {value!r}",
            activity_id=activity_id,
        )
    if isinstance(value, int):
        size = value
    elif isinstance(value, str) and value.strip().isdecimal():
        size = int(value.strip())
    elif value is None:
        raise MalformedActivityData(
            f"PushEvent {activity_id} is missing distinct_size",
            activity_id=activity_id,
        )
    else:
        raise MalformedActivityData(
            f"PushEvent {activity_id} has a non-numeric distinct_size: {value!r}",
            activity_id=activity_id,
        )
    if size < 0:
        raise MalformedActivityData(
            f"PushEvent {activity_id} has a negative distinct_size: {size}",
            activity_id=activity_id,
        )
    return size


def filter_tracked_activity(records: Iterable[RawActivityRecord]) -> list[RawActivityRecord]:
    """Keep only records whose type is tracked, in their original order."""
    return [record for record in records if record.type in TRACKED_ACTIVITY_TYPES]


def classify_activity(
    record: RawActivityRecord, parse_timestamp: TimestampParser
) -> NormalizedEvent:
    classification = _DISPATCH.get(record.type or "")
    if classification is None:
        raise ActivityClassificationError(
            f"No classification for activity type {record.type!r} (activity {record.id})"
        )
    if not record.id:
        raise MalformedActivityData(f"{record.type} record has no id")
    try:
        timestamp = parse_timestamp(record.created_at)
    except (TypeError, ValueError) as exc:
        raise MalformedActivityData(
            f"{record.type} {record.id} has an invalid created_at: {record.created_at!r}",
            activity_id=record.id,
        ) from exc
    return NormalizedEvent(
        id=record.id,
        timestamp=int(timestamp),
        type=classification.event_type,
        multiplier=classification.multiplier(record),
    )


def normalize_activity_feed(
    items: Sequence[Any], parse_timestamp: TimestampParser
) -> list[NormalizedEvent]:
    """Turn a raw activity feed into canonical events, newest first as received."""
    records: list[RawActivityRecord] = []
    for position, item in enumerate(items):
        if not isinstance(item, dict):
            raise MalformedActivityData(
                f"Activity feed item {position} is not an object: {type(item).__name__}"
            )
        records.append(RawActivityRecord.from_api(item))

    tracked = filter_tracked_activity(records)
    dropped = len(records) - len(tracked)
    if dropped:
        logger.debug(
            "Dropped untracked activity",
            extra={"dropped": dropped, "tracked": len(tracked)},
        )
    return [classify_activity(record, parse_timestamp) for record in tracked]
