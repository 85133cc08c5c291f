from __future__ import annotations

import pytest

from ghactivity.core.catalog import EVENT_TYPES, describe
from ghactivity.core.models import EventType, EventTypeInfo


def test_catalog_covers_every_event_type() -> None:
    assert set(EVENT_TYPES) == set(EventType)
    assert all(isinstance(info, EventTypeInfo) for info in EVENT_TYPES.values())


def test_catalog_is_read_only() -> None:
    with pytest.raises(TypeError):
        EVENT_TYPES[EventType.COMMITS_PUSHED] = EventTypeInfo(description="x")  # type: ignore[index]


def test_describe_accepts_enum_or_string() -> None:
    assert describe(EventType.PULL_REQUEST_OPENED) == "Pull request sent for a public repo"
    assert describe("REPOSITORY_OPEN_SOURCED") == "Private repo is open sourced"
    with pytest.raises(ValueError):
        describe("ISSUE_OPENED")


def test_event_type_compares_equal_to_its_name() -> None:
    assert EventType.COMMITS_PUSHED == "COMMITS_PUSHED"
