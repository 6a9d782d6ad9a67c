from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from eventhub.domain import (
    Event,
    EventChanges,
    ImageBlob,
    InvariantViolation,
    NewEvent,
    RegistrationStatus,
    as_utc,
)
from eventhub.domain.users.entities import normalize_login

NOW = datetime(2030, 1, 1, 12, 0, tzinfo=UTC)


def _event(**overrides) -> Event:
    fields = dict(id=1, creator_id=1, title="Meetup", date=NOW, location="Hall A")
    fields.update(overrides)
    return Event(**fields)


def test_as_utc_reads_naive_values_as_utc() -> None:
    naive = datetime(2030, 1, 1, 12, 0)
    assert as_utc(naive) == NOW
    assert as_utc(naive).tzinfo is UTC


def test_as_utc_converts_other_offsets() -> None:
    plus_two = datetime(2030, 1, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
    assert as_utc(plus_two) == NOW


def test_new_event_strips_and_requires_text_fields() -> None:
    draft = NewEvent(creator_id=1, title="  Meetup ", date=NOW, location=" Hall A ")
    assert draft.title == "Meetup"
    assert draft.location == "Hall A"

    with pytest.raises(InvariantViolation) as exc:
        NewEvent(creator_id=1, title="   ", date=NOW, location="Hall A")
    assert exc.value.field == "title"

    with pytest.raises(InvariantViolation):
        NewEvent(creator_id=1, title="Meetup", date=NOW, location="")


def test_event_rejects_creator_as_participant() -> None:
    with pytest.raises(InvariantViolation):
        _event(participant_ids={1, 2})


def test_status_for_reports_creator_participant_and_stranger() -> None:
    event = _event(participant_ids={2})
    assert event.status_for(1) is RegistrationStatus.CREATOR
    assert event.status_for(2) is RegistrationStatus.REGISTERED
    assert event.status_for(3) is RegistrationStatus.NOT_REGISTERED


def test_is_past_is_inclusive_of_start() -> None:
    event = _event()
    assert event.is_past(NOW)
    assert event.is_past(NOW + timedelta(seconds=1))
    assert not event.is_past(NOW - timedelta(seconds=1))


def test_event_changes_delete_image_wins_over_new_file() -> None:
    image = ImageBlob(data=b"png", content_type="image/png")
    changes = EventChanges(image=image, delete_image=True)
    assert not changes.replaces_image
    assert changes.field_values() == {}

    assert EventChanges(image=image).replaces_image


def test_event_changes_only_carries_supplied_fields() -> None:
    changes = EventChanges(title=" New ", description="Body")
    assert changes.field_values() == {"title": "New", "description": "Body"}


def test_image_blob_requires_bytes_and_type() -> None:
    with pytest.raises(InvariantViolation):
        ImageBlob(data=b"", content_type="image/png")
    with pytest.raises(InvariantViolation):
        ImageBlob(data=b"x", content_type="")
    assert ImageBlob(data=b"abc", content_type="image/png").size == 3


def test_normalize_login_case_folds() -> None:
    assert normalize_login("  Alice@Example.COM ") == "alice@example.com"
