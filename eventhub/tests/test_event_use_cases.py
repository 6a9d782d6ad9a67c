from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import replace
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from eventhub.application import (
    EventLifecycle,
    EventQueries,
    EventViewResolver,
    NotificationKind,
    RegistrationEngine,
)
from eventhub.application.interfaces import EventNotifier
from eventhub.domain import Event, EventChanges, ImageBlob, NewEvent, RegistrationStatus
from eventhub.domain.events.exceptions import (
    AlreadyRegisteredError,
    CreatorNotFoundError,
    EventNotFoundError,
    EventNotFoundOrUnauthorizedError,
    ImageNotFoundError,
    NoImageError,
    NotRegisteredError,
    RegistrationClosedError,
    SelfRegistrationForbiddenError,
)
from eventhub.domain.events.repositories import EventRepository
from eventhub.domain.users.entities import User
from eventhub.domain.users.repositories import UserRepository

NOW = datetime(2030, 6, 1, 12, 0, tzinfo=UTC)
PNG = ImageBlob(data=b"\x89PNG\r\n", content_type="image/png")


class InMemoryUserRepository(UserRepository):
    def __init__(self, usernames: Mapping[int, str]) -> None:
        self._users = {
            uid: User(
                id=uid,
                username=name,
                email=f"{name}@example.com",
                password_hash="hash",
                has_profile_picture=False,
                created_at=NOW,
                updated_at=NOW,
            )
            for uid, name in usernames.items()
        }
        self.batch_lookups = 0

    def find_by_username(self, username: str) -> User | None:
        return next((u for u in self._users.values() if u.username == username), None)

    def find_by_email(self, email: str) -> User | None:
        return next((u for u in self._users.values() if u.email == email), None)

    def find_by_login(self, email_or_username: str) -> User | None:
        return self.find_by_email(email_or_username) or self.find_by_username(email_or_username)

    def find_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def add(self, user: User, profile_picture: ImageBlob | None = None) -> User:
        raise NotImplementedError

    def usernames_for(self, user_ids: Iterable[int]) -> dict[int, str]:
        self.batch_lookups += 1
        return {uid: self._users[uid].username for uid in user_ids if uid in self._users}

    def get_profile_picture(self, user_id: int) -> ImageBlob | None:
        return None

    def set_profile_picture(self, user_id: int, picture: ImageBlob | None) -> bool:
        return user_id in self._users


class InMemoryEventRepository(EventRepository):
    def __init__(self) -> None:
        self._events: dict[int, Event] = {}
        self._images: dict[int, ImageBlob] = {}
        self._seq = 1

    def add(self, draft: NewEvent) -> Event:
        event = Event(
            id=self._seq,
            creator_id=draft.creator_id,
            title=draft.title,
            description=draft.description,
            date=draft.date,
            location=draft.location,
            has_image=draft.image is not None,
            created_at=NOW,
            updated_at=NOW,
        )
        if draft.image is not None:
            self._images[event.id] = draft.image
        self._events[event.id] = event
        self._seq += 1
        return event

    def get(self, event_id: int) -> Event | None:
        return self._events.get(event_id)

    def list_all(self) -> Sequence[Event]:
        return sorted(self._events.values(), key=lambda e: (e.date, e.id))

    def list_by_creator(self, creator_id: int) -> Sequence[Event]:
        return [e for e in self.list_all() if e.creator_id == creator_id]

    def get_image(self, event_id: int) -> ImageBlob | None:
        return self._images.get(event_id)

    def update(self, event_id: int, creator_id: int, changes: EventChanges) -> Event | None:
        event = self._events.get(event_id)
        if event is None or event.creator_id != creator_id:
            return None
        if changes.delete_image:
            self._images.pop(event_id, None)
        elif changes.image is not None:
            self._images[event_id] = changes.image
        updated = replace(
            event, **changes.field_values(), has_image=event_id in self._images
        )
        self._events[event_id] = updated
        return updated

    def delete(self, event_id: int, creator_id: int) -> bool:
        event = self._events.get(event_id)
        if event is None or event.creator_id != creator_id:
            return False
        del self._events[event_id]
        self._images.pop(event_id, None)
        return True

    def add_participant(self, event_id: int, user_id: int) -> bool:
        event = self._events.get(event_id)
        if event is None or user_id in event.participant_ids:
            return False
        self._events[event_id] = replace(event, participant_ids=event.participant_ids | {user_id})
        return True

    def remove_participant(self, event_id: int, user_id: int) -> bool:
        event = self._events.get(event_id)
        if event is None or user_id not in event.participant_ids:
            return False
        self._events[event_id] = replace(event, participant_ids=event.participant_ids - {user_id})
        return True


class RecordingNotifier(EventNotifier):
    def __init__(self) -> None:
        self.published: list[tuple[NotificationKind, dict[str, Any]]] = []

    def publish(self, kind: NotificationKind, payload: Mapping[str, Any]) -> None:
        self.published.append((kind, dict(payload)))

    @property
    def kinds(self) -> list[NotificationKind]:
        return [kind for kind, _ in self.published]


class Clock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture()
def clock() -> Clock:
    return Clock(NOW)


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository({1: "alice", 2: "bob", 3: "carol"})


@pytest.fixture()
def events() -> InMemoryEventRepository:
    return InMemoryEventRepository()


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def views(users: InMemoryUserRepository, clock: Clock) -> EventViewResolver:
    return EventViewResolver(users=users, clock=clock)


@pytest.fixture()
def engine(events, views, notifier, clock) -> RegistrationEngine:
    return RegistrationEngine(events=events, views=views, notifier=notifier, clock=clock)


@pytest.fixture()
def lifecycle(events, views, notifier) -> EventLifecycle:
    return EventLifecycle(events=events, views=views, notifier=notifier)


@pytest.fixture()
def queries(events, users, views) -> EventQueries:
    return EventQueries(events=events, users=users, views=views)


def _draft(creator_id: int = 1, *, days: int = 7, image: ImageBlob | None = None) -> NewEvent:
    return NewEvent(
        creator_id=creator_id,
        title="Meetup",
        date=NOW + timedelta(days=days),
        location="Hall A",
        image=image,
    )


# Registration engine


def test_creator_cannot_register_for_own_event(engine, events, notifier) -> None:
    event = events.add(_draft(creator_id=1))

    with pytest.raises(SelfRegistrationForbiddenError) as exc:
        engine.register(1, event.id)

    assert exc.value.status == 400
    assert events.get(event.id).participant_ids == frozenset()
    assert notifier.published == []


def test_register_adds_participant_and_broadcasts(engine, events, notifier) -> None:
    event = events.add(_draft())

    view = engine.register(2, event.id)

    assert view["participants"] == [{"id": 2, "username": "bob"}]
    assert view["participantCount"] == 1
    assert notifier.kinds == [NotificationKind.REGISTRATION_CHANGED]
    assert notifier.published[0][1]["id"] == event.id


def test_second_registration_is_rejected(engine, events, notifier) -> None:
    event = events.add(_draft())
    engine.register(2, event.id)

    with pytest.raises(AlreadyRegisteredError) as exc:
        engine.register(2, event.id)

    assert exc.value.status == 409
    assert events.get(event.id).participant_ids == frozenset({2})
    assert len(notifier.published) == 1


def test_register_then_unregister_restores_participants(engine, events, notifier) -> None:
    event = events.add(_draft())

    engine.register(2, event.id)
    view = engine.unregister(2, event.id)

    assert view["participants"] == []
    assert events.get(event.id).participant_ids == frozenset()
    assert notifier.kinds == [NotificationKind.REGISTRATION_CHANGED] * 2


def test_unregister_without_registration_fails(engine, events) -> None:
    event = events.add(_draft())

    with pytest.raises(NotRegisteredError) as exc:
        engine.unregister(3, event.id)

    assert exc.value.status == 409


def test_unknown_event_is_not_found(engine) -> None:
    with pytest.raises(EventNotFoundError):
        engine.register(2, 999)
    with pytest.raises(EventNotFoundError):
        engine.status(2, 999)


class DeletedAfterReadRepository(InMemoryEventRepository):
    """Creator deletes the event right after the engine reads its snapshot."""

    def __init__(self) -> None:
        super().__init__()
        self.delete_on_next_read = False

    def get(self, event_id: int) -> Event | None:
        event = super().get(event_id)
        if self.delete_on_next_read and event is not None:
            self.delete_on_next_read = False
            self.delete(event_id, event.creator_id)
        return event


def test_register_on_event_deleted_mid_request_is_not_found(views, notifier, clock) -> None:
    events = DeletedAfterReadRepository()
    engine = RegistrationEngine(events=events, views=views, notifier=notifier, clock=clock)
    event = events.add(_draft(creator_id=1))
    events.delete_on_next_read = True

    with pytest.raises(EventNotFoundError) as exc:
        engine.register(2, event.id)

    assert exc.value.status == 404
    assert notifier.published == []


def test_unregister_on_event_deleted_mid_request_is_not_found(views, notifier, clock) -> None:
    events = DeletedAfterReadRepository()
    engine = RegistrationEngine(events=events, views=views, notifier=notifier, clock=clock)
    event = events.add(_draft(creator_id=1))
    engine.register(2, event.id)
    events.delete_on_next_read = True

    with pytest.raises(EventNotFoundError):
        engine.unregister(2, event.id)


class DeletedAfterWriteRepository(InMemoryEventRepository):
    def add_participant(self, event_id: int, user_id: int) -> bool:
        added = super().add_participant(event_id, user_id)
        self.delete(event_id, self._events[event_id].creator_id)
        return added


def test_successful_register_still_reports_when_event_vanishes(views, notifier, clock) -> None:
    events = DeletedAfterWriteRepository()
    engine = RegistrationEngine(events=events, views=views, notifier=notifier, clock=clock)
    event = events.add(_draft(creator_id=1))

    view = engine.register(2, event.id)

    assert view["participants"] == [{"id": 2, "username": "bob"}]
    assert notifier.kinds == [NotificationKind.REGISTRATION_CHANGED]


def test_registration_closes_once_the_event_starts(engine, events, clock) -> None:
    event = events.add(_draft(days=1))
    engine.register(3, event.id)
    clock.now = NOW + timedelta(days=1)

    with pytest.raises(RegistrationClosedError):
        engine.register(2, event.id)
    with pytest.raises(RegistrationClosedError):
        engine.unregister(3, event.id)


def test_open_window_mode_ignores_event_date(events, views, notifier, clock) -> None:
    engine = RegistrationEngine(
        events=events, views=views, notifier=notifier, clock=clock, closes_at_start=False
    )
    event = events.add(_draft(days=-1))

    view = engine.register(2, event.id)

    assert view["isPast"] is True
    assert view["participantCount"] == 1


def test_status_reports_each_role(engine, events) -> None:
    event = events.add(_draft(creator_id=1))
    engine.register(2, event.id)

    assert engine.status(1, event.id).status is RegistrationStatus.CREATOR
    assert engine.status(2, event.id).to_dict() == {
        "isRegistered": True,
        "isCreator": False,
        "status": "registered",
    }
    assert engine.status(3, event.id).to_dict() == {
        "isRegistered": False,
        "isCreator": False,
        "status": "not-registered",
    }


def test_is_past_follows_clock(engine, events, clock) -> None:
    event = events.add(_draft(days=1))
    assert not engine.is_past(event)
    clock.now = event.date
    assert engine.is_past(event)


# Lifecycle


def test_create_broadcasts_resolved_event(lifecycle, notifier) -> None:
    view = lifecycle.create(_draft(image=PNG))

    assert view["creator"] == {"id": 1, "username": "alice"}
    assert view["hasImage"] is True
    assert view["isPast"] is False
    assert notifier.kinds == [NotificationKind.EVENT_CREATED]


def test_non_creator_cannot_delete(lifecycle, events, notifier) -> None:
    view = lifecycle.create(_draft(creator_id=1))

    with pytest.raises(EventNotFoundOrUnauthorizedError) as exc:
        lifecycle.delete(2, view["id"])

    assert exc.value.status == 404
    assert events.get(view["id"]) is not None
    assert notifier.kinds == [NotificationKind.EVENT_CREATED]


def test_delete_broadcasts_only_the_id(lifecycle, events, notifier) -> None:
    view = lifecycle.create(_draft())

    lifecycle.delete(1, view["id"])

    assert events.get(view["id"]) is None
    assert notifier.published[-1] == (NotificationKind.EVENT_DELETED, {"id": view["id"]})


def test_update_with_delete_image_clears_image(lifecycle, queries, notifier) -> None:
    view = lifecycle.create(_draft(image=PNG))

    updated = lifecycle.update(1, view["id"], EventChanges(image=PNG, delete_image=True))

    assert updated["hasImage"] is False
    with pytest.raises(ImageNotFoundError):
        queries.get_image(view["id"])
    assert notifier.kinds[-1] is NotificationKind.EVENT_UPDATED


def test_update_by_non_creator_is_rejected(lifecycle, events) -> None:
    view = lifecycle.create(_draft())

    with pytest.raises(EventNotFoundOrUnauthorizedError):
        lifecycle.update(2, view["id"], EventChanges(title="Hijacked"))

    assert events.get(view["id"]).title == "Meetup"


def test_partial_update_keeps_other_fields(lifecycle) -> None:
    view = lifecycle.create(_draft())

    updated = lifecycle.update(1, view["id"], EventChanges(location="Hall B"))

    assert updated["location"] == "Hall B"
    assert updated["title"] == "Meetup"


def test_delete_image_requires_an_image(lifecycle) -> None:
    view = lifecycle.create(_draft())

    with pytest.raises(NoImageError) as exc:
        lifecycle.delete_image(1, view["id"])

    assert exc.value.status == 409


def test_delete_image_by_creator(lifecycle, queries) -> None:
    view = lifecycle.create(_draft(image=PNG))

    with pytest.raises(EventNotFoundOrUnauthorizedError):
        lifecycle.delete_image(2, view["id"])

    assert lifecycle.delete_image(1, view["id"])["hasImage"] is False
    with pytest.raises(ImageNotFoundError):
        queries.get_image(view["id"])


# Queries


def test_list_by_creator_and_unknown_creator(lifecycle, queries) -> None:
    lifecycle.create(_draft(creator_id=1, days=3))
    lifecycle.create(_draft(creator_id=2, days=2))
    lifecycle.create(_draft(creator_id=1, days=1))

    mine = queries.list_by_creator("ALICE")

    assert [view["creator"]["id"] for view in mine] == [1, 1]
    assert mine[0]["date"] < mine[1]["date"]
    with pytest.raises(CreatorNotFoundError):
        queries.list_by_creator("nobody")


def test_list_all_resolves_names_in_one_lookup(lifecycle, engine, queries, users) -> None:
    first = lifecycle.create(_draft(creator_id=1))
    lifecycle.create(_draft(creator_id=2, days=1))
    engine.register(3, first["id"])
    users.batch_lookups = 0

    views = queries.list_all()

    assert users.batch_lookups == 1
    assert [view["creator"]["username"] for view in views] == ["bob", "alice"]


def test_get_returns_view_and_image(lifecycle, queries) -> None:
    view = lifecycle.create(_draft(image=PNG))

    assert queries.get(view["id"])["title"] == "Meetup"
    assert queries.get_image(view["id"]) == PNG
    with pytest.raises(EventNotFoundError):
        queries.get(12345)


def test_lifecycle_runs_without_a_transport(events, views) -> None:
    from eventhub.infrastructure.realtime import NullNotifier

    lifecycle = EventLifecycle(events=events, views=views, notifier=NullNotifier())

    view = lifecycle.create(_draft())
    lifecycle.delete(1, view["id"])

    assert events.get(view["id"]) is None
