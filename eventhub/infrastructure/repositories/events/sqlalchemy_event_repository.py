# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from eventhub.domain.entities import ImageBlob, as_utc
from eventhub.domain.events.entities import Event as DomainEvent
from eventhub.domain.events.entities import EventChanges, NewEvent
from eventhub.domain.events.repositories import EventRepository
from eventhub.infrastructure.db.models import Event, EventParticipant
from eventhub.infrastructure.db.session import session_scope
from eventhub.shared.logging import logger


def _to_domain(row: Event) -> DomainEvent:
    return DomainEvent(
        id=row.id,
        creator_id=row.creator_id,
        title=row.title,
        description=row.description,
        date=as_utc(row.date),
        location=row.location,
        has_image=row.image_content_type is not None,
        participant_ids=frozenset(p.user_id for p in row.participants),
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


class SqlAlchemyEventRepository(EventRepository):
    def add(self, draft: NewEvent) -> DomainEvent:
        with session_scope() as session:
            row = Event(
                creator_id=draft.creator_id,
                title=draft.title,
                description=draft.description,
                date=draft.date,
                location=draft.location,
            )
            if draft.image is not None:
                row.image_data = draft.image.data
                row.image_content_type = draft.image.content_type
            session.add(row)
            session.flush()
            session.refresh(row)
            return _to_domain(row)

    def get(self, event_id: int) -> DomainEvent | None:
        with session_scope() as session:
            row = session.get(Event, event_id)
            return _to_domain(row) if row else None

    def list_all(self) -> Sequence[DomainEvent]:
        with session_scope() as session:
            rows = session.execute(select(Event).order_by(Event.date.asc(), Event.id.asc()))
            return [_to_domain(row) for row in rows.scalars()]

    def list_by_creator(self, creator_id: int) -> Sequence[DomainEvent]:
        with session_scope() as session:
            rows = session.execute(
                select(Event)
                .where(Event.creator_id == creator_id)
                .order_by(Event.date.asc(), Event.id.asc())
            )
            return [_to_domain(row) for row in rows.scalars()]

    def get_image(self, event_id: int) -> ImageBlob | None:
        with session_scope() as session:
            row = session.execute(
                select(Event.image_data, Event.image_content_type).where(Event.id == event_id)
            ).first()
            if row is None or not row.image_data or not row.image_content_type:
                return None
            return ImageBlob(data=row.image_data, content_type=row.image_content_type)

    def update(self, event_id: int, creator_id: int, changes: EventChanges) -> DomainEvent | None:
        values: dict[str, object] = dict(changes.field_values())
        if changes.delete_image:
            values["image_data"] = None
            values["image_content_type"] = None
        elif changes.image is not None:
            values["image_data"] = changes.image.data
            values["image_content_type"] = changes.image.content_type

        with session_scope() as session:
            if values:
                result = session.execute(
                    update(Event)
                    .where(Event.id == event_id, Event.creator_id == creator_id)
                    .values(**values)
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount == 0:
                    return None
            row = self._owned(session, event_id, creator_id)
            return _to_domain(row) if row else None

    def delete(self, event_id: int, creator_id: int) -> bool:
        with session_scope() as session:
            result = session.execute(
                delete(Event).where(Event.id == event_id, Event.creator_id == creator_id)
            )
            return result.rowcount > 0

    def add_participant(self, event_id: int, user_id: int) -> bool:
        with session_scope() as session:
            session.add(EventParticipant(event_id=event_id, user_id=user_id))
            try:
                session.flush()
            except IntegrityError:
                session.rollback()
                logger.debug(
                    f"events.participants: add skipped event_id={event_id} user_id={user_id}"
                )
                return False
            return True

    def remove_participant(self, event_id: int, user_id: int) -> bool:
        with session_scope() as session:
            result = session.execute(
                delete(EventParticipant).where(
                    EventParticipant.event_id == event_id,
                    EventParticipant.user_id == user_id,
                )
            )
            return result.rowcount > 0

    @staticmethod
    def _owned(session: Session, event_id: int, creator_id: int) -> Event | None:
        session.expire_all()
        return session.execute(
            select(Event).where(Event.id == event_id, Event.creator_id == creator_id)
        ).scalar_one_or_none()
