# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import or_, select, update
from sqlalchemy.exc import IntegrityError

from eventhub.domain.entities import ImageBlob, as_utc
from eventhub.domain.users.entities import User as DomainUser
from eventhub.domain.users.exceptions import UserAlreadyExistsError
from eventhub.domain.users.repositories import UserRepository
from eventhub.infrastructure.db.models import User
from eventhub.infrastructure.db.session import session_scope
from eventhub.shared.logging import logger


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        username=row.username,
        email=row.email,
        password_hash=row.password_hash,
        has_profile_picture=row.picture_content_type is not None,
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


class SqlAlchemyUserRepository(UserRepository):
    def find_by_username(self, username: str) -> DomainUser | None:
        return self._find_one(User.username == username)

    def find_by_email(self, email: str) -> DomainUser | None:
        return self._find_one(User.email == email)

    def find_by_login(self, email_or_username: str) -> DomainUser | None:
        return self._find_one(
            or_(User.email == email_or_username, User.username == email_or_username)
        )

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with session_scope() as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def add(self, user: DomainUser, profile_picture: ImageBlob | None = None) -> DomainUser:
        try:
            with session_scope() as session:
                row = User(
                    username=user.username,
                    email=user.email,
                    password_hash=user.password_hash,
                )
                if profile_picture is not None:
                    row.picture_data = profile_picture.data
                    row.picture_content_type = profile_picture.content_type
                session.add(row)
                session.flush()
                session.refresh(row)
                return _to_domain(row)
        except IntegrityError as exc:
            logger.warning(f"users.add: unique constraint hit for username={user.username}")
            raise UserAlreadyExistsError() from exc

    def usernames_for(self, user_ids: Iterable[int]) -> dict[int, str]:
        ids = set(user_ids)
        if not ids:
            return {}
        with session_scope() as session:
            rows = session.execute(select(User.id, User.username).where(User.id.in_(ids))).all()
            return {uid: username for uid, username in rows}

    def get_profile_picture(self, user_id: int) -> ImageBlob | None:
        with session_scope() as session:
            row = session.execute(
                select(User.picture_data, User.picture_content_type).where(User.id == user_id)
            ).first()
            if row is None or not row.picture_data or not row.picture_content_type:
                return None
            return ImageBlob(data=row.picture_data, content_type=row.picture_content_type)

    def set_profile_picture(self, user_id: int, picture: ImageBlob | None) -> bool:
        with session_scope() as session:
            result = session.execute(
                update(User)
                .where(User.id == user_id)
                .values(
                    picture_data=picture.data if picture else None,
                    picture_content_type=picture.content_type if picture else None,
                )
            )
            return result.rowcount > 0

    def _find_one(self, criterion) -> DomainUser | None:
        with session_scope() as session:
            row = session.execute(select(User).where(criterion).limit(1)).scalar_one_or_none()
            return _to_domain(row) if row else None
