# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .events.sqlalchemy_event_repository import SqlAlchemyEventRepository
from .users.sqlalchemy_user_repository import SqlAlchemyUserRepository

__all__ = ["SqlAlchemyEventRepository", "SqlAlchemyUserRepository"]
