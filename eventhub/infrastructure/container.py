# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from eventhub.application.services.event_views import EventViewResolver
from eventhub.application.services.password_hashing import WerkzeugPasswordHasher
from eventhub.application.services.session_tokens import JwtSessionTokenService
from eventhub.application.use_cases.events.lifecycle import EventLifecycle
from eventhub.application.use_cases.events.queries import EventQueries
from eventhub.application.use_cases.events.registration import RegistrationEngine
from eventhub.application.use_cases.users.login_user import LoginUserUseCase
from eventhub.application.use_cases.users.profile import ProfileUseCase
from eventhub.application.use_cases.users.register_user import RegisterUserUseCase
from eventhub.infrastructure.auth.login_attempts import LoginAttemptsTracker
from eventhub.infrastructure.realtime import SocketIONotifier, socketio
from eventhub.infrastructure.repositories import (
    SqlAlchemyEventRepository,
    SqlAlchemyUserRepository,
)
from eventhub.interfaces.http.controllers.auth_controller import AuthController
from eventhub.interfaces.http.controllers.events_controller import EventsController
from eventhub.interfaces.http.controllers.misc_controller import MiscController
from eventhub.interfaces.http.controllers.users_controller import UsersController
from eventhub.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self._config = config or load_config()

    @property
    def config(self) -> AppConfig:
        return self._config

    # Repositories and services

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository()

    @cached_property
    def event_repository(self) -> SqlAlchemyEventRepository:
        return SqlAlchemyEventRepository()

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def session_tokens(self) -> JwtSessionTokenService:
        auth = self._config.auth
        return JwtSessionTokenService(
            secret=auth.jwt_secret,
            ttl_seconds=auth.token_ttl_seconds,
            algorithm=auth.jwt_algorithm,
        )

    @cached_property
    def login_attempts(self) -> LoginAttemptsTracker:
        return LoginAttemptsTracker()

    @cached_property
    def event_views(self) -> EventViewResolver:
        return EventViewResolver(users=self.user_repository)

    @cached_property
    def notifier(self) -> SocketIONotifier:
        return SocketIONotifier(socketio, background=self._config.realtime.async_delivery)

    # Use cases

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            tokens=self.session_tokens,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            tokens=self.session_tokens,
            password_hasher=self.password_hasher,
            attempts=self.login_attempts,
        )

    @cached_property
    def profile_use_case(self) -> ProfileUseCase:
        return ProfileUseCase(users=self.user_repository)

    @cached_property
    def event_lifecycle(self) -> EventLifecycle:
        return EventLifecycle(
            events=self.event_repository,
            views=self.event_views,
            notifier=self.notifier,
        )

    @cached_property
    def event_queries(self) -> EventQueries:
        return EventQueries(
            events=self.event_repository,
            users=self.user_repository,
            views=self.event_views,
        )

    @cached_property
    def registration_engine(self) -> RegistrationEngine:
        return RegistrationEngine(
            events=self.event_repository,
            views=self.event_views,
            notifier=self.notifier,
            closes_at_start=self._config.registration.closes_at_start,
        )

    # Controllers

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            profile_use_case=self.profile_use_case,
        )

    @cached_property
    def users_controller(self) -> UsersController:
        return UsersController(profile_use_case=self.profile_use_case)

    @cached_property
    def events_controller(self) -> EventsController:
        return EventsController(
            lifecycle=self.event_lifecycle,
            queries=self.event_queries,
            registration=self.registration_engine,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController()


container = Container()
