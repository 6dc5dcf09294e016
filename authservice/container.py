# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Application dependency container."""

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from authservice.application.services.credentials import CredentialService
from authservice.application.services.password_hashing import WerkzeugPasswordHasher
from authservice.application.use_cases.users.delete_user import DeleteUserUseCase
from authservice.application.use_cases.users.get_user import GetUserUseCase
from authservice.application.use_cases.users.list_users import ListUsersUseCase
from authservice.application.use_cases.users.login_user import LoginUserUseCase
from authservice.application.use_cases.users.logout_user import LogoutUserUseCase
from authservice.application.use_cases.users.register_user import RegisterUserUseCase
from authservice.infrastructure.auth.jwt_tokens import JwtTokenCodec
from authservice.infrastructure.db import SessionLocal
from authservice.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyRevokedTokenRepository,
    SqlAlchemyUserRepository,
)
from authservice.interfaces.http.controllers.auth_controller import AuthController
from authservice.interfaces.http.guards import BearerAuthGuard
from authservice.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self._config = config or load_config()

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def token_codec(self) -> JwtTokenCodec:
        return JwtTokenCodec(
            secret=self._config.secret_key,
            ttl=timedelta(days=self._config.auth.token_ttl_days),
            algorithm=self._config.auth.jwt_algorithm,
        )

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(SessionLocal)

    @cached_property
    def revoked_token_repository(self) -> SqlAlchemyRevokedTokenRepository:
        return SqlAlchemyRevokedTokenRepository(SessionLocal)

    @cached_property
    def credential_service(self) -> CredentialService:
        return CredentialService(
            password_hasher=self.password_hasher,
            codec=self.token_codec,
            revoked=self.revoked_token_repository,
        )

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(users=self.user_repository, credentials=self.credential_service)

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(users=self.user_repository, credentials=self.credential_service)

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(credentials=self.credential_service)

    @cached_property
    def list_users_use_case(self) -> ListUsersUseCase:
        return ListUsersUseCase(users=self.user_repository)

    @cached_property
    def get_user_use_case(self) -> GetUserUseCase:
        return GetUserUseCase(users=self.user_repository)

    @cached_property
    def delete_user_use_case(self) -> DeleteUserUseCase:
        return DeleteUserUseCase(users=self.user_repository)

    @cached_property
    def auth_guard(self) -> BearerAuthGuard:
        return BearerAuthGuard(credentials=self.credential_service, users=self.user_repository)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
            list_users_use_case=self.list_users_use_case,
            get_user_use_case=self.get_user_use_case,
            delete_user_use_case=self.delete_user_use_case,
            guard=self.auth_guard,
        )


container = Container()
