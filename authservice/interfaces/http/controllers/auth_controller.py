# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response, g, jsonify, request
from pydantic import ValidationError

from authservice.application.use_cases.users.delete_user import DeleteUserUseCase
from authservice.application.use_cases.users.get_user import GetUserUseCase
from authservice.application.use_cases.users.list_users import ListUsersUseCase
from authservice.application.use_cases.users.login_user import LoginUserUseCase
from authservice.application.use_cases.users.logout_user import LogoutUserUseCase
from authservice.application.use_cases.users.register_user import RegisterUserUseCase
from authservice.interfaces.http.dto.auth import (
    LoginRequestDTO,
    MessageResponseDTO,
    SignUpRequestDTO,
    TokenResponseDTO,
    UserResponseDTO,
)
from authservice.interfaces.http.guards import BearerAuthGuard
from authservice.shared.errors.validation import raise_validation_error
from authservice.shared.logging import logger

# SQLite INTEGER upper bound
_MAX_USER_ID = 2**63 - 1
_USER_ID_RULE = f"/<int(max={_MAX_USER_ID}):user_id>"


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        list_users_use_case: ListUsersUseCase,
        get_user_use_case: GetUserUseCase,
        delete_user_use_case: DeleteUserUseCase,
        guard: BearerAuthGuard,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._list_users_use_case = list_users_use_case
        self._get_user_use_case = get_user_use_case
        self._delete_user_use_case = delete_user_use_case
        self._guard = guard

    def signup(self) -> tuple[Response, int]:
        try:
            dto = SignUpRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user, token = self._register_use_case.execute(dto.email, dto.password)

        logger.info(f"auth.signup: ok user_id={user.id}")
        return jsonify(TokenResponseDTO(token=token).model_dump()), HTTPStatus.CREATED

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        try:
            token = self._login_use_case.execute(dto.email, dto.password)
        except Exception:
            logger.warning(f"auth.login: rejected email={dto.email}")
            raise

        logger.info(f"auth.login: ok email={dto.email}")
        return jsonify(TokenResponseDTO(token=token).model_dump()), HTTPStatus.OK

    def list_users(self) -> tuple[Response, int]:
        users = self._list_users_use_case.execute()
        payload = [UserResponseDTO.from_entity(user).model_dump(mode="json") for user in users]
        return jsonify(payload), HTTPStatus.OK

    def get_user(self, user_id: int) -> tuple[Response, int]:
        user = self._get_user_use_case.execute(user_id)
        return jsonify(UserResponseDTO.from_entity(user).model_dump(mode="json")), HTTPStatus.OK

    def delete_user(self, user_id: int) -> tuple[Response, int]:
        user = self._delete_user_use_case.execute(user_id)
        logger.info(f"auth.delete: user_id={user_id} by user={g.user_id}")
        return jsonify(UserResponseDTO.from_entity(user).model_dump(mode="json")), HTTPStatus.OK

    def logout(self) -> tuple[Response, int]:
        self._logout_use_case.execute(g.auth_token)

        logger.info(f"auth.logout: ok user_id={g.user_id}")
        payload = MessageResponseDTO(message="Logged out successfully").model_dump()
        return jsonify(payload), HTTPStatus.OK

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/auth")
        bp.add_url_rule("/signup", view_func=self.signup, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self._guard(self.logout), methods=["POST"])
        bp.add_url_rule("", view_func=self._guard(self.list_users), methods=["GET"])
        bp.add_url_rule(_USER_ID_RULE, view_func=self.get_user, methods=["GET"])
        bp.add_url_rule(
            _USER_ID_RULE, view_func=self._guard(self.delete_user), methods=["DELETE"]
        )
        return bp
