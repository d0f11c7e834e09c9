# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from balitour.application.use_cases.users.login_user import LoginUserUseCase
from balitour.application.use_cases.users.verify_session import VerifySessionUseCase
from balitour.domain.users.exceptions import InvalidSessionError
from balitour.interfaces.http.cookies import AUTH_COOKIE, SessionCookiePolicy
from balitour.interfaces.http.dto.auth import (
    LoginRequestDTO,
    LoginSuccessDTO,
    SessionDTO,
    UserDTO,
)
from balitour.interfaces.http.guards import extract_token
from balitour.shared.errors.validation import raise_validation_error
from balitour.shared.logging import logger


def _get_client_ip() -> str:
    # ProxyFix rewrites remote_addr when TRUSTED_PROXIES is set.
    return request.remote_addr or "unknown"


class AuthController:
    def __init__(
        self,
        *,
        login_use_case: LoginUserUseCase,
        verify_session_use_case: VerifySessionUseCase,
        cookie_policy: SessionCookiePolicy,
    ) -> None:
        self._login_use_case = login_use_case
        self._verify_session_use_case = verify_session_use_case
        self._cookie_policy = cookie_policy

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        result = self._login_use_case.execute(dto.email, dto.password, _get_client_ip())

        payload = LoginSuccessDTO(user=UserDTO.from_session_user(result.user))
        response = jsonify(payload.model_dump(by_alias=True))
        self._cookie_policy.attach(response, result.token)
        return response, HTTPStatus.OK

    def me(self) -> tuple[Response, int]:
        try:
            user = self._verify_session_use_case.execute(extract_token())
        except InvalidSessionError as exc:
            response = jsonify(exc.to_dict())
            if AUTH_COOKIE in request.cookies:
                self._cookie_policy.clear(response)
                logger.info("auth.me: cleared invalid session cookie")
            return response, HTTPStatus.UNAUTHORIZED

        payload = SessionDTO(user=UserDTO.from_session_user(user))
        return jsonify(payload.model_dump(by_alias=True)), HTTPStatus.OK

    def logout(self) -> tuple[Response, int]:
        response = jsonify({"success": True})
        self._cookie_policy.clear(response)
        logger.info("auth.logout: ok")
        return response, HTTPStatus.OK

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/me", view_func=self.me, methods=["GET"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        return bp
