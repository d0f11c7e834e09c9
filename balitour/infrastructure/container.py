# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from balitour.application.services.password_hashing import BcryptPasswordHasher
from balitour.application.use_cases.catalog.publishing import CatalogPublishingUseCase
from balitour.application.use_cases.users.login_user import LoginUserUseCase
from balitour.application.use_cases.users.verify_session import VerifySessionUseCase
from balitour.domain.catalog.codecs import PACKAGE_CODEC, TESTIMONIAL_CODEC
from balitour.domain.catalog.entities import Package, Testimonial
from balitour.infrastructure.auth.credentials import EnvCredentialStore
from balitour.infrastructure.auth.login_attempts import (
    AttemptStore,
    InMemoryAttemptStore,
    LoginRateLimiter,
)
from balitour.infrastructure.auth.tokens import JwtSessionSigner
from balitour.infrastructure.storage import (
    JsonCatalogRepository,
    package_repository,
    testimonial_repository,
)
from balitour.interfaces.http.controllers.auth_controller import AuthController
from balitour.interfaces.http.controllers.catalog_controller import CatalogController
from balitour.interfaces.http.controllers.misc_controller import MiscController
from balitour.interfaces.http.cookies import SessionCookiePolicy
from balitour.interfaces.http.dto.catalog import (
    PackageCreateDTO,
    PackageDTO,
    PackageQueryDTO,
    PackageUpdateDTO,
    TestimonialCreateDTO,
    TestimonialDTO,
    TestimonialQueryDTO,
    TestimonialUpdateDTO,
)
from balitour.interfaces.http.guards import SessionGuard
from balitour.shared.config import AppConfig
from balitour.shared.logging import logger


class Container:
    """Builds the object graph for one application instance."""

    def __init__(self, config: AppConfig, *, attempt_store: AttemptStore | None = None) -> None:
        self.config = config
        self._attempt_store = attempt_store

    # Auth

    @cached_property
    def password_hasher(self) -> BcryptPasswordHasher:
        return BcryptPasswordHasher()

    @cached_property
    def credential_store(self) -> EnvCredentialStore:
        return EnvCredentialStore.from_config(self.config)

    @cached_property
    def attempt_store(self) -> AttemptStore:
        return self._attempt_store if self._attempt_store is not None else InMemoryAttemptStore()

    @cached_property
    def rate_limiter(self) -> LoginRateLimiter:
        return LoginRateLimiter(
            self.attempt_store,
            max_attempts=self.config.auth.max_attempts,
            lockout_seconds=self.config.auth.lockout_seconds,
        )

    @cached_property
    def session_signer(self) -> JwtSessionSigner:
        if not self.config.jwt_secret:
            logger.warning(
                "container: JWT_SECRET is not set, signing sessions with the "
                "development secret"
            )
        return JwtSessionSigner(
            self.config.signing_secret,
            ttl=timedelta(days=self.config.auth.session_ttl_days),
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            credentials=self.credential_store,
            password_hasher=self.password_hasher,
            signer=self.session_signer,
            limiter=self.rate_limiter,
        )

    @cached_property
    def verify_session_use_case(self) -> VerifySessionUseCase:
        return VerifySessionUseCase(signer=self.session_signer)

    @cached_property
    def session_guard(self) -> SessionGuard:
        return SessionGuard(self.verify_session_use_case)

    @cached_property
    def cookie_policy(self) -> SessionCookiePolicy:
        return SessionCookiePolicy(
            secure=self.config.secure_cookies,
            max_age=self.config.auth.session_ttl_seconds,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            login_use_case=self.login_user_use_case,
            verify_session_use_case=self.verify_session_use_case,
            cookie_policy=self.cookie_policy,
        )

    # Catalog

    @cached_property
    def package_repository(self) -> JsonCatalogRepository[Package]:
        return package_repository(self.config.catalog.directory)

    @cached_property
    def testimonial_repository(self) -> JsonCatalogRepository[Testimonial]:
        return testimonial_repository(self.config.catalog.directory)

    @cached_property
    def package_publishing(self) -> CatalogPublishingUseCase[Package]:
        return CatalogPublishingUseCase(self.package_repository)

    @cached_property
    def testimonial_publishing(self) -> CatalogPublishingUseCase[Testimonial]:
        return CatalogPublishingUseCase(self.testimonial_repository)

    @cached_property
    def packages_controller(self) -> CatalogController[Package]:
        return CatalogController(
            collection="packages",
            use_case=self.package_publishing,
            codec=PACKAGE_CODEC,
            guard=self.session_guard,
            create_dto=PackageCreateDTO,
            update_dto=PackageUpdateDTO,
            response_dto=PackageDTO,
            query_dto=PackageQueryDTO,
        )

    @cached_property
    def testimonials_controller(self) -> CatalogController[Testimonial]:
        return CatalogController(
            collection="testimonials",
            use_case=self.testimonial_publishing,
            codec=TESTIMONIAL_CODEC,
            guard=self.session_guard,
            create_dto=TestimonialCreateDTO,
            update_dto=TestimonialUpdateDTO,
            response_dto=TestimonialDTO,
            query_dto=TestimonialQueryDTO,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(self.config.catalog.directory)
