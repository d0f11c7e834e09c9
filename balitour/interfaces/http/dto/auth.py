from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from balitour.domain.users.entities import SessionUser


class LoginRequestDTO(BaseModel):
    # Presence and format are checked by the login use case so that the
    # response messages stay the same for every client.
    email: str | None = None
    password: str | None = None


class UserDTO(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, validate_by_name=True)

    id: str
    email: str
    role: str
    display_name: str | None = None

    @classmethod
    def from_session_user(cls, user: SessionUser) -> UserDTO:
        return cls(
            id=user.user_id,
            email=user.email,
            role=user.role.value,
            display_name=user.display_name or None,
        )


class LoginSuccessDTO(BaseModel):
    success: bool = True
    user: UserDTO
    message: str = "Login successful"


class SessionDTO(BaseModel):
    success: bool = True
    user: UserDTO
