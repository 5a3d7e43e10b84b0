from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class RegisterRequestDTO(BaseModel):
    # Usernames are case-sensitive and taken verbatim.
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=1024)

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Username cannot be blank")
        return value


class LoginRequestDTO(BaseModel):
    # Presence only: any other rejection must look like bad credentials.
    username: str
    password: str


class FormDescriptorDTO(BaseModel):
    form: str
    action: str
    fields: list[str] = Field(default_factory=lambda: ["username", "password"])


class WelcomeDTO(BaseModel):
    username: str
