"""Pydantic DTOs for registration, login and token verification."""

import re

from pydantic import BaseModel, Field, field_validator

from car_inventory.application.schemas.car import EMAIL_PATTERN
from car_inventory.domain.entities import UserRole
from car_inventory.domain.entities.car import MAX_EMAIL_LENGTH


class RegisterRequest(BaseModel):
    email: str = Field(
        ..., max_length=MAX_EMAIL_LENGTH, pattern=EMAIL_PATTERN, examples=["jane@example.com"]
    )
    password: str = Field(..., min_length=6, examples=["Password123"])
    name: str = Field(..., min_length=2, max_length=100, examples=["Jane Doe"])

    model_config = {"str_strip_whitespace": True}

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.lower()

    @field_validator("password")
    @classmethod
    def password_strength(cls, value: str) -> str:
        if not (
            re.search(r"[a-z]", value)
            and re.search(r"[A-Z]", value)
            and re.search(r"\d", value)
        ):
            raise ValueError(
                "password must contain at least one upper-case letter, "
                "one lower-case letter and one digit"
            )
        return value


class LoginRequest(BaseModel):
    email: str = Field(..., max_length=MAX_EMAIL_LENGTH, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=1)

    model_config = {"str_strip_whitespace": True}

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.lower()


class UserResponse(BaseModel):
    id: str
    email: str
    name: str
    role: UserRole

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    user: UserResponse
    token: str


class TokenVerifyRequest(BaseModel):
    token: str = Field(..., min_length=1)


class TokenPayloadResponse(BaseModel):
    id: str
    email: str
    role: UserRole

    model_config = {"from_attributes": True}


class TokenVerifyResponse(BaseModel):
    valid: bool
    payload: TokenPayloadResponse
