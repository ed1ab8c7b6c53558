"""Pydantic request/response schemas for the authentication API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "firstName": "Raphael",
                    "lastName": "Collin",
                    "email": "raphael@test.com",
                    "password": "password",
                    "passwordConfirmation": "password",
                }
            ]
        },
    )

    first_name: str = Field(..., alias="firstName", min_length=1, max_length=150)
    last_name: str = Field(..., alias="lastName", min_length=1, max_length=150)
    email: str = Field(..., max_length=254)
    password: str = Field(..., min_length=6, max_length=20)
    password_confirmation: str = Field(..., alias="passwordConfirmation", max_length=20)


class LoginRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"email": "raphael@test.com", "password": "password"}]}}

    email: str = Field(..., max_length=254)
    password: str = Field(..., min_length=1, max_length=20)


class PasswordResetRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"email": "raphael@test.com"}]}}

    email: str = Field(..., max_length=254)


class CredentialsResponse(BaseModel):
    token: str
