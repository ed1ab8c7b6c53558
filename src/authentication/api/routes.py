"""FastAPI endpoints for the authentication domain."""

from fastapi import APIRouter, Response

from authentication import authenticator
from authentication.api.schemas import (
    CredentialsResponse,
    LoginRequest,
    PasswordResetRequest,
    RegisterRequest,
)

router = APIRouter(tags=["authentication"])


@router.post("/register", status_code=201, response_model=CredentialsResponse)
def register(body: RegisterRequest) -> CredentialsResponse:
    token = authenticator.register(
        first_name=body.first_name,
        last_name=body.last_name,
        email=body.email,
        password=body.password,
        password_confirmation=body.password_confirmation,
    )
    return CredentialsResponse(token=token)


@router.post("/login", response_model=CredentialsResponse)
def login(body: LoginRequest) -> CredentialsResponse:
    return CredentialsResponse(token=authenticator.login(email=body.email, password=body.password))


@router.post("/password-reset", status_code=204)
def reset_password(body: PasswordResetRequest) -> Response:
    authenticator.reset_password(email=body.email)
    return Response(status_code=204)
