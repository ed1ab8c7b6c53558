"""Bearer tokens: HS256 JWTs carrying the caller's identity.

Claims are ``id``, ``email``, ``name`` (full name) and ``admin``, plus the
standard ``iat`` and ``exp``.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import jwt

from shared.config import get_settings
from shared.errors import Unauthorized

ALGORITHM = "HS256"
TOKEN_LIFETIME = timedelta(hours=24)


@dataclass(frozen=True)
class Identity:
    id: str
    email: str
    full_name: str
    is_admin: bool = False


class JWTTokenHandler:
    def __init__(self, secret: str, lifetime: timedelta = TOKEN_LIFETIME) -> None:
        self._secret = secret
        self.lifetime = lifetime

    def generate_token(self, identity: Identity) -> str:
        now = datetime.now(UTC)
        claims = {
            "id": identity.id,
            "email": identity.email,
            "name": identity.full_name,
            "admin": identity.is_admin,
            "iat": now,
            "exp": now + self.lifetime,
        }
        return jwt.encode(claims, self._secret, algorithm=ALGORITHM)

    def extract_identity(self, token: str) -> Identity:
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={"require": ["id", "exp"]},
            )
        except jwt.PyJWTError as exc:
            raise Unauthorized(f"the provided token is not valid: {exc}") from exc

        return Identity(
            id=claims["id"],
            email=claims.get("email", ""),
            full_name=claims.get("name", ""),
            is_admin=bool(claims.get("admin", False)),
        )


_current_handler: JWTTokenHandler | None = None


def get_token_handler() -> JWTTokenHandler:
    global _current_handler
    if _current_handler is None:
        _current_handler = JWTTokenHandler(get_settings().jwt_secret)
    return _current_handler


def set_token_handler(handler: JWTTokenHandler) -> None:
    global _current_handler
    _current_handler = handler


def reset_token_handler() -> None:
    global _current_handler
    _current_handler = None
