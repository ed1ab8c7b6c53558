"""FastAPI dependencies that authenticate the caller.

``require_identity`` decodes the bearer token and binds the caller into the
request context read by the catalog and shop services. It stays a coroutine:
FastAPI resolves it in the request's own context, which the sync endpoints
then copy into the threadpool.
"""

from fastapi import Request

from authentication.authenticator import identify
from authentication.tokens import Identity
from shared.context import bind_context
from shared.errors import Unauthorized

BEARER_PREFIX = "bearer "


def _bearer_token(request: Request) -> str:
    header = request.headers.get("Authorization", "")
    if not header.lower().startswith(BEARER_PREFIX):
        raise Unauthorized("the authorization header must carry a bearer token")
    token = header[len(BEARER_PREFIX) :].strip()
    if not token:
        raise Unauthorized("the authorization header must carry a bearer token")
    return token


async def require_identity(request: Request) -> Identity:
    identity = identify(_bearer_token(request))
    bind_context(user_id=identity.id, admin=identity.is_admin)
    return identity
