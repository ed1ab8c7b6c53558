"""Ambient request context: correlation id, caller id and admin flag.

The HTTP layer binds a ``RequestContext`` for the duration of each request.
Domain services read it where authorization is needed. The same values are
mirrored into structlog's context variables so every log line of a request
carries them.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace

import structlog


@dataclass(frozen=True)
class RequestContext:
    request_id: str = ""
    user_id: str = ""
    admin: bool = False

    @property
    def authenticated(self) -> bool:
        return bool(self.user_id)


_ANONYMOUS = RequestContext()

_current: ContextVar[RequestContext] = ContextVar("request_context", default=_ANONYMOUS)


def current_context() -> RequestContext:
    """Return the context bound to the running request (anonymous outside one)."""
    return _current.get()


def bind_context(**values) -> RequestContext:
    """Merge ``values`` into the current context and return the new one."""
    context = replace(_current.get(), **values)
    _current.set(context)
    structlog.contextvars.bind_contextvars(**{k: v for k, v in values.items() if k != "admin"})
    return context


@contextmanager
def request_context(request_id: str = "", user_id: str = "", admin: bool = False) -> Iterator[RequestContext]:
    """Bind a fresh context for the duration of the block."""
    context = RequestContext(request_id=request_id, user_id=user_id, admin=admin)
    token = _current.set(context)
    log_tokens = structlog.contextvars.bind_contextvars(request_id=request_id, user_id=user_id)
    try:
        yield context
    finally:
        structlog.contextvars.reset_contextvars(**log_tokens)
        _current.reset(token)
