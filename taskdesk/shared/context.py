"""Request context management using contextvars.

Holds the request id and the resolved actor for the current request so log
records can be tied to both without passing them through every call.

Usage:
    tokens = bind_request(request_id)
    set_current_actor(profile_id)
    ...
    reset_request(tokens)
"""

from contextvars import ContextVar, Token
from dataclasses import dataclass

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)
_actor_id: ContextVar[str | None] = ContextVar("actor_id", default=None)

RequestTokens = tuple[Token[str | None], Token[str | None]]


@dataclass(frozen=True)
class RequestContext:
    """Immutable snapshot of the current request context."""

    request_id: str | None
    actor_id: str | None


def bind_request(request_id: str) -> RequestTokens:
    """Start a request scope with the given id and no actor.

    Returns tokens for reset_request().
    """
    return _request_id.set(request_id), _actor_id.set(None)


def reset_request(tokens: RequestTokens) -> None:
    """Restore the context that was active before bind_request()."""
    request_token, actor_token = tokens
    _actor_id.reset(actor_token)
    _request_id.reset(request_token)


def set_current_actor(profile_id: str | None) -> None:
    """Record the profile that authenticated for this request."""
    _actor_id.set(profile_id)


def get_request_context() -> RequestContext:
    """Return a snapshot of the current request context."""
    return RequestContext(request_id=_request_id.get(), actor_id=_actor_id.get())
