"""Actor context from the bearer token (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from sopflow.domain.exceptions import AuthenticationException
from sopflow.infrastructure.security.jwt import actor_from_claims, verify_token
from sopflow.shared.context import ActorContext

_http_bearer = HTTPBearer(auto_error=False)


async def get_actor(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> ActorContext:
    """Return the actor from a verified JWT; AuthenticationException (401) otherwise."""
    if not credentials:
        raise AuthenticationException("Not authenticated")
    try:
        return actor_from_claims(verify_token(credentials.credentials))
    except ValueError as e:
        raise AuthenticationException(str(e)) from e
