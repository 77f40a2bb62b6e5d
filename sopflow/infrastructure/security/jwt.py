"""JWT token creation and verification for the actor context.

Uses sopflow.core.config for secret and algorithm. Claims: sub (actor id),
optional role, optional permissions (explicit capability codes).
"""

from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt

from sopflow.core.config import get_settings
from sopflow.shared.context import ActorContext


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token with the given claims.

    Args:
        data: Claims to encode (e.g. sub, role, permissions).
        expires_delta: Optional TTL; else uses settings.access_token_expire_minutes.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    to_encode = data.copy()
    if expires_delta is not None:
        expire = datetime.now(UTC) + expires_delta
    else:
        expire = datetime.now(UTC) + timedelta(
            minutes=settings.access_token_expire_minutes
        )
    to_encode["exp"] = expire
    encoded = jwt.encode(
        to_encode,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def verify_token(token: str) -> dict[str, Any]:
    """Verify and decode a JWT. Returns the payload.

    Raises:
        ValueError: If token is invalid, expired, or missing required claims.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if not payload.get("sub"):
        raise ValueError("Token missing required claim: sub")
    return payload


def actor_from_claims(payload: dict[str, Any]) -> ActorContext:
    """Build an ActorContext from verified claims.

    Raises:
        ValueError: If permissions is present but not a list of strings.
    """
    permissions = payload.get("permissions") or []
    if not isinstance(permissions, list) or not all(
        isinstance(p, str) for p in permissions
    ):
        raise ValueError("Token claim 'permissions' must be a list of strings")
    role = payload.get("role")
    return ActorContext(
        actor_id=str(payload["sub"]),
        role=str(role) if role else None,
        capabilities=frozenset(permissions),
    )
