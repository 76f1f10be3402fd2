"""JWT helpers for caller authentication.

Tokens are issued by the sign-in flow; this service only verifies them. The
``sub`` claim carries the user id, ``name`` the display name and ``role``
either ``USER`` or ``ADMIN``.
"""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import jwt

from beam_stage.core.settings import settings


def create_access_token(
    user_id: str,
    *,
    name: str | None = None,
    role: str = "USER",
    expires_minutes: int = 60 * 24 * 30,
) -> str:
    """Create a signed access token for ``user_id``."""
    to_encode: dict[str, Any] = {
        "sub": user_id,
        "role": role,
        "exp": datetime.now(UTC) + timedelta(minutes=expires_minutes),
    }
    if name is not None:
        to_encode["name"] = name
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str) -> dict[str, Any]:
    """Verify a token's signature and expiry and return its claims.

    Raises:
        jose.JWTError: If the token is malformed, expired or wrongly signed.
    """
    claims: dict[str, Any] = jwt.decode(
        token,
        settings.secret_key,
        algorithms=[settings.jwt_algorithm],
    )
    return claims
