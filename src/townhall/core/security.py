"""Bearer token utilities built on signed JWTs."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from townhall.core.exceptions import AuthenticationFailure
from townhall.core.settings import settings
from townhall.schemas.common import SQL_INT_MAX, SQL_INT_MIN


def create_access_token(user_id: int, extra_claims: dict[str, str] | None = None) -> str:
    """Create a signed access token asserting ``user_id``.

    Args:
        user_id: Local user identifier placed in the ``sub`` claim.
        extra_claims: Optional additional claims to embed.

    Returns:
        Encoded JWT valid for ``ACCESS_TOKEN_EXPIRE_MINUTES``.
    """
    to_encode: dict[str, object] = {"sub": str(user_id)}
    if extra_claims:
        to_encode.update(extra_claims)
    expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = expire
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str) -> int:
    """Verify ``token`` and return the user id it asserts.

    Raises:
        AuthenticationFailure: If the signature, expiry or subject is invalid.
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as err:
        raise AuthenticationFailure() from err

    subject = payload.get("sub")
    if subject is None:
        raise AuthenticationFailure()
    try:
        user_id = int(subject)
    except (TypeError, ValueError) as err:
        raise AuthenticationFailure() from err
    if not SQL_INT_MIN <= user_id <= SQL_INT_MAX:
        raise AuthenticationFailure()
    return user_id
