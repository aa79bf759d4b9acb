from __future__ import annotations

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from ..core.constants import DEFAULT_TOKEN_EXPIRE_MINUTES
from ..core.exceptions import AuthError

ALGORITHM = "HS256"


class TokenService:
    """Issue and verify bearer tokens carrying the user id."""

    def __init__(self, secret_key: str, *, expire_minutes: int = DEFAULT_TOKEN_EXPIRE_MINUTES):
        self._secret_key = secret_key
        self._expire = timedelta(minutes=int(expire_minutes))

    def issue(self, user_id: int, *, now: datetime | None = None) -> str:
        now = now or datetime.now(timezone.utc)
        payload = {"sub": str(user_id), "exp": now + self._expire}
        return jwt.encode(payload, self._secret_key, algorithm=ALGORITHM)

    def verify(self, token: str) -> int:
        if not token:
            raise AuthError("Not authorized, no token")
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[ALGORITHM])
            return int(payload["sub"])
        except (JWTError, KeyError, ValueError):
            raise AuthError("Not authorized, token failed")
