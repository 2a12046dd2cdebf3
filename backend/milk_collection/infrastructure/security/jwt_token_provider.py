"""JWT implementation of the TokenProvider port (python-jose)."""

import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from milk_collection.application.interfaces import TokenProvider

logger = logging.getLogger(__name__)


class JWTTokenProvider(TokenProvider):
    """HMAC-signed JWTs carrying the account id as ``sub`` and an ``exp`` claim."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 60 * 24):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire = timedelta(minutes=expire_minutes)

    def issue(self, subject: str) -> str:
        now = datetime.now(timezone.utc)
        claims = {"sub": subject, "iat": now, "exp": now + self._expire}
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def read_subject(self, token: str) -> str | None:
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError as e:
            logger.debug("Rejected access token: %s", e)
            return None
        subject = payload.get("sub")
        return subject if isinstance(subject, str) and subject else None
