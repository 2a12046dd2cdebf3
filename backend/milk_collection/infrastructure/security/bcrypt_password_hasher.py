"""bcrypt implementation of the PasswordHasher port."""

import logging

import bcrypt

from milk_collection.application.interfaces import PasswordHasher

logger = logging.getLogger(__name__)

# bcrypt ignores everything past 72 bytes and newer releases reject it outright
_BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    password_bytes = password.encode("utf-8")
    if len(password_bytes) > _BCRYPT_MAX_BYTES:
        logger.warning(
            "Password exceeds %d bytes (%d bytes), truncating",
            _BCRYPT_MAX_BYTES, len(password_bytes),
        )
        password_bytes = password_bytes[:_BCRYPT_MAX_BYTES]
    return password_bytes


class BcryptPasswordHasher(PasswordHasher):
    """Salted bcrypt hashes stored as UTF-8 strings."""

    def __init__(self, rounds: int = 12):
        self._rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(_encode(password), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
        except ValueError as e:
            logger.error("Password verification error: %s", e)
            return False
