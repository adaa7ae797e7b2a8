"""Password hashing.

Flows depend on the ``Hasher`` protocol only, so the algorithm can change
without touching them. ``BcryptHasher`` is the implementation wired into the
HTTP layer.
"""

from typing import Protocol

import bcrypt

from backend.core import config

BCRYPT_MAX_PASSWORD_BYTES = 72


class Hasher(Protocol):
    def hash(self, password: str) -> str: ...

    def verify(self, password: str, hashed: str) -> bool: ...


class BcryptHasher:
    def __init__(self, rounds: int | None = None):
        self.rounds = rounds or config.BCRYPT_ROUNDS

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_encode(password), salt).decode("utf-8")

    def verify(self, password: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(_encode(password), hashed.encode("utf-8"))
        except (ValueError, TypeError):
            return False


def _encode(password: str) -> bytes:
    # bcrypt rejects inputs longer than 72 bytes.
    return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]
