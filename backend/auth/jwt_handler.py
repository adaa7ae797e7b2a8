from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable

import jwt

from backend.core import config

Clock = Callable[[], datetime]


class InvalidToken(Exception):
    """Raised when a token is malformed, tampered with or expired."""


@dataclass(frozen=True)
class TokenClaims:
    subject_id: int
    role: str
    issued_at: int | None = field(default=None, compare=False)
    expires_at: int | None = field(default=None, compare=False)

    def as_dict(self) -> dict:
        claims = {"id": self.subject_id, "role": self.role}
        if self.issued_at is not None:
            claims["iat"] = self.issued_at
        if self.expires_at is not None:
            claims["exp"] = self.expires_at
        return claims


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """Issues and verifies signed, time-limited session tokens.

    Tokens are stateless: there is no revocation list, so a token stays valid
    until ``exp`` and the role claim is trusted as issued.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_minutes: int = 60,
        clock: Clock | None = None,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_minutes = expires_minutes
        self.clock = clock or utc_now

    def issue(self, subject_id: int, role: str) -> str:
        now = self.clock()
        expire = now + timedelta(minutes=self.expires_minutes)
        payload = {
            "sub": str(subject_id),
            "role": role,
            "iat": int(now.timestamp()),
            "exp": int(expire.timestamp()),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        try:
            # Expiry is checked below against the injected clock.
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False, "verify_iat": False, "require": ["sub", "role", "exp"]},
            )
        except jwt.InvalidTokenError as exc:
            raise InvalidToken(f"Invalid token: {exc}") from exc

        if not isinstance(payload["exp"], (int, float)):
            raise InvalidToken("Invalid token expiry")
        if payload["exp"] <= self.clock().timestamp():
            raise InvalidToken("Token has expired")

        try:
            subject_id = int(payload["sub"])
        except (TypeError, ValueError) as exc:
            raise InvalidToken("Invalid token subject") from exc

        return TokenClaims(
            subject_id=subject_id,
            role=payload["role"],
            issued_at=payload.get("iat"),
            expires_at=int(payload["exp"]),
        )


def build_token_service(clock: Clock | None = None) -> TokenService:
    return TokenService(
        secret=config.JWT_SECRET_KEY,
        algorithm=config.JWT_ALGORITHM,
        expires_minutes=config.JWT_EXPIRES_MINUTES,
        clock=clock,
    )
