import logging

from fastapi import Depends, Header, Request

from backend.auth import jwt_handler
from backend.auth.hashing import BcryptHasher, Hasher
from backend.auth.jwt_handler import InvalidToken, TokenClaims, TokenService
from backend.core.exceptions import Forbidden, Unauthenticated

logger = logging.getLogger(__name__)


def get_token_service() -> TokenService:
    return jwt_handler.build_token_service()


def get_hasher() -> Hasher:
    return BcryptHasher()


def get_current_identity(
    request: Request,
    authorization: str | None = Header(default=None),
    tokens: TokenService = Depends(get_token_service),
) -> TokenClaims:
    # The header carries the raw token, without a "Bearer " prefix.
    token = (authorization or "").strip()
    if not token:
        raise Unauthenticated()

    try:
        identity = tokens.verify(token)
    except InvalidToken as exc:
        logger.warning("Rejected token on %s %s: %s", request.method, request.url.path, exc)
        raise Forbidden() from exc

    request.state.identity = identity
    return identity
