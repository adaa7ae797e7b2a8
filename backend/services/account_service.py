"""Signup, login, profile and logout.

Users move straight from "absent" to "registered"; there is no pending
state. Tokens are stateless, so logout only acknowledges the request.
"""

import logging

from backend.auth.jwt_handler import TokenClaims, TokenService
from backend.core.exceptions import InvalidCredentials, InvalidRole, MissingFields, UserNotFound
from backend.models.user import ROLES
from backend.services.credential_store import CredentialStore

logger = logging.getLogger(__name__)


def normalize_email(email: str | None) -> str:
    return (email or '').strip().lower()


class AccountService:
    def __init__(self, store: CredentialStore, tokens: TokenService):
        self.store = store
        self.tokens = tokens

    def signup(self, email: str | None, password: str | None, role: str | None) -> None:
        normalized_email = normalize_email(email)
        normalized_role = (role or '').strip().lower()
        if not normalized_email or not password or not normalized_role:
            raise MissingFields('Please provide email, password, and role.')
        if normalized_role not in ROLES:
            raise InvalidRole(role)

        user = self.store.create_user(normalized_email, password, normalized_role)
        logger.info('Registered %s %s (id=%s)', user.role, user.email, user.id)

    def login(self, email: str | None, password: str | None) -> str:
        normalized_email = normalize_email(email)
        if not normalized_email or not password:
            raise MissingFields('Please provide email and password.')

        user = self.store.find_by_email(normalized_email)
        if user is None:
            raise UserNotFound()
        if not self.store.verify_password(user, password):
            logger.info('Rejected login for %s: password mismatch', normalized_email)
            raise InvalidCredentials()

        logger.info('Issued token for %s (id=%s)', user.email, user.id)
        return self.tokens.issue(user.id, user.role)

    def profile(self, identity: TokenClaims) -> dict:
        # Claims come from the token; the store is not consulted.
        return identity.as_dict()

    def logout(self, identity: TokenClaims) -> None:
        logger.info('Logout acknowledged for user id=%s', identity.subject_id)
