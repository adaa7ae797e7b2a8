import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from backend.auth.hashing import Hasher
from backend.core.exceptions import AlreadyExists, MissingFields, StoreError
from backend.models.account import Account

logger = logging.getLogger(__name__)


class UserService:
    """Backs the standalone /api/users endpoint."""

    def __init__(self, db: Session, hasher: Hasher):
        self.db = db
        self.hasher = hasher

    def create_user(self, username: str | None, password: str | None) -> Account:
        normalized_username = (username or '').strip()
        if not normalized_username or not password:
            raise MissingFields('Username and password are required.')

        account = Account(username=normalized_username, hashed_password=self.hasher.hash(password))
        try:
            self.db.add(account)
            self.db.commit()
            self.db.refresh(account)
        except IntegrityError as exc:
            self.db.rollback()
            raise AlreadyExists(f"Username '{normalized_username}' is already taken.") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception('Failed to create account %s', normalized_username)
            raise StoreError(str(exc)) from exc

        logger.info('Created account %s (id=%s)', account.username, account.id)
        return account
