import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from backend.auth.hashing import Hasher
from backend.core.exceptions import AlreadyExists, StoreError
from backend.models.user import User

logger = logging.getLogger(__name__)


class CredentialStore:
    """Persists users; passwords only ever reach the database hashed."""

    def __init__(self, db: Session, hasher: Hasher):
        self.db = db
        self.hasher = hasher

    def find_by_email(self, email: str) -> User | None:
        try:
            return self.db.query(User).filter(User.email == email).first()
        except SQLAlchemyError as exc:
            logger.exception("User lookup failed for %s", email)
            raise StoreError(str(exc)) from exc

    def create_user(self, email: str, password: str, role: str) -> User:
        if self.find_by_email(email) is not None:
            raise AlreadyExists("User already exists.")

        user = User(email=email, hashed_password=self.hasher.hash(password), role=role)
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        except IntegrityError as exc:
            # A concurrent signup took the email between the check and the insert.
            self.db.rollback()
            raise AlreadyExists("User already exists.") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Failed to persist user %s", email)
            raise StoreError(str(exc)) from exc

        return user

    def verify_password(self, user: User, password: str) -> bool:
        return self.hasher.verify(password, user.hashed_password)
