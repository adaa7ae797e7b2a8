"""Account model definitions for the user-creation API."""

from sqlalchemy import Column, Integer, String
from backend.database import Base


class Account(Base):
    """Represents a username/password account created through /api/users."""
    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
