"""User model definitions."""

from sqlalchemy import CheckConstraint, Column, Integer, String
from backend.database import Base

STUDENT_ROLE = "student"
INSTRUCTOR_ROLE = "instructor"
ROLES = (STUDENT_ROLE, INSTRUCTOR_ROLE)


class User(Base):
    """Represents an account on the enrollment API."""
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('student', 'instructor')", name="ck_users_role"),
    )

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(String, nullable=False)  # student/instructor
