"""Course model definitions."""

from sqlalchemy import Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import relationship

from backend.database import Base
from backend.models.user import User

# The composite primary key keeps each course's students a set.
course_students = Table(
    "course_students",
    Base.metadata,
    Column("course_id", Integer, ForeignKey("courses.id", ondelete="CASCADE"), primary_key=True),
    Column("student_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class Course(Base):
    """Represents a course taught by an instructor."""
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(String, nullable=False)
    instructor_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    instructor = relationship(User, lazy="joined")
    students = relationship(User, secondary=course_students, lazy="selectin")
