import logging

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from backend.auth.jwt_handler import TokenClaims
from backend.core.exceptions import AlreadyEnrolled, Forbidden, MissingFields, NotFound, StoreError
from backend.models.course import Course, course_students
from backend.models.user import INSTRUCTOR_ROLE, STUDENT_ROLE, User

logger = logging.getLogger(__name__)

# Course ids are stored as signed 64-bit integers.
MIN_COURSE_ID = -(2 ** 63)
MAX_COURSE_ID = 2 ** 63 - 1


def serialize_course(course: Course) -> dict:
    return {
        'id': course.id,
        'title': course.title,
        'description': course.description,
        'instructorId': course.instructor_id,
        'students': sorted(student.id for student in course.students),
    }


def serialize_instructor(instructor: User | None) -> dict | None:
    if instructor is None:
        return None
    return {'id': instructor.id, 'email': instructor.email, 'role': instructor.role}


def parse_course_id(course_id) -> int | None:
    if isinstance(course_id, bool):
        return None
    if isinstance(course_id, str):
        candidate = course_id.strip()
        # isdigit() alone also accepts non-ASCII digits such as superscripts.
        if not (candidate.isascii() and candidate.isdigit()):
            return None
        course_id = int(candidate)
    if not isinstance(course_id, int):
        return None
    if not MIN_COURSE_ID <= course_id <= MAX_COURSE_ID:
        return None
    return course_id


class CourseService:
    def __init__(self, db: Session):
        self.db = db

    def create_course(self, identity: TokenClaims, title: str | None, description: str | None) -> Course:
        if identity.role != INSTRUCTOR_ROLE:
            raise Forbidden('Access denied. Only instructors can create courses.')

        normalized_title = (title or '').strip()
        normalized_description = (description or '').strip()
        if not normalized_title or not normalized_description:
            raise MissingFields('Course title and description are required.')

        course = Course(
            title=normalized_title,
            description=normalized_description,
            instructor_id=identity.subject_id,
        )
        try:
            self.db.add(course)
            self.db.commit()
            self.db.refresh(course)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception('Failed to create course for instructor id=%s', identity.subject_id)
            raise StoreError(str(exc)) from exc

        logger.info('Instructor id=%s created course id=%s', identity.subject_id, course.id)
        return course

    def list_courses(self) -> list[dict]:
        try:
            courses = self.db.scalars(select(Course).order_by(Course.id)).unique().all()
        except SQLAlchemyError as exc:
            logger.exception('Failed to list courses')
            raise StoreError(str(exc)) from exc

        listing = []
        for course in courses:
            entry = serialize_course(course)
            entry['instructorId'] = serialize_instructor(course.instructor)
            listing.append(entry)
        return listing

    def is_enrolled(self, course_id: int, student_id: int) -> bool:
        row = self.db.execute(
            select(course_students.c.course_id).where(
                course_students.c.course_id == course_id,
                course_students.c.student_id == student_id,
            )
        ).first()
        return row is not None

    def enroll(self, identity: TokenClaims, course_id) -> None:
        if identity.role != STUDENT_ROLE:
            raise Forbidden('Access denied. Only students can enroll in courses.')

        parsed_id = parse_course_id(course_id)
        try:
            course = self.db.get(Course, parsed_id) if parsed_id is not None else None
            if course is None:
                raise NotFound('Course not found.')

            if self.is_enrolled(course.id, identity.subject_id):
                raise AlreadyEnrolled()

            self.db.execute(
                insert(course_students).values(course_id=course.id, student_id=identity.subject_id)
            )
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            # The primary key on (course_id, student_id) rejects a concurrent duplicate.
            if self.is_enrolled(parsed_id, identity.subject_id):
                raise AlreadyEnrolled() from exc
            logger.exception('Failed to enroll student id=%s in course id=%s', identity.subject_id, parsed_id)
            raise StoreError(str(exc)) from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception('Failed to enroll student id=%s in course id=%s', identity.subject_id, parsed_id)
            raise StoreError(str(exc)) from exc

        self.db.expire(course)
        logger.info('Student id=%s enrolled in course id=%s', identity.subject_id, course.id)
