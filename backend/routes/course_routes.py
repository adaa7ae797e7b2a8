from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from backend.auth.dependencies import get_current_identity
from backend.auth.jwt_handler import TokenClaims
from backend.database import get_db
from backend.services.course_service import CourseService, serialize_course

router = APIRouter(tags=['courses'])


class CreateCourseRequest(BaseModel):
    title: str | None = None
    description: str | None = None


class EnrollRequest(BaseModel):
    course_id: int | str | None = Field(default=None, alias='courseId')


class InstructorResponse(BaseModel):
    id: int
    email: str
    role: str


class CourseResponse(BaseModel):
    id: int
    title: str
    description: str
    instructorId: int
    students: list[int]


class CreateCourseResponse(BaseModel):
    message: str
    course: CourseResponse


class CourseListingResponse(BaseModel):
    id: int
    title: str
    description: str
    instructorId: InstructorResponse | None
    students: list[int]


class CourseListResponse(BaseModel):
    courses: list[CourseListingResponse]


class EnrollResponse(BaseModel):
    message: str


def get_course_service(db: Session = Depends(get_db)) -> CourseService:
    return CourseService(db)


@router.post('/course', response_model=CreateCourseResponse, status_code=status.HTTP_201_CREATED)
def create_course(
    data: CreateCourseRequest,
    identity: TokenClaims = Depends(get_current_identity),
    courses: CourseService = Depends(get_course_service),
):
    course = courses.create_course(identity, data.title, data.description)
    return {'message': 'Course created successfully', 'course': serialize_course(course)}


@router.get('/courses', response_model=CourseListResponse)
def list_courses(courses: CourseService = Depends(get_course_service)):
    return {'courses': courses.list_courses()}


@router.post('/enroll', response_model=EnrollResponse)
def enroll(
    data: EnrollRequest,
    identity: TokenClaims = Depends(get_current_identity),
    courses: CourseService = Depends(get_course_service),
):
    courses.enroll(identity, data.course_id)
    return {'message': 'Enrolled in course successfully'}
