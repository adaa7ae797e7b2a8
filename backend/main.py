import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from backend.core import config
from backend.core.exceptions import EnrollmentAPIError
from backend.core.logging_config import setup_logging
from backend.database import Base, engine
from backend.models import account, course, user  # noqa: F401
from backend.routes import auth_routes, course_routes, user_routes

setup_logging()

app = FastAPI(title='Course Enrollment API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOWED_ORIGINS,
    allow_credentials='*' not in config.CORS_ALLOWED_ORIGINS,
    allow_methods=['*'],
    allow_headers=['*'],
)

logger = logging.getLogger(__name__)


@app.exception_handler(EnrollmentAPIError)
async def handle_enrollment_api_error(request: Request, exc: EnrollmentAPIError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={'detail': exc.message})


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed bodies are reported as 400, like missing fields.
    return JSONResponse(
        status_code=400,
        content={'detail': 'Invalid request body.', 'errors': jsonable_encoder(exc.errors())},
    )


@app.on_event('startup')
def initialize_database() -> None:
    config.validate_runtime_config()
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')


@app.get('/')
def root():
    return {'status': 'Course Enrollment API Running'}


app.include_router(auth_routes.router)
app.include_router(course_routes.router)
app.include_router(user_routes.router, prefix='/api')
