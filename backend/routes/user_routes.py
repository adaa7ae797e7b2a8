from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.orm import Session

from backend.auth.dependencies import get_hasher
from backend.auth.hashing import Hasher
from backend.core.exceptions import EnrollmentAPIError
from backend.database import get_db
from backend.services.user_service import UserService

router = APIRouter(tags=['users'])


class CreateUserRequest(BaseModel):
    username: str | None = None
    password: str | None = None


def get_user_service(
    db: Session = Depends(get_db),
    hasher: Hasher = Depends(get_hasher),
) -> UserService:
    return UserService(db, hasher)


@router.post('/users', status_code=status.HTTP_201_CREATED)
def create_user(data: CreateUserRequest, users: UserService = Depends(get_user_service)):
    # Every failure on this endpoint is reported as a 400 with details.
    try:
        account = users.create_user(data.username, data.password)
    except EnrollmentAPIError as exc:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={'error': 'Error creating user', 'details': exc.message},
        )

    return {'message': 'User created successfully', 'user': {'username': account.username}}
