from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from backend.auth.dependencies import get_current_identity, get_hasher, get_token_service
from backend.auth.hashing import Hasher
from backend.auth.jwt_handler import TokenClaims, TokenService
from backend.database import get_db
from backend.services.account_service import AccountService
from backend.services.credential_store import CredentialStore

router = APIRouter(tags=['auth'])


class SignupRequest(BaseModel):
    email: str | None = None
    password: str | None = None
    role: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class MessageResponse(BaseModel):
    message: str


class TokenResponse(BaseModel):
    token: str


class IdentityResponse(BaseModel):
    id: int
    role: str
    iat: int | None = None
    exp: int | None = None


class ProfileResponse(BaseModel):
    message: str
    user: IdentityResponse


def get_account_service(
    db: Session = Depends(get_db),
    hasher: Hasher = Depends(get_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> AccountService:
    return AccountService(CredentialStore(db, hasher), tokens)


@router.post('/signup', response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def signup(data: SignupRequest, accounts: AccountService = Depends(get_account_service)):
    accounts.signup(data.email, data.password, data.role)
    return {'message': 'User created successfully'}


@router.post('/login', response_model=TokenResponse)
def login(data: LoginRequest, accounts: AccountService = Depends(get_account_service)):
    token = accounts.login(data.email, data.password)
    return {'token': token}


@router.get('/profile', response_model=ProfileResponse)
def profile(
    identity: TokenClaims = Depends(get_current_identity),
    accounts: AccountService = Depends(get_account_service),
):
    return {'message': 'Welcome to your profile', 'user': accounts.profile(identity)}


@router.post('/logout', response_model=MessageResponse)
def logout(
    identity: TokenClaims = Depends(get_current_identity),
    accounts: AccountService = Depends(get_account_service),
):
    accounts.logout(identity)
    return {'message': 'Logged out successfully'}
