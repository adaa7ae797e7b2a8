import os
from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault('DATABASE_URL', 'sqlite:///:memory:')

from backend.auth.hashing import BcryptHasher  # noqa: E402
from backend.auth.jwt_handler import TokenService  # noqa: E402
from backend.database import Base  # noqa: E402
from backend.models import account, course, user  # noqa: E402,F401

TEST_SECRET = 'test-secret'


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def db_engine():
    engine = create_engine(
        'sqlite:///:memory:',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def db_session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture
def db(db_session_factory):
    session = db_session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def hasher() -> BcryptHasher:
    # Lowest cost bcrypt accepts, to keep the suite fast.
    return BcryptHasher(rounds=4)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 1, 5, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def tokens(clock) -> TokenService:
    return TokenService(secret=TEST_SECRET, expires_minutes=60, clock=clock)
