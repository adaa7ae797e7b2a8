import pytest
from fastapi.testclient import TestClient

from backend.auth.dependencies import get_hasher, get_token_service
from backend.database import get_db
from backend.main import app


@pytest.fixture
def client(db_session_factory, hasher, tokens):
    def override_get_db():
        db = db_session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_hasher] = lambda: hasher
    app.dependency_overrides[get_token_service] = lambda: tokens
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def signup_and_login(client: TestClient):
    def _signup_and_login(email: str, role: str, password: str = 'pw') -> str:
        response = client.post('/signup', json={'email': email, 'password': password, 'role': role})
        assert response.status_code == 201
        response = client.post('/login', json={'email': email, 'password': password})
        assert response.status_code == 200
        return response.json()['token']

    return _signup_and_login
