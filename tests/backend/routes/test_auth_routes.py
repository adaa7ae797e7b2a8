from datetime import timedelta


def test_root_reports_status(client) -> None:
    response = client.get('/')

    assert response.status_code == 200
    assert response.json() == {'status': 'Course Enrollment API Running'}


def test_signup_returns_201(client) -> None:
    response = client.post('/signup', json={'email': 'a@x.com', 'password': 'pw', 'role': 'student'})

    assert response.status_code == 201
    assert response.json() == {'message': 'User created successfully'}


def test_signup_missing_fields_returns_400(client) -> None:
    response = client.post('/signup', json={'email': 'a@x.com', 'password': 'pw'})

    assert response.status_code == 400
    assert response.json() == {'detail': 'Please provide email, password, and role.'}


def test_signup_duplicate_email_returns_400(client) -> None:
    client.post('/signup', json={'email': 'a@x.com', 'password': 'pw', 'role': 'student'})

    response = client.post('/signup', json={'email': 'a@x.com', 'password': 'other', 'role': 'instructor'})

    assert response.status_code == 400
    assert response.json() == {'detail': 'User already exists.'}


def test_login_returns_token(client, tokens) -> None:
    client.post('/signup', json={'email': 'a@x.com', 'password': 'pw', 'role': 'student'})

    response = client.post('/login', json={'email': 'a@x.com', 'password': 'pw'})

    assert response.status_code == 200
    assert tokens.verify(response.json()['token']).role == 'student'


def test_login_wrong_password_returns_400(client) -> None:
    client.post('/signup', json={'email': 'a@x.com', 'password': 'pw', 'role': 'student'})

    response = client.post('/login', json={'email': 'a@x.com', 'password': 'nope'})

    assert response.status_code == 400
    assert response.json() == {'detail': 'Invalid credentials.'}


def test_login_unknown_user_returns_400(client) -> None:
    response = client.post('/login', json={'email': 'ghost@x.com', 'password': 'pw'})

    assert response.status_code == 400
    assert response.json() == {'detail': 'User not found.'}


def test_profile_returns_token_identity(client, signup_and_login, tokens, clock) -> None:
    token = signup_and_login('a@x.com', 'student')
    subject_id = tokens.verify(token).subject_id
    issued_at = int(clock.now.timestamp())

    response = client.get('/profile', headers={'Authorization': token})

    assert response.status_code == 200
    assert response.json() == {
        'message': 'Welcome to your profile',
        'user': {'id': subject_id, 'role': 'student', 'iat': issued_at, 'exp': issued_at + 3600},
    }


def test_profile_without_token_returns_403(client) -> None:
    response = client.get('/profile')

    assert response.status_code == 403
    assert response.json() == {'detail': 'Access Denied'}


def test_profile_with_invalid_token_returns_403(client) -> None:
    response = client.get('/profile', headers={'Authorization': 'not-a-token'})

    assert response.status_code == 403
    assert response.json() == {'detail': 'Invalid Token'}


def test_profile_with_expired_token_returns_403(client, signup_and_login, clock) -> None:
    token = signup_and_login('a@x.com', 'student')
    clock.now += timedelta(hours=1)

    response = client.get('/profile', headers={'Authorization': token})

    assert response.status_code == 403
    assert response.json() == {'detail': 'Invalid Token'}


def test_logout_acknowledges_and_token_keeps_working(client, signup_and_login) -> None:
    token = signup_and_login('a@x.com', 'student')

    response = client.post('/logout', headers={'Authorization': token})

    assert response.status_code == 200
    assert response.json() == {'message': 'Logged out successfully'}
    assert client.get('/profile', headers={'Authorization': token}).status_code == 200


def test_logout_without_token_returns_403(client) -> None:
    response = client.post('/logout')

    assert response.status_code == 403


def test_signup_with_wrongly_typed_field_returns_400(client) -> None:
    response = client.post('/signup', json={'email': 123, 'password': 'pw', 'role': 'student'})

    assert response.status_code == 400
    assert response.json()['detail'] == 'Invalid request body.'


def test_login_with_non_object_body_returns_400(client) -> None:
    response = client.post('/login', json=['a@x.com', 'pw'])

    assert response.status_code == 400
