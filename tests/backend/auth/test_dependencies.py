from datetime import timedelta
from types import SimpleNamespace

import pytest

from backend.auth.dependencies import get_current_identity
from backend.auth.jwt_handler import TokenClaims
from backend.core.exceptions import Forbidden, Unauthenticated


class _FakeRequest:
    def __init__(self, path: str = '/profile'):
        self.method = 'GET'
        self.url = SimpleNamespace(path=path)
        self.state = SimpleNamespace()


def test_missing_header_is_unauthenticated(tokens) -> None:
    with pytest.raises(Unauthenticated) as exception_info:
        get_current_identity(_FakeRequest(), authorization=None, tokens=tokens)

    assert exception_info.value.status_code == 403
    assert exception_info.value.message == 'Access Denied'


def test_blank_header_is_unauthenticated(tokens) -> None:
    with pytest.raises(Unauthenticated):
        get_current_identity(_FakeRequest(), authorization='   ', tokens=tokens)


def test_invalid_token_is_forbidden(tokens) -> None:
    with pytest.raises(Forbidden) as exception_info:
        get_current_identity(_FakeRequest(), authorization='garbage', tokens=tokens)

    assert exception_info.value.status_code == 403
    assert exception_info.value.message == 'Invalid Token'


def test_expired_token_is_forbidden(tokens, clock) -> None:
    token = tokens.issue(1, 'student')
    clock.now += timedelta(hours=2)

    with pytest.raises(Forbidden):
        get_current_identity(_FakeRequest(), authorization=token, tokens=tokens)


def test_bearer_prefixed_header_is_rejected(tokens) -> None:
    token = tokens.issue(1, 'student')

    with pytest.raises(Forbidden):
        get_current_identity(_FakeRequest(), authorization=f'Bearer {token}', tokens=tokens)


def test_valid_token_attaches_identity_to_request(tokens) -> None:
    request = _FakeRequest()
    token = tokens.issue(4, 'instructor')

    identity = get_current_identity(request, authorization=token, tokens=tokens)

    assert identity == TokenClaims(subject_id=4, role='instructor')
    assert request.state.identity == identity
