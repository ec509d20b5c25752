import pytest
from django.test import RequestFactory
from rest_framework.exceptions import AuthenticationFailed

from core.authentication import CookieJWTAuthentication
from users.tokens import issue_session_token

pytestmark = pytest.mark.django_db


@pytest.fixture
def rf():
    return RequestFactory()


def test_cookie_token_authenticates(rf, alice):
    request = rf.get("/")
    request.COOKIES["auth-token"] = str(issue_session_token(alice))

    user, token = CookieJWTAuthentication().authenticate(request)

    assert user == alice
    assert token["public_key"] == alice.public_key


def test_no_cookie_is_anonymous(rf):
    assert CookieJWTAuthentication().authenticate(rf.get("/")) is None


def test_tampered_cookie_is_anonymous(rf, alice):
    request = rf.get("/")
    request.COOKIES["auth-token"] = str(issue_session_token(alice))[:-4] + "abcd"
    assert CookieJWTAuthentication().authenticate(request) is None


def test_header_takes_precedence_over_cookie(rf, alice, bob):
    request = rf.get("/", HTTP_AUTHORIZATION=f"Bearer {issue_session_token(bob)}")
    request.COOKIES["auth-token"] = str(issue_session_token(alice))

    user, _ = CookieJWTAuthentication().authenticate(request)

    assert user == bob


def test_bad_bearer_header_is_rejected(rf):
    request = rf.get("/", HTTP_AUTHORIZATION="Bearer nonsense")
    with pytest.raises(AuthenticationFailed):
        CookieJWTAuthentication().authenticate(request)
