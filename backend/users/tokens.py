from __future__ import annotations

from django.conf import settings
from rest_framework_simplejwt.tokens import AccessToken


def issue_session_token(user) -> AccessToken:
    """Access token for ``user`` that also names the wallet it was issued to."""
    token = AccessToken.for_user(user)
    token["public_key"] = user.public_key
    return token


def set_session_cookie(response, token) -> None:
    jwt_settings = settings.SIMPLE_JWT
    response.set_cookie(
        jwt_settings.get("AUTH_COOKIE", "auth-token"),
        str(token),
        max_age=jwt_settings.get("AUTH_COOKIE_MAX_AGE", 86_400),
        path=jwt_settings.get("AUTH_COOKIE_PATH", "/"),
        secure=jwt_settings.get("AUTH_COOKIE_SECURE", False),
        httponly=jwt_settings.get("AUTH_COOKIE_HTTP_ONLY", True),
        samesite=jwt_settings.get("AUTH_COOKIE_SAMESITE", "Strict"),
    )
