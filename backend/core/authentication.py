from __future__ import annotations

import logging

from django.conf import settings
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken

logger = logging.getLogger(__name__)


def auth_cookie_name() -> str:
    return settings.SIMPLE_JWT.get("AUTH_COOKIE", "auth-token")


class CookieJWTAuthentication(JWTAuthentication):
    """
    Accept the simplejwt access token from the Authorization header or, failing
    that, from the session cookie set at registration.

    A stale or tampered cookie leaves the request anonymous; protected views
    then answer 401 through their permission classes.
    """

    def authenticate(self, request):
        header = self.get_header(request)
        if header is not None:
            return super().authenticate(request)

        raw_token = request.COOKIES.get(auth_cookie_name())
        if not raw_token:
            return None

        try:
            validated_token = self.get_validated_token(raw_token.encode("utf-8"))
        except InvalidToken:
            logger.info("auth_cookie_rejected")
            return None
        return self.get_user(validated_token), validated_token
