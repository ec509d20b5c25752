from __future__ import annotations

import logging
from collections.abc import Mapping

from django.db import DatabaseError
from rest_framework import permissions, status
from rest_framework.exceptions import APIException, ParseError, UnsupportedMediaType
from rest_framework.parsers import JSONParser
from rest_framework.response import Response
from rest_framework.views import APIView

from core.errors import AuthError, ForbiddenError, InternalError

from .audit import record_auth_event
from .cache import get_or_compute_user_stats
from .models import AuthEvent
from .registration import InvalidBody, WalletTaken
from .serializers import RegistrationSerializer, UserSerializer
from .tokens import issue_session_token, set_session_cookie

logger = logging.getLogger(__name__)


class RegisterView(APIView):
    """
    Create a user for a Stellar wallet and log them straight in.

    Responds 201 with the new user and an ``auth-token`` cookie.
    """

    authentication_classes: list = []
    permission_classes = [permissions.AllowAny]
    parser_classes = [JSONParser]

    def _read_body(self, request):
        try:
            # An empty body is not a JSON document.
            if request.stream is None:
                raise InvalidBody()
            body = request.data
        except (ParseError, UnsupportedMediaType) as exc:
            raise InvalidBody() from exc
        if not isinstance(body, Mapping):
            raise InvalidBody()
        return body

    def post(self, request):
        public_key = None
        try:
            serializer = RegistrationSerializer(data=self._read_body(request))
            try:
                serializer.is_valid(raise_exception=True)
            except WalletTaken as exc:
                record_auth_event(
                    request,
                    public_key=exc.public_key,
                    event_type=AuthEvent.EventType.LOGIN_FAILURE,
                    status=AuthEvent.Status.FAILURE,
                    failure_reason="Wallet already registered",
                )
                raise
            public_key = serializer.validated_data["public_key"]

            user = serializer.save()
            token = issue_session_token(user)
            record_auth_event(
                request,
                public_key=public_key,
                event_type=AuthEvent.EventType.LOGIN_SUCCESS,
                status=AuthEvent.Status.SUCCESS,
                metadata={"action": "register"},
            )
        except APIException:
            raise
        except Exception as exc:
            logger.error(
                "registration_unexpected_error",
                exc_info=exc,
                extra={"public_key": public_key},
            )
            record_auth_event(
                request,
                public_key=public_key,
                event_type=AuthEvent.EventType.LOGIN_FAILURE,
                status=AuthEvent.Status.FAILURE,
                failure_reason="Internal server error during registration",
            )
            raise InternalError() from exc

        logger.info("user_registered", extra={"user_id": str(user.pk), "public_key": public_key})
        response = Response(
            {"success": True, "data": UserSerializer(user).data},
            status=status.HTTP_201_CREATED,
        )
        set_session_cookie(response, token)
        return response


class UserStatsView(APIView):
    """Dashboard counters for the signed-in user only."""

    permission_classes = [permissions.AllowAny]

    def get(self, request, user_id: str):
        if not request.user or not request.user.is_authenticated:
            raise AuthError()
        if str(request.user.pk) != user_id:
            raise ForbiddenError()

        try:
            stats = get_or_compute_user_stats(request.user.pk)
        except DatabaseError as exc:
            logger.error("user_stats_failed", exc_info=exc, extra={"user_id": user_id})
            raise InternalError("Failed to load user stats") from exc
        return Response({"success": True, "data": stats.as_dict()})
