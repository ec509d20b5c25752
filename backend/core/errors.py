"""API error taxonomy and the project-wide DRF exception handler."""

from __future__ import annotations

import logging

from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Internal server error"


class ValidationError(exceptions.APIException):
    """Malformed, missing, or out-of-range input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request."
    default_code = "invalid"


class ConflictError(exceptions.APIException):
    """A uniqueness rule would be violated."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict."
    default_code = "conflict"


class AuthError(exceptions.NotAuthenticated):
    default_detail = "Unauthorized"
    default_code = "unauthorized"


class ForbiddenError(exceptions.PermissionDenied):
    default_detail = "Forbidden"
    default_code = "forbidden"


class InternalError(exceptions.APIException):
    """Store failure or any other unexpected condition."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = GENERIC_ERROR_MESSAGE
    default_code = "internal_error"


def _field_errors(detail) -> list[dict[str, str]]:
    errors: list[dict[str, str]] = []
    for field, messages in detail.items():
        if not isinstance(messages, (list, tuple)):
            messages = [messages]
        for message in messages:
            errors.append({"field": str(field), "message": str(message)})
    return errors


def _flatten_detail(detail) -> str:
    if isinstance(detail, (list, tuple)):
        return " ".join(_flatten_detail(item) for item in detail)
    if isinstance(detail, dict):
        # simplejwt packs its own message under "detail" next to token internals.
        if "detail" in detail:
            return str(detail["detail"])
        return " ".join(_flatten_detail(item) for item in detail.values())
    return str(detail)


def api_exception_handler(exc, context):
    """
    Render every API failure as ``{"error": message}``.

    Serializer/filter validation failures keyed by field render as
    ``{"errors": [{"field", "message"}]}``. Anything DRF does not recognise is
    logged with its traceback and converted to a generic 500.
    """
    response = exception_handler(exc, context)
    if response is None:
        view = context.get("view")
        logger.error(
            "unhandled_api_exception",
            exc_info=exc,
            extra={"view": type(view).__name__ if view else None},
        )
        return Response(
            {"error": GENERIC_ERROR_MESSAGE},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    detail = getattr(exc, "detail", None)
    if isinstance(exc, exceptions.ValidationError) and isinstance(detail, dict):
        response.data = {"errors": _field_errors(detail)}
    elif detail is not None:
        response.data = {"error": _flatten_detail(detail)}
    return response
