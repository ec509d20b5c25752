from __future__ import annotations

import logging
from typing import Optional

from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_ipv46_address

from .models import AuthEvent

logger = logging.getLogger(__name__)


def client_ip(request) -> Optional[str]:
    """
    Return the best-effort client IP using X-Forwarded-For, falling back to REMOTE_ADDR.
    Values that are not IP addresses are dropped.
    """
    candidate = None
    forwarded_for = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded_for:
        # XFF may be a comma-separated list; take the first non-empty entry.
        for part in forwarded_for.split(","):
            if part.strip():
                candidate = part.strip()
                break
    if candidate is None:
        candidate = request.META.get("REMOTE_ADDR")
    if not candidate:
        return None
    try:
        validate_ipv46_address(candidate)
    except DjangoValidationError:
        return None
    return candidate


def user_agent(request) -> str:
    """Return the raw user-agent string (may be empty)."""
    return request.META.get("HTTP_USER_AGENT", "")


def request_id(request) -> str:
    return request.META.get("HTTP_X_REQUEST_ID", "")


def record_auth_event(
    request,
    *,
    public_key: Optional[str],
    event_type: str,
    status: str,
    failure_reason: str = "",
    metadata: Optional[dict] = None,
) -> AuthEvent:
    """Persist an authentication audit row and emit the matching log line."""
    event = AuthEvent.objects.create(
        public_key=public_key or "",
        event_type=event_type,
        status=status,
        failure_reason=failure_reason,
        metadata=metadata or {},
        ip=client_ip(request),
        user_agent=user_agent(request),
        request_id=request_id(request),
    )
    log = logger.info if status == AuthEvent.Status.SUCCESS else logger.warning
    log(
        "auth_event",
        extra={
            "event_type": event_type,
            "status": status,
            "public_key": event.public_key,
            "failure_reason": failure_reason,
            "request_id": event.request_id,
        },
    )
    return event
