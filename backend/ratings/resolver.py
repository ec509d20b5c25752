"""Duplicate detection and verified-interaction lookup for new ratings."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from rest_framework import status

from core.errors import ValidationError

from . import store

logger = logging.getLogger(__name__)


class DuplicateRating(ValidationError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "You have already rated this interaction."
    default_code = "duplicate_rating"


def ensure_not_already_rated(submission: Mapping, rater_id) -> None:
    """
    Reject a second rating for the same interaction by the same rater.

    This is a read-then-write check with no store constraint behind it, so two
    simultaneous submissions can both get through.
    """
    interaction_id = submission.get("interaction_id")
    if not interaction_id:
        return
    existing = store.find_rating_for_interaction(rater_id, interaction_id)
    if existing is not None:
        logger.info(
            "rating_duplicate_rejected",
            extra={"rater_id": str(rater_id), "interaction_id": interaction_id},
        )
        raise DuplicateRating()


def is_verified_interaction(interaction_id: str | None) -> bool:
    """True when the id names a payment record or a rental agreement."""
    if not interaction_id:
        return False
    # Both lookups always run; a hit in either collection is enough.
    hits = [store.record_exists(model, interaction_id) for model in store.INTERACTION_MODELS]
    return any(hits)


def resolve(submission: Mapping, rater_id) -> bool:
    """
    Run the duplicate check on validated submission data, then return the
    ``is_verified`` flag for the insert.
    """
    ensure_not_already_rated(submission, rater_id)
    return is_verified_interaction(submission.get("interaction_id"))
