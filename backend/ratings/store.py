"""Thin ORM adapter for ratings and the interactions they can cite."""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from django.contrib.auth import get_user_model
from django.db import DatabaseError, transaction
from django.db.models import Model, QuerySet

from agreements.models import PaymentRecord, RentAgreement
from listings.models import Listing

from .models import Rating

logger = logging.getLogger(__name__)

INTERACTION_MODELS: tuple[type[Model], ...] = (PaymentRecord, RentAgreement)

INSERT_REJECTED = "Rating could not be saved."


class RatingStoreError(Exception):
    """The store refused a rating write."""


def parse_record_id(value) -> Optional[uuid.UUID]:
    """Return ``value`` as a UUID, or None if it cannot be a record id."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        return None


def find_rating_for_interaction(rater_id, interaction_id: str) -> Optional[Rating]:
    return (
        Rating.objects.filter(rater_id=rater_id, interaction_id=interaction_id)
        .only("id")
        .first()
    )


def record_exists(model: type[Model], record_id: str) -> bool:
    pk = parse_record_id(record_id)
    if pk is None:
        return False
    return model.objects.filter(pk=pk).exists()


def insert_rating(
    *,
    rater_id,
    ratee_id: str,
    rating: int,
    review_text: Optional[str],
    listing_id: Optional[str],
    interaction_id: Optional[str],
    is_verified: bool,
) -> Rating:
    """
    Insert a published rating. Raises RatingStoreError when the store rejects
    the row (unknown ratee or listing, malformed ids, failed constraints).
    """
    ratee_pk = parse_record_id(ratee_id)
    if ratee_pk is None:
        raise RatingStoreError("Ratee not found.")
    listing_pk = None
    if listing_id is not None:
        listing_pk = parse_record_id(listing_id)
        if listing_pk is None:
            raise RatingStoreError("Listing not found.")

    if not get_user_model().objects.filter(pk=ratee_pk).exists():
        raise RatingStoreError("Ratee not found.")
    if listing_pk is not None and not Listing.objects.filter(pk=listing_pk).exists():
        raise RatingStoreError("Listing not found.")

    try:
        with transaction.atomic():
            return Rating.objects.create(
                rater_id=rater_id,
                ratee_id=ratee_pk,
                listing_id=listing_pk,
                interaction_id=interaction_id,
                rating=rating,
                review_text=review_text,
                is_verified=is_verified,
                status=Rating.Status.PUBLISHED,
            )
    except DatabaseError as exc:
        logger.warning(
            "rating_insert_rejected",
            extra={"rater_id": str(rater_id), "ratee_id": ratee_id, "error": str(exc)},
        )
        raise RatingStoreError(INSERT_REJECTED) from exc


def published_ratings(
    *,
    ratee_id: Optional[uuid.UUID] = None,
    listing_id: Optional[uuid.UUID] = None,
    min_rating: Optional[int] = None,
) -> QuerySet[Rating]:
    """Published ratings for a subject, newest first."""
    qs = Rating.objects.filter(status=Rating.Status.PUBLISHED).select_related("rater")
    if ratee_id is not None:
        qs = qs.filter(ratee_id=ratee_id)
    if listing_id is not None:
        qs = qs.filter(listing_id=listing_id)
    if min_rating is not None:
        qs = qs.filter(rating__gte=min_rating)
    return qs.order_by("-created_at")

