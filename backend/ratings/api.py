from __future__ import annotations

import logging
from collections.abc import Mapping

from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from core.errors import ValidationError

from . import resolver, store
from .aggregation import aggregate_ratings
from .serializers import RatingSerializer, RatingSubmissionSerializer

logger = logging.getLogger(__name__)


class RatingsView(APIView):
    """Submit a rating (authenticated) or read a subject's published ratings."""

    def get_permissions(self):
        if self.request.method == "POST":
            return [permissions.IsAuthenticated()]
        return [permissions.AllowAny()]

    def post(self, request):
        body = request.data if isinstance(request.data, Mapping) else {}
        rater_id = request.user.pk
        serializer = RatingSubmissionSerializer(data=body, context={"request": request})
        serializer.is_valid(raise_exception=True)
        submission = serializer.validated_data

        is_verified = resolver.resolve(submission, rater_id)

        try:
            rating = store.insert_rating(
                rater_id=rater_id,
                ratee_id=submission["ratee_id"],
                rating=submission["rating"],
                review_text=submission.get("review_text"),
                listing_id=submission.get("listing_id"),
                interaction_id=submission.get("interaction_id"),
                is_verified=is_verified,
            )
        except store.RatingStoreError as exc:
            raise ValidationError(str(exc)) from exc

        logger.info(
            "rating_created",
            extra={
                "rating_id": str(rating.pk),
                "rater_id": str(rater_id),
                "ratee_id": str(rating.ratee_id),
                "is_verified": rating.is_verified,
            },
        )
        rating.rater = request.user
        return Response(RatingSerializer(rating).data, status=status.HTTP_201_CREATED)

    def get(self, request):
        params = request.query_params
        raw_ratee = params.get("ratee_id")
        raw_listing = params.get("listing_id")
        if not raw_ratee and not raw_listing:
            raise ValidationError("ratee_id or listing_id is required")

        ratee_id = listing_id = min_rating = None
        if raw_ratee:
            ratee_id = store.parse_record_id(raw_ratee)
            if ratee_id is None:
                raise ValidationError("Invalid ratee_id")
        if raw_listing:
            listing_id = store.parse_record_id(raw_listing)
            if listing_id is None:
                raise ValidationError("Invalid listing_id")
        raw_min = params.get("min_rating")
        if raw_min:
            try:
                min_rating = int(raw_min)
            except (TypeError, ValueError):
                raise ValidationError("min_rating must be an integer")

        ratings = list(
            store.published_ratings(
                ratee_id=ratee_id,
                listing_id=listing_id,
                min_rating=min_rating,
            )
        )
        aggregate = aggregate_ratings(r.rating for r in ratings)
        return Response(
            {
                "ratings": RatingSerializer(ratings, many=True).data,
                "meta": aggregate.as_meta(),
            }
        )
