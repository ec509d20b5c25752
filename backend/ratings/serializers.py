from __future__ import annotations

from numbers import Real

from django.contrib.auth import get_user_model
from rest_framework import serializers

from . import store
from .models import Rating

User = get_user_model()

MIN_REVIEW_LENGTH = 3
MAX_REVIEW_LENGTH = 1000
MAX_INTERACTION_ID_LENGTH = Rating._meta.get_field("interaction_id").max_length

RATEE_REQUIRED = "Ratee ID is required."


class RaterSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ("id", "username")
        read_only_fields = fields


class RatingSerializer(serializers.ModelSerializer):
    rater_id = serializers.UUIDField(read_only=True)
    ratee_id = serializers.UUIDField(read_only=True)
    listing_id = serializers.UUIDField(read_only=True, allow_null=True)
    rater = RaterSummarySerializer(read_only=True)

    class Meta:
        model = Rating
        fields = (
            "id",
            "rater_id",
            "ratee_id",
            "listing_id",
            "interaction_id",
            "rating",
            "review_text",
            "is_verified",
            "status",
            "created_at",
            "updated_at",
            "rater",
        )
        read_only_fields = fields


class StarRatingField(serializers.Field):
    """A JSON number. Strings such as "4" are not accepted."""

    default_error_messages = {
        "required": "Rating is required.",
        "null": "Rating is required.",
        "invalid": "Rating is required.",
    }

    def to_internal_value(self, data):
        # bool is an int subclass but never a rating.
        if isinstance(data, bool) or not isinstance(data, Real):
            self.fail("invalid")
        return data

    def to_representation(self, value):
        return value


def _optional_text():
    return serializers.CharField(required=False, allow_blank=True, allow_null=True)


class RatingSubmissionSerializer(serializers.Serializer):
    """
    Validate a POST /api/ratings body for the rater in ``context["request"]``.

    Every field is checked even when an earlier one failed, so ``errors`` holds
    the full list of problems in field order.
    """

    ratee_id = serializers.CharField(
        error_messages={
            "required": RATEE_REQUIRED,
            "blank": RATEE_REQUIRED,
            "null": RATEE_REQUIRED,
            "invalid": RATEE_REQUIRED,
        }
    )
    rating = StarRatingField()
    review_text = _optional_text()
    listing_id = _optional_text()
    interaction_id = _optional_text()

    def _rater_id(self):
        request = self.context.get("request")
        user = getattr(request, "user", None)
        return getattr(user, "pk", None)

    def validate_ratee_id(self, value: str) -> str:
        rater_id = self._rater_id()
        if rater_id is None:
            return value
        ratee_pk = store.parse_record_id(value)
        if ratee_pk is not None:
            is_self = ratee_pk == store.parse_record_id(rater_id)
        else:
            is_self = value == str(rater_id)
        if is_self:
            raise serializers.ValidationError("You cannot rate yourself.")
        return value

    def validate_rating(self, value) -> int:
        if value < Rating.MIN_RATING or value > Rating.MAX_RATING:
            raise serializers.ValidationError(
                f"Rating must be between {Rating.MIN_RATING} and {Rating.MAX_RATING}."
            )
        if value != int(value):
            raise serializers.ValidationError("Rating must be a whole number.")
        return int(value)

    def validate_review_text(self, value):
        if not value:
            return None
        if len(value) < MIN_REVIEW_LENGTH:
            raise serializers.ValidationError(
                f"Review must be at least {MIN_REVIEW_LENGTH} characters."
            )
        if len(value) > MAX_REVIEW_LENGTH:
            raise serializers.ValidationError(
                f"Review must be at most {MAX_REVIEW_LENGTH} characters."
            )
        return value

    def validate_listing_id(self, value):
        return value or None

    def validate_interaction_id(self, value):
        if not value:
            return None
        if len(value) > MAX_INTERACTION_ID_LENGTH:
            raise serializers.ValidationError(
                f"Interaction ID must be at most {MAX_INTERACTION_ID_LENGTH} characters."
            )
        return value
