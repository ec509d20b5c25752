from __future__ import annotations

import uuid

from django.conf import settings
from django.db import models
from django.db.models import F, Q


class Rating(models.Model):
    """A star rating one user leaves for another, optionally tied to a listing."""

    class Status(models.TextChoices):
        PUBLISHED = "published", "Published"
        FLAGGED = "flagged", "Flagged"
        ARCHIVED = "archived", "Archived"

    MIN_RATING = 1
    MAX_RATING = 5

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    rater = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="ratings_given",
    )
    ratee = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="ratings_received",
    )
    listing = models.ForeignKey(
        "listings.Listing",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="ratings",
    )
    # Points at either a PaymentRecord or a RentAgreement, hence no foreign key.
    interaction_id = models.CharField(max_length=64, null=True, blank=True)
    rating = models.PositiveSmallIntegerField()
    review_text = models.TextField(null=True, blank=True)
    is_verified = models.BooleanField(default=False, editable=False)
    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.PUBLISHED,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["ratee", "status", "created_at"], name="rating_ratee_status_idx"),
            models.Index(fields=["listing", "status", "created_at"], name="rating_listing_status_idx"),
            models.Index(fields=["rater", "interaction_id"], name="rating_rater_interaction_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(rating__gte=1) & Q(rating__lte=5),
                name="rating_value_between_1_and_5",
            ),
            models.CheckConstraint(
                condition=~Q(rater=F("ratee")),
                name="rating_rater_is_not_ratee",
            ),
        ]

    def __str__(self) -> str:
        return f"Rating {self.rating}* by {self.rater_id} for {self.ratee_id}"
