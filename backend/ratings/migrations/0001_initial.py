"""Initial migration for the ratings app."""

import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("listings", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Rating",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("interaction_id", models.CharField(blank=True, max_length=64, null=True)),
                ("rating", models.PositiveSmallIntegerField()),
                ("review_text", models.TextField(blank=True, null=True)),
                ("is_verified", models.BooleanField(default=False, editable=False)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("published", "Published"),
                            ("flagged", "Flagged"),
                            ("archived", "Archived"),
                        ],
                        default="published",
                        max_length=16,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "listing",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="ratings",
                        to="listings.listing",
                    ),
                ),
                (
                    "ratee",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="ratings_received",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "rater",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="ratings_given",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["ratee", "status", "created_at"],
                        name="rating_ratee_status_idx",
                    ),
                    models.Index(
                        fields=["listing", "status", "created_at"],
                        name="rating_listing_status_idx",
                    ),
                    models.Index(
                        fields=["rater", "interaction_id"],
                        name="rating_rater_interaction_idx",
                    ),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("rating__gte", 1), ("rating__lte", 5)),
                        name="rating_value_between_1_and_5",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("rater", models.F("ratee")), _negated=True),
                        name="rating_rater_is_not_ratee",
                    ),
                ],
            },
        ),
    ]
