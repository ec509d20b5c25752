from __future__ import annotations

import uuid

from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """Marketplace account identified by a Stellar wallet address."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    public_key = models.CharField(
        max_length=56,
        unique=True,
        help_text="Stellar account address (G...), the only login factor.",
    )
    email = models.EmailField(
        max_length=254,
        unique=True,
        null=True,
        blank=True,
        help_text="Optional contact email, stored lowercase.",
    )
    updated_at = models.DateTimeField(auto_now=True)

    REQUIRED_FIELDS = ["public_key"]

    def save(self, *args, **kwargs):
        # Blank emails must be NULL so the unique constraint ignores them.
        if not self.email:
            self.email = None
        else:
            self.email = self.email.lower()
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.username} ({self.public_key[:8]}...)"


class AuthEvent(models.Model):
    """Immutable audit record for wallet authentication attempts."""

    class EventType(models.TextChoices):
        LOGIN_SUCCESS = "LOGIN_SUCCESS", "Login success"
        LOGIN_FAILURE = "LOGIN_FAILURE", "Login failure"

    class Status(models.TextChoices):
        SUCCESS = "SUCCESS", "Success"
        FAILURE = "FAILURE", "Failure"

    public_key = models.CharField(max_length=64, blank=True, default="", db_index=True)
    event_type = models.CharField(max_length=32, choices=EventType.choices)
    status = models.CharField(max_length=16, choices=Status.choices)
    failure_reason = models.CharField(max_length=255, blank=True, default="")
    metadata = models.JSONField(default=dict, blank=True)
    ip = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.TextField(blank=True, default="")
    request_id = models.CharField(max_length=128, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ("-created_at",)
        indexes = [
            models.Index(fields=("public_key", "created_at"), name="auth_event_key_created_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.event_type} {self.public_key or '-'} ({self.created_at:%Y-%m-%d %H:%M:%S})"
