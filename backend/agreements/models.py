"""Rental agreements and the rent payments made under them."""

from __future__ import annotations

import uuid

from django.conf import settings
from django.db import models


class RentAgreement(models.Model):
    """A lease between a landlord and a tenant for one listing."""

    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        ACTIVE = "active", "Active"
        TERMINATED = "terminated", "Terminated"
        EXPIRED = "expired", "Expired"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    listing = models.ForeignKey(
        "listings.Listing",
        on_delete=models.CASCADE,
        related_name="agreements",
    )
    landlord = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="agreements_as_landlord",
    )
    tenant = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="agreements_as_tenant",
    )
    rent_xlm = models.DecimalField(max_digits=14, decimal_places=2)
    start_date = models.DateField()
    end_date = models.DateField(null=True, blank=True)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "rent_agreements"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["landlord", "status"], name="agreement_landlord_status_idx"),
            models.Index(fields=["tenant", "status"], name="agreement_tenant_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Agreement {self.pk} for {self.listing_id} ({self.status})"


class PaymentRecord(models.Model):
    """A rent payment settled on the Stellar network."""

    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        COMPLETED = "completed", "Completed"
        FAILED = "failed", "Failed"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    agreement = models.ForeignKey(
        RentAgreement,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="payments",
    )
    payer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="payments_made",
    )
    amount_xlm = models.DecimalField(max_digits=14, decimal_places=2)
    transaction_hash = models.CharField(max_length=64, blank=True, default="")
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "payment_records"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["payer", "status"], name="payment_payer_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Payment {self.pk} by {self.payer_id} ({self.status})"
