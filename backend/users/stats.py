from __future__ import annotations

from dataclasses import asdict, dataclass

from django.db.models import Q

from agreements.models import PaymentRecord, RentAgreement
from chat.models import Message
from listings.models import Listing


@dataclass(frozen=True)
class UserStats:
    listings_count: int = 0
    messages_sent_count: int = 0
    messages_received_count: int = 0
    rent_payments_made_count: int = 0
    unread_messages_count: int = 0
    active_agreements_count: int = 0

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


def compute_user_stats(user_id) -> UserStats:
    received = Message.objects.filter(recipient_id=user_id)
    return UserStats(
        listings_count=Listing.objects.filter(landlord_id=user_id)
        .exclude(status=Listing.Status.DELETED)
        .count(),
        messages_sent_count=Message.objects.filter(sender_id=user_id).count(),
        messages_received_count=received.count(),
        rent_payments_made_count=PaymentRecord.objects.filter(
            payer_id=user_id, status=PaymentRecord.Status.COMPLETED
        ).count(),
        unread_messages_count=received.filter(read_at__isnull=True).count(),
        active_agreements_count=RentAgreement.objects.filter(
            Q(landlord_id=user_id) | Q(tenant_id=user_id),
            status=RentAgreement.Status.ACTIVE,
        ).count(),
    )
