import pytest

from chat.models import Message
from users.stats import compute_user_stats

pytestmark = pytest.mark.django_db


def test_mark_read_stamps_once(alice, bob):
    message = Message.objects.create(sender=alice, recipient=bob, body="Is parking included?")
    assert not message.is_read

    message.mark_read()
    first_read = message.read_at
    message.mark_read()

    message.refresh_from_db()
    assert message.is_read
    assert message.read_at == first_read


def test_reading_clears_unread_count(alice, bob):
    message = Message.objects.create(sender=alice, recipient=bob, body="Hello")
    assert compute_user_stats(bob.pk).unread_messages_count == 1

    message.mark_read()

    assert compute_user_stats(bob.pk).unread_messages_count == 0
