"""Shared pytest configuration and fixtures."""

from __future__ import annotations

from decimal import Decimal

import pytest
from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.cache import caches
from rest_framework.test import APIClient
from stellar_sdk import Keypair

from listings.models import Listing
from users.tokens import issue_session_token

User = get_user_model()


@pytest.fixture(autouse=True)
def _clear_caches():
    """Throttle counters and cached stats must not leak between tests."""
    for alias in settings.CACHES:
        caches[alias].clear()
    yield
    for alias in settings.CACHES:
        caches[alias].clear()


@pytest.fixture
def api_client():
    """DRF API client for request/response helpers."""
    return APIClient()


@pytest.fixture
def wallet_address():
    """Factory for fresh, checksum-valid Stellar account addresses."""
    return lambda: Keypair.random().public_key


@pytest.fixture
def make_user(db, wallet_address):
    def _make(username: str, **extra):
        public_key = extra.pop("public_key", None) or wallet_address()
        user = User(public_key=public_key, username=username, **extra)
        user.set_unusable_password()
        user.save()
        return user

    return _make


@pytest.fixture
def client_for():
    """Client carrying a session token for a user, as a bearer header or the auth cookie."""

    def _client(user, *, cookie: bool = False) -> APIClient:
        client = APIClient()
        token = str(issue_session_token(user))
        if cookie:
            client.cookies["auth-token"] = token
        else:
            client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        return client

    return _client


@pytest.fixture
def alice(make_user):
    return make_user("alice")


@pytest.fixture
def bob(make_user):
    return make_user("bob")


@pytest.fixture
def listing(bob):
    return Listing.objects.create(
        landlord=bob,
        title="Sunny studio near the park",
        description="Bright studio with a balcony.",
        address="12 Orchard Lane",
        rent_xlm=Decimal("850.00"),
        bedrooms=1,
        bathrooms=1,
    )
