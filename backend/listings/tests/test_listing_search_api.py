from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from listings.models import Listing

pytestmark = pytest.mark.django_db

URL = "/api/listings/search"


@pytest.fixture
def catalogue(bob):
    now = timezone.now()
    specs = [
        ("Canal view loft", "900.00", 2, 1, True, False, 40, 3),
        ("Garden cottage", "650.00", 3, 2, False, True, 10, 9),
        ("City studio", "450.00", 1, 1, True, True, 99, 1),
        ("Harbour penthouse", "2400.00", 4, 3, True, False, 5, 20),
    ]
    listings = []
    for offset, (title, rent, beds, baths, furnished, pets, views, favs) in enumerate(specs):
        listing = Listing.objects.create(
            landlord=bob,
            title=title,
            address=f"{offset + 1} Quay Street",
            description=f"{title} close to the tram.",
            rent_xlm=Decimal(rent),
            bedrooms=beds,
            bathrooms=baths,
            furnished=furnished,
            pet_friendly=pets,
            view_count=views,
            favorite_count=favs,
        )
        Listing.objects.filter(pk=listing.pk).update(created_at=now - timedelta(days=offset))
        listings.append(listing)
    Listing.objects.create(
        landlord=bob, title="Hidden annex", address="9 Quay Street", status=Listing.Status.INACTIVE
    )
    return listings


def _titles(resp):
    return [item["title"] for item in resp.json()["listings"]]


def test_defaults_newest_first_active_only(api_client, catalogue):
    resp = api_client.get(URL)

    assert resp.status_code == 200
    body = resp.json()
    assert body["total"] == 4
    assert body["page"] == 1
    assert body["limit"] == 12
    assert body["totalPages"] == 1
    assert _titles(resp) == [
        "Canal view loft",
        "Garden cottage",
        "City studio",
        "Harbour penthouse",
    ]


def test_listing_payload_shape(api_client, catalogue, bob):
    item = api_client.get(URL, {"search": "studio"}).json()["listings"][0]
    assert item["landlord_id"] == str(bob.pk)
    assert item["landlord_username"] == "bob"
    assert item["rent_xlm"] == "450.00"
    assert item["status"] == "active"


def test_text_search_matches_title_description_and_address(api_client, catalogue):
    assert _titles(api_client.get(URL, {"search": "cottage"})) == ["Garden cottage"]
    assert api_client.get(URL, {"search": "quay"}).json()["total"] == 4
    assert api_client.get(URL, {"search": "annex"}).json()["total"] == 0


def test_price_and_room_filters(api_client, catalogue):
    resp = api_client.get(URL, {"min_price": "500", "max_price": "1000", "bedrooms": "3"})
    assert _titles(resp) == ["Garden cottage"]


def test_boolean_filters(api_client, catalogue):
    resp = api_client.get(URL, {"furnished": "true", "pet_friendly": "true"})
    assert _titles(resp) == ["City studio"]


@pytest.mark.parametrize(
    ("sort_by", "order", "expected_first"),
    [
        ("price", "asc", "City studio"),
        ("price", "desc", "Harbour penthouse"),
        ("views", "desc", "City studio"),
        ("favorites", "desc", "Harbour penthouse"),
        ("bathrooms", "desc", "Harbour penthouse"),
        ("bedrooms", "asc", "City studio"),
        ("created_at", "asc", "Harbour penthouse"),
        ("unknown", None, "Canal view loft"),
    ],
)
def test_sorting(api_client, catalogue, sort_by, order, expected_first):
    params = {"sort_by": sort_by}
    if order:
        params["order"] = order
    assert _titles(api_client.get(URL, params))[0] == expected_first


def test_pagination(api_client, catalogue):
    resp = api_client.get(URL, {"limit": "3", "page": "2", "sort_by": "price", "order": "asc"})
    body = resp.json()
    assert body["total"] == 4
    assert body["totalPages"] == 2
    assert body["page"] == 2
    assert _titles(resp) == ["Harbour penthouse"]


def test_page_past_the_end_is_empty(api_client, catalogue):
    body = api_client.get(URL, {"page": "7"}).json()
    assert body["listings"] == []
    assert body["page"] == 7
    assert body["total"] == 4


@pytest.mark.parametrize(("raw", "expected"), [("500", 50), ("0", 12), ("abc", 12)])
def test_limit_is_clamped(api_client, settings, raw, expected):
    settings.LISTING_SEARCH_MAX_LIMIT = 50
    assert api_client.get(URL, {"limit": raw}).json()["limit"] == expected


def test_invalid_filter_values_are_reported(api_client):
    resp = api_client.get(URL, {"min_price": "cheap"})
    assert resp.status_code == 400
    assert resp.json()["errors"][0]["field"] == "min_price"


def test_empty_catalogue(api_client):
    assert api_client.get(URL).json() == {
        "listings": [],
        "total": 0,
        "page": 1,
        "limit": 12,
        "totalPages": 0,
    }
