from django.db.models import QuerySet

from .models import Listing

SORT_FIELDS = {
    "price": "rent_xlm",
    "created_at": "created_at",
    "bedrooms": "bedrooms",
    "bathrooms": "bathrooms",
    "views": "view_count",
    "favorites": "favorite_count",
}
DEFAULT_SORT = "created_at"


def active_listings() -> QuerySet[Listing]:
    return Listing.objects.filter(status=Listing.Status.ACTIVE)


def order_listings(qs: QuerySet[Listing], sort_by: str | None, order: str | None) -> QuerySet[Listing]:
    """
    Order by one of the public sort keys. Unknown keys fall back to newest first;
    ``order`` is ``asc`` or anything else for descending.
    """
    field = SORT_FIELDS.get(sort_by or "", SORT_FIELDS[DEFAULT_SORT])
    prefix = "" if (order or "").lower() == "asc" else "-"
    # id keeps pages stable when the sort key ties.
    return qs.order_by(f"{prefix}{field}", f"{prefix}id")
