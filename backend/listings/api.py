import math

from django.conf import settings
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import generics, permissions
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

from .filters import ListingSearchFilter
from .serializers import ListingSerializer
from .services import active_listings, order_listings


def _positive_int(raw, default: int) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


class ListingSearchPagination(PageNumberPagination):
    """
    ``page``/``limit`` paging that never 404s: a page past the end is empty and
    ``limit`` is clamped to the configured maximum.
    """

    page_size_query_param = "limit"

    def __init__(self):
        self.page_size = settings.LISTING_SEARCH_DEFAULT_LIMIT
        self.max_page_size = settings.LISTING_SEARCH_MAX_LIMIT

    def paginate_queryset(self, queryset, request, view=None):
        self.request = request
        self.limit = self.get_page_size(request)
        self.page_number = _positive_int(request.query_params.get(self.page_query_param), 1)
        self.total = queryset.count()
        offset = (self.page_number - 1) * self.limit
        return list(queryset[offset : offset + self.limit])

    def get_paginated_response(self, data):
        return Response(
            {
                "listings": data,
                "total": self.total,
                "page": self.page_number,
                "limit": self.limit,
                "totalPages": math.ceil(self.total / self.limit) if self.total else 0,
            }
        )


class ListingSearchView(generics.ListAPIView):
    """Public search over active listings."""

    serializer_class = ListingSerializer
    pagination_class = ListingSearchPagination
    permission_classes = [permissions.AllowAny]
    filter_backends = [DjangoFilterBackend]
    filterset_class = ListingSearchFilter

    def perform_authentication(self, request):
        """Downgrade to anonymous user when the search receives an invalid token."""
        try:
            return super().perform_authentication(request)
        except AuthenticationFailed:
            request._not_authenticated()

    def get_queryset(self):
        params = self.request.query_params
        qs = active_listings().select_related("landlord")
        return order_listings(qs, params.get("sort_by"), params.get("order"))
