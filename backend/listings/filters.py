import django_filters as filters
from django.db.models import Q

from .models import Listing


class ListingSearchFilter(filters.FilterSet):
    search = filters.CharFilter(method="filter_search")
    min_price = filters.NumberFilter(field_name="rent_xlm", lookup_expr="gte")
    max_price = filters.NumberFilter(field_name="rent_xlm", lookup_expr="lte")
    bedrooms = filters.NumberFilter(field_name="bedrooms", lookup_expr="gte")
    bathrooms = filters.NumberFilter(field_name="bathrooms", lookup_expr="gte")
    furnished = filters.BooleanFilter(field_name="furnished")
    pet_friendly = filters.BooleanFilter(field_name="pet_friendly")

    class Meta:
        model = Listing
        fields = [
            "search",
            "min_price",
            "max_price",
            "bedrooms",
            "bathrooms",
            "furnished",
            "pet_friendly",
        ]

    def filter_search(self, queryset, name, value):
        term = (value or "").strip()
        if not term:
            return queryset
        return queryset.filter(
            Q(title__icontains=term) | Q(description__icontains=term) | Q(address__icontains=term)
        )
