from django.urls import path

from .api import ListingSearchView

urlpatterns = [
    path("search", ListingSearchView.as_view(), name="listing_search"),
]
