from django.urls import path

from .api import RatingsView

urlpatterns = [
    path("", RatingsView.as_view(), name="ratings"),
]
