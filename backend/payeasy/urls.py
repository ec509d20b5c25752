from django.urls import include, path

urlpatterns = [
    path("api/", include("users.urls")),
    path("api/ratings", include("ratings.urls")),
    path("api/listings/", include("listings.urls")),
]
