from django.urls import path

from .api import RegisterView, UserStatsView

app_name = "users"

urlpatterns = [
    path("auth/register", RegisterView.as_view(), name="register"),
    path("users/<str:user_id>/stats", UserStatsView.as_view(), name="user_stats"),
]
