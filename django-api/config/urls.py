"""URL configuration for the event settlement API."""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("settlements.urls")),
]
