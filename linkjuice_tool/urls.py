"""Root URL configuration for linkjuice_tool."""

from django.urls import include, path

urlpatterns = [
    path('', include('linkjuice.urls')),
]
