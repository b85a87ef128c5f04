"""URL configuration for the linkjuice app.

The app exposes a single page and is namespaced as ``linkjuice`` so the
project URL configuration can include it.
"""

from django.urls import path

from . import views

app_name = 'linkjuice'

urlpatterns = [
    path('', views.generate, name='generate'),
]
