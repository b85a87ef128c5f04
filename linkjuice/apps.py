from django.apps import AppConfig


class LinkjuiceConfig(AppConfig):
    """Configuration for the linkjuice Django app."""

    name = 'linkjuice'
    verbose_name = 'LinkJuice anchor generator'
