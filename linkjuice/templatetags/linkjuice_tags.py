"""Template helpers for rendering anchor suggestions."""

from django import template

register = template.Library()


@register.filter
def anchor_snippet(suggestion, target_url: str) -> str:
    """Return copyable ``<a>`` markup for ``suggestion`` pointing at ``target_url``."""
    return suggestion.html_snippet(target_url)
