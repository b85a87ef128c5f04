"""Typed data structures shared by the form, the generation service and views."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from bs4 import BeautifulSoup  # type: ignore


class AnchorType(str, Enum):
    """How closely an anchor text mirrors the target keyword."""

    EXACT = "exact"
    PARTIAL = "partial"
    CONTEXTUAL = "contextual"
    BRANDED = "branded"


class LoadingState(str, Enum):
    """Transient state of the generation page."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class GenerateAnchorsRequest:
    """Validated input for a single generation run."""

    target_url: str
    target_keyword: str
    product_urls: List[str]


@dataclass(frozen=True)
class AnchorSuggestion:
    """One anchor text proposed for linking a product page to the category."""

    text: str
    type: AnchorType
    reasoning: str

    def html_snippet(self, target_url: str) -> str:
        """Return ``<a>`` markup linking ``text`` to ``target_url``."""

        soup = BeautifulSoup("", "html.parser")
        anchor = soup.new_tag("a", href=target_url)
        anchor["class"] = ["linkjuice-anchor"]
        anchor["data-anchor-type"] = self.type.value
        anchor.string = self.text
        return str(anchor)


@dataclass(frozen=True)
class ProductAnalysis:
    """Anchor suggestions for a single source product page."""

    source_url: str
    product_name: str
    suggestions: List[AnchorSuggestion] = field(default_factory=list)
