"""Shared fixtures for generation service tests."""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List

import pytest

from linkjuice.config import load_config
from linkjuice.types import GenerateAnchorsRequest


class FakeGeminiClient:
    """Stand-in for ``GeminiClient`` that returns canned text."""

    def __init__(self, text: str | None) -> None:
        self.text = text
        self.calls: List[Dict[str, Any]] = []

    def generate_json(self, prompt, *, schema, temperature):
        self.calls.append({"prompt": prompt, "schema": schema, "temperature": temperature})
        return self.text


@pytest.fixture()
def generation_config(monkeypatch):
    """Provide the default generation configuration."""

    monkeypatch.delenv("LINKJUICE_GEMINI_MODEL", raising=False)
    return load_config(None)


def make_request(
    product_urls: Iterable[str] = ("https://shop.test/p/gouache", "https://shop.test/p/pastel"),
    *,
    target_url: str = "https://shop.test/store/procreate-brushes",
    target_keyword: str = "Procreate Brushes",
) -> GenerateAnchorsRequest:
    return GenerateAnchorsRequest(
        target_url=target_url,
        target_keyword=target_keyword,
        product_urls=list(product_urls),
    )


def make_payload(urls: Iterable[str], anchor_type: str = "partial") -> str:
    return json.dumps([
        {
            "sourceUrl": url,
            "productName": f"Product {index}",
            "suggestions": [
                {
                    "text": f"procreate brush set {index}",
                    "type": anchor_type,
                    "reasoning": "Diversifies anchor profile",
                }
            ],
        }
        for index, url in enumerate(urls, start=1)
    ])
