"""Service functions for turning a validated request into anchor suggestions.

These functions encapsulate the core logic of the application so they
can be unit tested without a running model and reused from the views.
They split the raw product URL block, build the prompt and response
schema sent to Gemini, and parse the model's JSON answer into typed
``ProductAnalysis`` objects.
"""

from __future__ import annotations

import json
import logging
import textwrap
from typing import Any, List, Sequence

from django.conf import settings
from google.genai import types

from .config import GenerationConfig, load_config
from .gemini import GeminiClient
from .types import AnchorSuggestion, AnchorType, GenerateAnchorsRequest, ProductAnalysis

logger = logging.getLogger(__name__)


class GenerationError(Exception):
    """Raised when anchor suggestions could not be produced."""


ANCHOR_SCHEMA = types.Schema(
    type=types.Type.ARRAY,
    items=types.Schema(
        type=types.Type.OBJECT,
        properties={
            "sourceUrl": types.Schema(
                type=types.Type.STRING,
                description="The original product URL provided.",
            ),
            "productName": types.Schema(
                type=types.Type.STRING,
                description="The extracted or inferred name of the product.",
            ),
            "suggestions": types.Schema(
                type=types.Type.ARRAY,
                items=types.Schema(
                    type=types.Type.OBJECT,
                    properties={
                        "text": types.Schema(
                            type=types.Type.STRING,
                            description="The suggested anchor text.",
                        ),
                        "type": types.Schema(
                            type=types.Type.STRING,
                            enum=[member.value for member in AnchorType],
                            description="The classification of this anchor text.",
                        ),
                        "reasoning": types.Schema(
                            type=types.Type.STRING,
                            description="Brief explanation of why this anchor works for SEO.",
                        ),
                    },
                    required=["text", "type", "reasoning"],
                ),
            ),
        },
        required=["sourceUrl", "productName", "suggestions"],
    ),
)

PROMPT_TEMPLATE = textwrap.dedent(
    """
    You are an elite SEO strategist and content architect with deep knowledge of
    Google's search guidelines and the psychology of link building.

    TASK: Generate high-value internal linking anchor texts that follow modern SEO
    practice (E-E-A-T, the Reasonable Surfer Model, semantic search).

    TARGET CONFIGURATION:
    - Target Category URL: {target_url}
    - Target Primary Keyword: {target_keyword}

    SOURCE PAGES (Products):
    {product_lines}

    MANDATORY STRATEGIES:
    1. Semantic relevance: anchors relate to the target keyword without always matching
       it exactly. Use LSI keywords and synonyms that reinforce the topical cluster.
    2. Reasonable Surfer Model: prefer descriptive anchors a reader is likely to click,
       ones that promise value (e.g. "browse our full collection").
    3. Anchor text diversity: avoid over-optimisation by mixing
       - exact match: sparingly (high power, high risk),
       - partial match: keyword plus modifiers (natural, safe),
       - contextual: descriptive phrases about the category concept (topical authority).
    4. User intent alignment: each anchor must read naturally in a sentence about the
       specific product while guiding the reader to the broader category.

    INSTRUCTIONS:
    1. Analyse each source page URL to infer the specific product context.
    2. For EACH source page, generate {suggestion_count} distinct anchor text suggestions
       linking TO the target category.
    3. In the 'reasoning' field, cite the SEO benefit explicitly (e.g. "Improves semantic
       signaling", "High click-through potential", "Diversifies anchor profile").

    Return the result strictly as a JSON array matching the schema.
    """
).strip()


def split_product_urls(raw_text: str) -> List[str]:
    """Split a newline-delimited block into trimmed, non-empty lines.

    Order is preserved and duplicates are kept.
    """

    if not raw_text:
        return []
    return [line.strip() for line in raw_text.splitlines() if line.strip()]


def build_prompt(request: GenerateAnchorsRequest, suggestions_per_product: int = 5) -> str:
    """Render the generation prompt for ``request``."""

    product_lines = "\n".join(f"- {url}" for url in request.product_urls)
    return PROMPT_TEMPLATE.format(
        target_url=request.target_url,
        target_keyword=request.target_keyword,
        product_lines=product_lines,
        suggestion_count=suggestions_per_product,
    )


def _require(item: Any, key: str, index: int) -> Any:
    if not isinstance(item, dict) or key not in item:
        raise GenerationError(f"Entry {index} is missing '{key}'.")
    return item[key]


def _require_str(item: Any, key: str, index: int) -> str:
    value = _require(item, key, index)
    if not isinstance(value, str):
        raise GenerationError(f"Entry {index} has non-string '{key}'.")
    return value


def _parse_suggestion(raw: Any, index: int) -> AnchorSuggestion:
    kind = _require(raw, "type", index)
    try:
        anchor_type = AnchorType(kind)
    except ValueError as exc:
        raise GenerationError(f"Entry {index} has unknown anchor type {kind!r}.") from exc
    return AnchorSuggestion(
        text=_require_str(raw, "text", index),
        type=anchor_type,
        reasoning=_require_str(raw, "reasoning", index),
    )


def parse_analyses(text: str | None) -> List[ProductAnalysis]:
    """Parse the model's JSON text into ``ProductAnalysis`` objects.

    Parameters
    ----------
    text:
        Raw response text returned by the model.

    Returns
    -------
    list of ProductAnalysis
        One entry per element of the returned JSON array, in model order.

    Raises
    ------
    GenerationError
        If the text is empty, is not valid JSON, or does not follow the
        declared schema.
    """

    if not text or not text.strip():
        raise GenerationError("No response generated from Gemini.")
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise GenerationError("Gemini returned malformed JSON.") from exc
    if not isinstance(payload, list):
        raise GenerationError("Gemini response is not a JSON array.")

    analyses: List[ProductAnalysis] = []
    for index, item in enumerate(payload):
        raw_suggestions = _require(item, "suggestions", index)
        if not isinstance(raw_suggestions, list):
            raise GenerationError(f"Entry {index} has non-list 'suggestions'.")
        analyses.append(
            ProductAnalysis(
                source_url=_require_str(item, "sourceUrl", index),
                product_name=_require_str(item, "productName", index),
                suggestions=[_parse_suggestion(raw, index) for raw in raw_suggestions],
            )
        )
    return analyses


def unmatched_sources(
    request: GenerateAnchorsRequest,
    analyses: Sequence[ProductAnalysis],
) -> List[str]:
    """Return returned source URLs that were not part of the submitted list."""

    submitted = set(request.product_urls)
    return [item.source_url for item in analyses if item.source_url not in submitted]


def generate_seo_anchors(
    request: GenerateAnchorsRequest,
    *,
    client: GeminiClient | None = None,
    config: GenerationConfig | None = None,
) -> List[ProductAnalysis]:
    """Ask Gemini for anchor suggestions and return the parsed analyses.

    A single best-effort call is made. Every failure, from a missing API
    key to a malformed answer, is logged and re-raised as
    :class:`GenerationError`.
    """

    try:
        config = config or load_config(getattr(settings, "LINKJUICE_CONFIG_PATH", None))
        if client is None:
            client = GeminiClient(getattr(settings, "GEMINI_API_KEY", None), model=config.model)
        prompt = build_prompt(request, config.suggestions_per_product)
        text = client.generate_json(prompt, schema=ANCHOR_SCHEMA, temperature=config.temperature)
        analyses = parse_analyses(text)
    except GenerationError:
        logger.exception("Error generating SEO anchors for %s", request.target_url)
        raise
    except Exception as exc:
        logger.exception("Error generating SEO anchors for %s", request.target_url)
        raise GenerationError(str(exc)) from exc

    logger.info(
        "Generated anchors for %d of %d product URLs",
        len(analyses),
        len(request.product_urls),
    )
    return analyses
