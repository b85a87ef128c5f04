"""Gemini text generation client used for structured JSON output."""

from __future__ import annotations

from typing import Optional

from google import genai
from google.genai import types


class GeminiClient:
    """Client for generating schema-constrained JSON via Google's Gemini models."""

    def __init__(self, api_key: Optional[str], model: str = "gemini-3-pro-preview"):
        self.client = genai.Client(api_key=api_key)
        self.model = model

    def generate_json(
        self,
        prompt: str,
        *,
        schema: types.Schema,
        temperature: float = 0.7,
    ) -> Optional[str]:
        """
        Generate a JSON document that conforms to ``schema``.

        Args:
            prompt: Full natural-language prompt.
            schema: Response schema the model must follow.
            temperature: Sampling temperature.

        Returns:
            The raw response text, or None when the model produced nothing.
        """
        response = self.client.models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=schema,
                temperature=temperature,
            ),
        )
        return response.text
