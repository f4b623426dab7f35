"""Gemini categorization over the Generative Language REST API.

Gemini gets a single prompt without chat roles and tends to wrap its
answer in quotes or prefix it with "Category:", so the reply is
normalized before it is returned.

API docs: https://ai.google.dev/api/generate-content
"""

import logging
from typing import Any

import httpx

from ..config import GeminiConfig
from .base import DEFAULT_TAXONOMY, Provider, build_completion_prompt, normalize_label
from .errors import EmptyResponseError, TransportError

logger = logging.getLogger(__name__)


class GeminiProvider:
    """Categorizes notes with a Gemini generateContent call."""

    def __init__(
        self,
        config: GeminiConfig | None = None,
        taxonomy: tuple[str, ...] = DEFAULT_TAXONOMY,
    ) -> None:
        """Initialize the provider.

        Args:
            config: Model, endpoint and timeout settings.
            taxonomy: Categories suggested to the model.
        """
        self._config = config or GeminiConfig()
        self._taxonomy = taxonomy

    @property
    def provider(self) -> Provider:
        return Provider.GEMINI

    @property
    def endpoint(self) -> str:
        """Full generateContent URL for the configured model."""
        base = self._config.api_url.rstrip("/")
        return f"{base}/models/{self._config.model}:generateContent"

    def categorize(self, content: str, api_key: str) -> str:
        """Categorize note content with a single generation call.

        Raises:
            TransportError: If the request fails or the payload is malformed.
            EmptyResponseError: If nothing is left after normalization.
        """
        data = self._make_request(build_completion_prompt(content, self._taxonomy), api_key)
        raw = self._extract_text(data).strip()

        if not raw:
            raise EmptyResponseError("No category received from Gemini", provider=self.provider.value)

        category = normalize_label(raw)
        if not category:
            raise EmptyResponseError(
                f"Gemini response '{raw}' is empty after cleanup", provider=self.provider.value
            )

        logger.debug(f"Gemini categorized note as '{category}' (raw: '{raw}')")
        return category

    def _make_request(self, prompt: str, api_key: str) -> dict[str, Any]:
        """Make the actual API request to Gemini.

        Args:
            prompt: Full prompt text
            api_key: Gemini API key

        Returns:
            Decoded JSON response body
        """
        headers = {
            "x-goog-api-key": api_key,
            "Content-Type": "application/json",
        }
        payload = {"contents": [{"parts": [{"text": prompt}]}]}

        try:
            with httpx.Client(timeout=self._config.timeout_seconds) as client:
                response = client.post(self.endpoint, headers=headers, json=payload)
                response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"Gemini HTTP error {e.response.status_code}: {e.response.text}",
                provider=self.provider.value,
                status_code=e.response.status_code,
            ) from e
        except httpx.TimeoutException as e:
            raise TransportError(
                f"Gemini request timed out: {e}", provider=self.provider.value
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(
                f"Gemini request failed: {e}", provider=self.provider.value
            ) from e
        except ValueError as e:
            raise TransportError(
                f"Gemini returned invalid JSON: {e}", provider=self.provider.value
            ) from e

        if not isinstance(data, dict):
            raise TransportError("Gemini returned an unexpected payload", provider=self.provider.value)
        return data

    def _extract_text(self, data: dict[str, Any]) -> str:
        """Pull the generated text out of a generateContent response."""
        candidates = data.get("candidates")
        if not isinstance(candidates, list) or not candidates:
            # Blocked prompts come back with promptFeedback only
            feedback = data.get("promptFeedback", {})
            raise TransportError(
                f"Gemini returned no candidates (feedback: {feedback})",
                provider=self.provider.value,
            )

        try:
            parts = candidates[0].get("content", {}).get("parts", [])
            return "".join(part.get("text", "") for part in parts)
        except (AttributeError, TypeError) as e:
            raise TransportError(
                f"Malformed Gemini response: {e}", provider=self.provider.value
            ) from e


__all__ = ["GeminiProvider"]
