"""Claude chat categorization using the Anthropic API."""

import logging

import anthropic

from ..config import ClaudeConfig
from .base import DEFAULT_TAXONOMY, Provider, build_system_prompt
from .errors import EmptyResponseError, TransportError

logger = logging.getLogger(__name__)


class ClaudeProvider:
    """Categorizes notes with the Claude messages API."""

    def __init__(
        self,
        config: ClaudeConfig | None = None,
        taxonomy: tuple[str, ...] = DEFAULT_TAXONOMY,
    ) -> None:
        """Initialize the provider.

        Args:
            config: Model and request settings.
            taxonomy: Categories suggested to the model.
        """
        self._config = config or ClaudeConfig()
        self._system_prompt = build_system_prompt(taxonomy)

    @property
    def provider(self) -> Provider:
        return Provider.CLAUDE

    def categorize(self, content: str, api_key: str) -> str:
        """Categorize note content with a single message request.

        Raises:
            TransportError: If the API call fails.
            EmptyResponseError: If the reply holds no text.
        """
        client = anthropic.Anthropic(
            api_key=api_key,
            timeout=self._config.timeout_seconds,
            max_retries=0,
        )

        try:
            response = client.messages.create(
                model=self._config.model,
                max_tokens=self._config.max_tokens,
                temperature=self._config.temperature,
                system=self._system_prompt,
                messages=[{"role": "user", "content": content}],
            )
        except anthropic.APIStatusError as e:
            raise TransportError(
                f"Claude API error {e.status_code}: {e.message}",
                provider=self.provider.value,
                status_code=e.status_code,
            ) from e
        except anthropic.APIError as e:
            raise TransportError(
                f"Claude request failed: {e}", provider=self.provider.value
            ) from e

        text = ""
        if response.content:
            text = (getattr(response.content[0], "text", "") or "").strip()

        if not text:
            raise EmptyResponseError("No category received from Claude", provider=self.provider.value)

        logger.debug(f"Claude categorized note as '{text}' (model: {self._config.model})")
        return text


__all__ = ["ClaudeProvider"]
