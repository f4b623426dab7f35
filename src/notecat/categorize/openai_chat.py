"""OpenAI chat-completion categorization.

Sends the note as the user turn under a fixed system instruction and
returns the first completion's text.
"""

import logging

import openai

from ..config import OpenAIConfig
from .base import DEFAULT_TAXONOMY, Provider, build_system_prompt
from .errors import EmptyResponseError, TransportError

logger = logging.getLogger(__name__)


class OpenAIChatProvider:
    """Categorizes notes with the OpenAI chat completions API."""

    def __init__(
        self,
        config: OpenAIConfig | None = None,
        taxonomy: tuple[str, ...] = DEFAULT_TAXONOMY,
    ) -> None:
        """Initialize the provider.

        Args:
            config: Model and request settings.
            taxonomy: Categories suggested to the model.
        """
        self._config = config or OpenAIConfig()
        self._system_prompt = build_system_prompt(taxonomy)

    @property
    def provider(self) -> Provider:
        return Provider.CHATGPT

    def categorize(self, content: str, api_key: str) -> str:
        """Categorize note content with a single chat completion.

        Args:
            content: Note text.
            api_key: OpenAI API key.

        Returns:
            Trimmed category label.

        Raises:
            TransportError: If the API call fails.
            EmptyResponseError: If the completion holds no text.
        """
        # No SDK retries, one request per call
        client = openai.OpenAI(
            api_key=api_key,
            timeout=self._config.timeout_seconds,
            max_retries=0,
        )

        try:
            response = client.chat.completions.create(
                model=self._config.model,
                messages=[
                    {"role": "system", "content": self._system_prompt},
                    {"role": "user", "content": content},
                ],
                temperature=self._config.temperature,
                max_tokens=self._config.max_tokens,
            )
        except openai.APIStatusError as e:
            raise TransportError(
                f"OpenAI API error {e.status_code}: {e.message}",
                provider=self.provider.value,
                status_code=e.status_code,
            ) from e
        except openai.OpenAIError as e:
            raise TransportError(
                f"OpenAI request failed: {e}", provider=self.provider.value
            ) from e

        text = ""
        if response.choices:
            text = (response.choices[0].message.content or "").strip()

        if not text:
            raise EmptyResponseError("No category received from OpenAI", provider=self.provider.value)

        logger.debug(f"OpenAI categorized note as '{text}' (model: {self._config.model})")
        return text


__all__ = ["OpenAIChatProvider"]
