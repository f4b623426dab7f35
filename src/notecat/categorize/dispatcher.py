"""Categorization dispatcher.

Routes a note to the selected provider and enforces the shared contract:
a trimmed, non-empty label or a CategorizationError. There is no retry
and no fallback to another provider.
"""

import logging
import time
from datetime import UTC, datetime

from ..config import ProvidersConfig
from ..logger.attempts import AttemptLog, CategorizationAttempt
from .base import DEFAULT_TAXONOMY, CategoryProvider, Provider, parse_provider
from .claude import ClaudeProvider
from .errors import CategorizationError, ConfigurationError, EmptyResponseError
from .gemini import GeminiProvider
from .openai_chat import OpenAIChatProvider
from .pending import PendingProvider

logger = logging.getLogger(__name__)


def create_providers(
    config: ProvidersConfig | None = None,
    taxonomy: tuple[str, ...] = DEFAULT_TAXONOMY,
) -> dict[Provider, CategoryProvider]:
    """Build one implementation for every known provider.

    Args:
        config: Provider settings
        taxonomy: Categories suggested to the models

    Returns:
        Mapping of provider to implementation
    """
    config = config or ProvidersConfig()
    return {
        Provider.CHATGPT: OpenAIChatProvider(config.openai, taxonomy),
        Provider.CLAUDE: ClaudeProvider(config.claude, taxonomy),
        Provider.GEMINI: GeminiProvider(config.gemini, taxonomy),
        Provider.MISTRAL: PendingProvider(Provider.MISTRAL),
    }


class CategoryDispatcher:
    """Dispatches categorization requests to provider implementations.

    Holds no per-call state; credentials are passed in on every call.
    """

    def __init__(
        self,
        providers: dict[Provider, CategoryProvider] | None = None,
        attempt_log: AttemptLog | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            providers: Provider implementations. Defaults to create_providers().
            attempt_log: Optional JSONL log receiving one record per attempt.
        """
        self._providers = providers if providers is not None else create_providers()
        self._attempt_log = attempt_log

    @classmethod
    def from_config(
        cls,
        config: ProvidersConfig,
        attempt_log: AttemptLog | None = None,
    ) -> "CategoryDispatcher":
        """Create a dispatcher with providers built from config."""
        return cls(create_providers(config), attempt_log=attempt_log)

    @property
    def providers(self) -> list[Provider]:
        """Get the registered providers."""
        return list(self._providers)

    def register(self, implementation: CategoryProvider) -> None:
        """Register or replace the implementation for its provider."""
        self._providers[implementation.provider] = implementation

    def categorize(self, content: str, provider: Provider | str, credentials: str) -> str:
        """Categorize note content with the selected provider.

        Args:
            content: Note text. Callers reject empty text beforehand.
            provider: Provider selector.
            credentials: API key for the provider.

        Returns:
            Category label.

        Raises:
            ConfigurationError: Missing credentials or unknown provider.
            EmptyResponseError: The provider produced no usable text.
            TransportError: The provider call failed.
        """
        name = provider.value if isinstance(provider, Provider) else str(provider)
        start_time = time.time()

        try:
            category = self._dispatch(content, name, credentials)
        except CategorizationError as e:
            latency_ms = int((time.time() - start_time) * 1000)
            logger.error(f"Error categorizing note with {name}: {type(e).__name__}: {e}")
            self._record(name, content, latency_ms, error=e)
            raise
        except Exception as e:
            latency_ms = int((time.time() - start_time) * 1000)
            logger.exception(f"Unexpected error categorizing note with {name}: {e}")
            self._record(name, content, latency_ms, error=e)
            raise

        latency_ms = int((time.time() - start_time) * 1000)
        logger.info(f"Categorized note as '{category}' via {name} in {latency_ms}ms")
        self._record(name, content, latency_ms, category=category)
        return category

    def _dispatch(self, content: str, name: str, credentials: str) -> str:
        if not credentials or not credentials.strip():
            raise ConfigurationError(f"API key is required for {name}", provider=name)

        selected = parse_provider(name)
        implementation = self._providers.get(selected) if selected is not None else None
        if implementation is None:
            raise ConfigurationError("Invalid AI model selected", provider=name)

        category = implementation.categorize(content, credentials.strip()).strip()
        if not category:
            raise EmptyResponseError(f"No category received from {name}", provider=name)
        return category

    def _record(
        self,
        provider: str,
        content: str,
        latency_ms: int,
        category: str | None = None,
        error: Exception | None = None,
    ) -> None:
        if self._attempt_log is None:
            return
        self._attempt_log.record(
            CategorizationAttempt(
                timestamp=datetime.now(UTC),
                provider=provider,
                success=error is None,
                category=category,
                error_type=type(error).__name__ if error else None,
                error=str(error) if error else None,
                latency_ms=latency_ms,
                content_length=len(content),
            )
        )


_default_dispatcher: CategoryDispatcher | None = None


def categorize(content: str, provider: Provider | str, credentials: str) -> str:
    """Categorize a note using the default dispatcher.

    See CategoryDispatcher.categorize for the full contract.
    """
    global _default_dispatcher
    if _default_dispatcher is None:
        _default_dispatcher = CategoryDispatcher()
    return _default_dispatcher.categorize(content, provider, credentials)


__all__ = [
    "CategoryDispatcher",
    "categorize",
    "create_providers",
]
