"""Mock categorization provider for testing."""

from .base import Provider
from .errors import CategorizationError


class MockCategoryProvider:
    """Mock provider that returns a configurable label.

    Records every call so tests can assert on what was sent.
    """

    def __init__(self, provider: Provider = Provider.CHATGPT, response: str = "Work") -> None:
        """Initialize mock provider.

        Args:
            provider: Provider slot this mock stands in for.
            response: Label to return.
        """
        self._provider = provider
        self._response = response
        self._error: CategorizationError | None = None
        self._calls: list[tuple[str, str]] = []

    @property
    def provider(self) -> Provider:
        return self._provider

    @property
    def calls(self) -> list[tuple[str, str]]:
        """Get list of (content, api_key) calls made."""
        return self._calls.copy()

    def set_response(self, response: str) -> None:
        """Set the label to return."""
        self._response = response
        self._error = None

    def set_error(self, error: CategorizationError) -> None:
        """Make the next calls raise the given error."""
        self._error = error

    def categorize(self, content: str, api_key: str) -> str:
        self._calls.append((content, api_key))
        if self._error is not None:
            raise self._error
        return self._response


__all__ = ["MockCategoryProvider"]
