"""Placeholder for providers that have no implementation yet."""

from .base import Provider


class PendingProvider:
    """Returns a fixed placeholder label without any network call.

    This is a successful categorization, not an error.
    """

    def __init__(self, provider: Provider) -> None:
        self._provider = provider

    @property
    def provider(self) -> Provider:
        return self._provider

    @property
    def placeholder(self) -> str:
        """Label returned for every note."""
        return f"Uncategorized ({self._provider.display_name} implementation pending)"

    def categorize(self, content: str, api_key: str) -> str:  # noqa: ARG002
        return self.placeholder


__all__ = ["PendingProvider"]
