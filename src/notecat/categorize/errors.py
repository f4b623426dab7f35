"""Error types for note categorization.

Every provider failure is reported through one of these exceptions.
"""


class CategorizationError(Exception):
    """Base exception for categorization errors."""

    def __init__(self, message: str, provider: str | None = None) -> None:
        """Initialize categorization error.

        Args:
            message: Error message.
            provider: Provider identifier the attempt was made with.
        """
        super().__init__(message)
        self.provider = provider


class ConfigurationError(CategorizationError):
    """Raised for missing credentials or an unknown provider."""

    pass


class EmptyResponseError(CategorizationError):
    """Raised when the provider answered but produced no usable label."""

    pass


class TransportError(CategorizationError):
    """Raised when the provider call itself fails."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        status_code: int | None = None,
    ) -> None:
        """Initialize transport error.

        Args:
            message: Error message.
            provider: Provider identifier.
            status_code: HTTP status code if available.
        """
        super().__init__(message, provider)
        self.status_code = status_code


__all__ = [
    "CategorizationError",
    "ConfigurationError",
    "EmptyResponseError",
    "TransportError",
]
