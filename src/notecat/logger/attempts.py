"""Categorization attempt records and their JSONL log.

Each attempt to categorize a note, successful or not, is written as one
JSON line to a daily log file for later diagnostics.
"""

import json
import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class CategorizationAttempt:
    """A single categorization call and its outcome.

    Attributes:
        timestamp: UTC time the attempt started.
        provider: Provider identifier as selected by the caller.
        success: Whether a category was produced.
        category: Resulting category on success.
        error_type: Exception class name on failure.
        error: Error message on failure.
        latency_ms: Time spent in the provider call.
        content_length: Length of the note text (the text itself is not logged).
    """

    timestamp: datetime
    provider: str
    success: bool
    latency_ms: int
    content_length: int
    category: str | None = None
    error_type: str | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert attempt to dictionary for serialization."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "provider": self.provider,
            "success": self.success,
            "category": self.category,
            "error_type": self.error_type,
            "error": self.error,
            "latency_ms": self.latency_ms,
            "content_length": self.content_length,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CategorizationAttempt":
        """Create attempt from dictionary."""
        return cls(
            timestamp=datetime.fromisoformat(data["timestamp"]),
            provider=data["provider"],
            success=data["success"],
            category=data.get("category"),
            error_type=data.get("error_type"),
            error=data.get("error"),
            latency_ms=data.get("latency_ms", 0),
            content_length=data.get("content_length", 0),
        )


class AttemptLog:
    """JSONL writer for categorization attempts.

    Writes each attempt as a JSON line to daily log files.
    """

    def __init__(self, log_dir: Path) -> None:
        """Initialize attempt log.

        Args:
            log_dir: Directory for log files.
        """
        self._log_dir = log_dir.expanduser()
        self._log_dir.mkdir(parents=True, exist_ok=True)

    @property
    def log_dir(self) -> Path:
        """Get the log directory."""
        return self._log_dir

    def record(self, attempt: CategorizationAttempt) -> None:
        """Append an attempt to its day's log file.

        Args:
            attempt: The attempt to write.
        """
        log_file = self._log_dir / f"{attempt.timestamp.strftime('%Y-%m-%d')}.jsonl"
        try:
            with open(log_file, "a") as f:
                json.dump(attempt.to_dict(), f)
                f.write("\n")
        except OSError as e:
            # Best effort
            logger.warning(f"Failed to write attempt log {log_file}: {e}")

    def read(self, target_date: date | None = None) -> list[CategorizationAttempt]:
        """Read attempts from a daily log file.

        Args:
            target_date: The date to read. Defaults to today (UTC).

        Returns:
            List of attempts in write order.
        """
        target_date = target_date or datetime.now(UTC).date()
        log_file = self._log_dir / f"{target_date.strftime('%Y-%m-%d')}.jsonl"

        if not log_file.exists():
            return []

        attempts = []
        with open(log_file) as f:
            for line in f:
                if line.strip():
                    attempts.append(CategorizationAttempt.from_dict(json.loads(line)))

        return attempts


__all__ = [
    "AttemptLog",
    "CategorizationAttempt",
]
