"""Logger module for the note categorizer.

Provides the JSONL log of categorization attempts.
"""

from notecat.logger.attempts import AttemptLog, CategorizationAttempt

__all__ = [
    "AttemptLog",
    "CategorizationAttempt",
]
