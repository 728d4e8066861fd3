"""Error taxonomy for the scoring core.

Every error raised here propagates to the caller untouched; the core never
retries or defaults its way around bad input.
"""

from typing import Any


class ScoringError(Exception):
    """Base exception for scoring failures."""

    pass


class InvalidRankString(ScoringError, ValueError):
    """Raised when a compact rank string or tier name cannot be parsed."""

    def __init__(self, value: str, reason: str) -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid rank string {value!r}: {reason}")


class InvalidRankValue(ScoringError, ValueError):
    """Raised when a rank ordinal falls outside [0, 36] outside of from_value."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"Rank value {value!r} is outside [0, 36]")


class MalformedGameStats(ScoringError, ValueError):
    """Raised when per-game statistics hold impossible values."""

    def __init__(self, field: str, value: Any) -> None:
        self.field = field
        self.value = value
        super().__init__(f"Malformed game stats: {field}={value!r}")
