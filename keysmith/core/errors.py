"""
Keysmith Configuration Errors
==============================

Caller-input errors raised synchronously by the generation path.
Analysis has no error path: every string, including the empty one,
yields a well-defined :class:`~keysmith.core.models.PasswordAnalysis`.
"""

from __future__ import annotations


class ConfigError(Exception):
    """Base class for invalid generation requests.

    Never retried internally; there is nothing transient to retry.
    """


class EmptyAlphabetError(ConfigError):
    """No symbols remain after composition flags and exclusions."""

    def __init__(self, message: str = "No character types selected") -> None:
        super().__init__(message)


class InvalidLengthError(ConfigError):
    """Requested password length is outside the supported bounds."""

    def __init__(self, length: int, minimum: int, maximum: int) -> None:
        self.length = length
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(
            f"Password length must be between {minimum} and {maximum}, got {length}"
        )


class InvalidCountError(ConfigError):
    """Requested bulk count is outside the supported bounds."""

    def __init__(self, count: int, maximum: int | None = None) -> None:
        self.count = count
        self.maximum = maximum
        if maximum is None:
            message = f"Password count must be at least 1, got {count}"
        else:
            message = f"Password count must be between 1 and {maximum}, got {count}"
        super().__init__(message)
