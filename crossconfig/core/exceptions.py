"""
Centralized exception hierarchy for crossconfig.

This module defines all custom exceptions used across the codebase
so that callers can catch a single base class for any crossconfig failure.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class CrossConfigError(Exception):
    """Base exception for all crossconfig errors."""

    pass


# ============================================================================
# Host Triple Exceptions
# ============================================================================


class InvalidTripleError(CrossConfigError, ValueError):
    """Raised when a host triple string cannot be parsed at all."""

    def __init__(self, triple, reason: str = ""):
        self.triple = triple
        self.reason = reason
        msg = f"Invalid host triple: {triple!r}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


# ============================================================================
# Settings Exceptions
# ============================================================================


class MalformedConfigError(CrossConfigError, ValueError):
    """Raised when a settings key holds a value of the wrong shape."""

    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__(f"Malformed setting '{key}': {message}")


class SettingsFileError(CrossConfigError):
    """Raised when a settings file cannot be read or decoded."""

    pass
