"""
Errors - Exception hierarchy for the adapters around the search engine.

The search itself never raises for recoverable conditions: unaffordable
transitions, unknown ids and deadline expiry all surface as return values.
These exceptions are for malformed input and programming errors.
"""

from __future__ import annotations


class CauldronError(Exception):
    """Base class for all engine errors."""


class ConfigError(CauldronError):
    """Invalid configuration value."""


class ProtocolError(CauldronError):
    """Turn input could not be parsed."""

    def __init__(self, message: str, line_number: int | None = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class DuplicateActionError(CauldronError):
    """Two actions share the same id within one turn."""

    def __init__(self, action_id: int):
        self.action_id = action_id
        super().__init__(f"Duplicate action id: {action_id}")


class UnknownActionError(CauldronError):
    """The executor was asked to run an id the repository does not hold."""

    def __init__(self, action_id: int):
        self.action_id = action_id
        super().__init__(f"Unknown action id: {action_id}")
