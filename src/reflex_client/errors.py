from __future__ import annotations

from typing import Any


class ReflexError(Exception):
    """Base class for errors raised by reflex_client itself."""


class ConfigurationError(ReflexError):
    def __init__(self, subject: str, message: str, *, cause: Any | None = None) -> None:
        self.subject = subject
        self.message = message
        self.cause = cause

        super().__init__(str(self))

    def __str__(self) -> str:
        if self.subject:
            return f"configuration error in {self.subject}: {self.message}"
        return f"configuration error: {self.message}"


class MissingArgumentError(ReflexError, KeyError):
    def __init__(self, operation: str, key: str) -> None:
        self.operation = operation
        self.key = key

        super().__init__(str(self))

    def __str__(self) -> str:
        return f"{self.operation}: missing required argument '{self.key}'"


class ConversionError(ReflexError):
    """No converter is registered for a response type."""


class NoDefaultClientError(ReflexError):
    """An operation was called without a client and no default is bound."""
