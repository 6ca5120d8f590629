"""
Suggestions Errors
Error types for the suggestions system and the Outcome wrapper for best-effort calls.
"""

from dataclasses import dataclass
from typing import Optional


class SuggestionError(Exception):
    """Base error carrying a message that is safe to show to the user."""

    default_message = "Sorry, something went wrong handling that action."

    def __init__(self, message: Optional[str] = None, user_message: Optional[str] = None):
        super().__init__(message or user_message or self.default_message)
        self.user_message = user_message or self.default_message


class ValidationError(SuggestionError):
    """Submitted suggestion text was empty after trimming."""

    default_message = "Please include some text."


class ConfigurationError(SuggestionError):
    """Target channel is missing, not a text channel, or not reachable."""

    default_message = "Config error: target suggestions channel is invalid."


class AuthorizationError(SuggestionError):
    """Requester may not see who voted on a suggestion."""

    default_message = "You are not authorized to view voting results."


class TransientRenderError(SuggestionError):
    """Edit, pin, delete or history fetch failed after the user's action succeeded."""


@dataclass(frozen=True)
class Outcome:
    """Result of a best-effort platform call. Callers log the error and carry on."""

    ok: bool
    error: Optional[Exception] = None

    @classmethod
    def success(cls) -> "Outcome":
        return cls(ok=True)

    @classmethod
    def failure(cls, error: Exception) -> "Outcome":
        return cls(ok=False, error=error)
