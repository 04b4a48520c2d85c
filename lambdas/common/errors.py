"""Exceptions raised by the custom auth challenge triggers."""

from __future__ import annotations


class AuthChallengeError(Exception):
    """Base class for errors raised while handling an auth challenge."""


class DeciderFault(AuthChallengeError):
    """Raised when the next authentication step cannot be decided."""


class UnsupportedSessionError(DeciderFault):
    """Raised when the session history has a shape the decider does not support."""


class ChallengeGenerationError(AuthChallengeError):
    """Raised when a challenge cannot be created for the current session."""
