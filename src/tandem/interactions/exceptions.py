"""Exceptions for interaction session handling."""


class InteractionError(Exception):
    """Base exception for interaction tracking."""

    pass


class SessionActiveError(InteractionError):
    """Raised when starting a session while another one is open."""

    pass
