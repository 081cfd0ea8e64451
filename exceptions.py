# exceptions.py
"""
Custom exceptions for the Club Match Generator.

This module defines domain-specific exceptions for better error handling
and debugging throughout the application. Roster problems found during
generation are returned as GenerationFailure values instead (see app_types).
"""


class ClubAppError(Exception):
    """Base exception for all application errors."""

    pass


class DatabaseError(ClubAppError):
    """Raised when a database operation fails."""

    pass


class GenerationError(ClubAppError):
    """Raised when a generated result cannot be used as requested."""

    pass


class ValidationError(ClubAppError):
    """Raised when input validation fails."""

    pass
