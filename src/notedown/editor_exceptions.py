"""Custom exceptions for the editor's boundary layers."""

from typing import Any


class EditorError(Exception):
    """Base exception for editor operations."""

    def __init__(self, message: str, error_details: dict[str, Any] | None = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            error_details: Optional dictionary with detailed error information
        """
        super().__init__(message)
        self.error_details = error_details


class EditorSettingsError(EditorError):
    """Raised when a settings file cannot be used."""


class ASTDeserializationError(EditorError):
    """Raised when a serialized AST is malformed."""


class TitleMapError(EditorError):
    """Raised when an entry title map is malformed."""
