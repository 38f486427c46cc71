"""Structured error types with recovery suggestions.

Only genuinely exceptional conditions are raised: missing collections,
malformed requests, unreadable snapshots, storage failures, invalid
configuration and structurally invalid hex colors. Alias resolution
failures are data (``None``), never exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Categories of tokenkit errors."""

    NOT_FOUND = "not_found"  # Collection or snapshot missing
    INVALID_INPUT = "invalid_input"  # Malformed request payloads
    STORAGE = "storage"  # Key-value persistence failures
    CONFIGURATION = "configuration"  # Invalid config file or settings
    EXPORT = "export"  # Unknown export format


@dataclass
class TokenKitError(Exception):
    """Base class for structured errors with recovery suggestions.

    Attributes:
        category: Error category for grouping.
        message: Human-readable error message.
        suggestion: Optional actionable recovery suggestion.
        details: Optional additional details dict.
        exit_code: Exit code to use when this error terminates the CLI.
    """

    category: ErrorCategory
    message: str
    suggestion: str | None = None
    details: dict[str, Any] | None = field(default_factory=dict)
    exit_code: int = 1

    def __post_init__(self) -> None:
        """Initialize the exception with the message."""
        super().__init__(self.message)

    def format(self, use_color: bool = True) -> str:
        """Format the error for display.

        Args:
            use_color: Whether to include ANSI color codes.

        Returns:
            Formatted error string with suggestion if available.
        """
        red = "\033[91m" if use_color else ""
        cyan = "\033[96m" if use_color else ""
        dim = "\033[2m" if use_color else ""
        reset = "\033[0m" if use_color else ""

        lines = [f"{red}Error:{reset} {self.message}"]

        if self.suggestion:
            lines.append(f"{cyan}Suggestion:{reset} {self.suggestion}")

        if self.details:
            for key, value in self.details.items():
                lines.append(f"{dim}  {key}: {value}{reset}")

        return "\n".join(lines)

    def __str__(self) -> str:
        """Return the formatted error message."""
        return self.format(use_color=False)


class CollectionNotFoundError(TokenKitError):
    """Error when a variable collection doesn't exist in the document."""

    def __init__(self, collection_id: str):
        super().__init__(
            category=ErrorCategory.NOT_FOUND,
            message=f"Collection {collection_id} not found",
            suggestion="Run 'tokenkit collections' to list available collections",
            details={"collection": collection_id},
            exit_code=1,
        )


class InvalidRequestError(TokenKitError):
    """Error when a request field has the wrong shape."""

    def __init__(self, field_name: str, expected: str, value: Any):
        super().__init__(
            category=ErrorCategory.INVALID_INPUT,
            message=f"Invalid {field_name}: expected {expected}, got {type(value).__name__}",
            details={"field": field_name},
            exit_code=2,
        )


class SourceNotFoundError(TokenKitError):
    """Error when a document snapshot file cannot be read."""

    def __init__(self, path: str, original_error: str | None = None):
        message = f"Document snapshot not found: {path}"
        if original_error:
            message = f"Cannot read document snapshot {path}: {original_error}"
        super().__init__(
            category=ErrorCategory.NOT_FOUND,
            message=message,
            suggestion="Export the document's styles and variables to a JSON snapshot first",
            details={"path": path},
            exit_code=1,
        )


class StorageError(TokenKitError):
    """Error writing to or clearing the token store."""

    def __init__(self, message: str, key: str | None = None):
        super().__init__(
            category=ErrorCategory.STORAGE,
            message=message,
            suggestion="Check that the storage path is writable",
            details={"key": key} if key else None,
            exit_code=1,
        )


class ConfigurationError(TokenKitError):
    """Error in configuration file or settings."""

    def __init__(
        self,
        message: str,
        config_file: str | None = None,
        suggestion: str | None = None,
    ):
        default_suggestion = "Check your configuration file syntax and field values"
        super().__init__(
            category=ErrorCategory.CONFIGURATION,
            message=message,
            suggestion=suggestion or default_suggestion,
            details={"config_file": config_file} if config_file else None,
            exit_code=1,
        )


class UnsupportedFormatError(TokenKitError):
    """Error when an export format has no registered exporter."""

    def __init__(self, export_format: str, available: list[str] | None = None):
        super().__init__(
            category=ErrorCategory.EXPORT,
            message=f"Unsupported export format: {export_format}",
            suggestion=(
                f"Use one of: {', '.join(available)}" if available else None
            ),
            details={"format": export_format},
            exit_code=2,
        )


class InvalidColorError(ValueError):
    """Raised when a hex color string has an invalid length."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid hex color: {value}")
