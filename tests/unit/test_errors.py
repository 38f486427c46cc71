"""Unit tests for structured errors."""

from tokenkit.errors import (
    CollectionNotFoundError,
    ConfigurationError,
    ErrorCategory,
    InvalidColorError,
    InvalidRequestError,
    SourceNotFoundError,
    StorageError,
    TokenKitError,
    UnsupportedFormatError,
)


class TestTokenKitError:
    """Tests for the base error."""

    def test_format_without_color(self):
        error = TokenKitError(
            category=ErrorCategory.EXPORT,
            message="Something failed",
            suggestion="Try again",
            details={"format": "css"},
        )
        assert error.format(use_color=False) == (
            "Error: Something failed\nSuggestion: Try again\n  format: css"
        )

    def test_format_with_color(self):
        error = TokenKitError(category=ErrorCategory.EXPORT, message="Boom")
        assert "\033[91m" in error.format(use_color=True)

    def test_str_is_plain(self):
        error = TokenKitError(category=ErrorCategory.STORAGE, message="Nope")
        assert str(error) == "Error: Nope"

    def test_is_exception(self):
        error = CollectionNotFoundError("c1")
        assert isinstance(error, Exception)
        assert error.args == ("Collection c1 not found",)


class TestSubclasses:
    def test_collection_not_found(self):
        error = CollectionNotFoundError("c1")
        assert error.category == ErrorCategory.NOT_FOUND
        assert error.message == "Collection c1 not found"
        assert error.details == {"collection": "c1"}
        assert error.exit_code == 1

    def test_invalid_request(self):
        error = InvalidRequestError("options", "an object", ["css"])
        assert error.category == ErrorCategory.INVALID_INPUT
        assert error.message == "Invalid options: expected an object, got list"
        assert error.details == {"field": "options"}
        assert error.exit_code == 2

    def test_source_not_found(self):
        assert SourceNotFoundError("doc.json").message == "Document snapshot not found: doc.json"
        error = SourceNotFoundError("doc.json", "bad json")
        assert error.message == "Cannot read document snapshot doc.json: bad json"

    def test_storage_error(self):
        error = StorageError("Failed", key="design-tokens")
        assert error.category == ErrorCategory.STORAGE
        assert error.details == {"key": "design-tokens"}
        assert StorageError("Failed").details is None

    def test_configuration_error(self):
        error = ConfigurationError("bad", config_file="tokenkit.config.json")
        assert error.suggestion == "Check your configuration file syntax and field values"
        assert ConfigurationError("bad", suggestion="Fix it").suggestion == "Fix it"

    def test_unsupported_format(self):
        error = UnsupportedFormatError("xml", ["css", "json"])
        assert error.exit_code == 2
        assert error.suggestion == "Use one of: css, json"
        assert UnsupportedFormatError("xml").suggestion is None

    def test_invalid_color(self):
        error = InvalidColorError("#12")
        assert isinstance(error, ValueError)
        assert error.value == "#12"
        assert str(error) == "Invalid hex color: #12"
