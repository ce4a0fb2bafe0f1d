"""Error types and formatting utilities.

Error taxonomy:
- PreconditionError: the run is misconfigured and aborts before any item runs
- ItemFailure: a single item failed; recorded in the report, the run continues
- ConsentInputError: an answer was not recognizable as yes/no; re-prompt

Error Style Guide:
- User-facing errors use 'Error: ' prefix
- Use present tense: 'must be', 'is required'
- Include actionable hints where helpful
"""


class ProvisioError(Exception):
    """Base class for provisio errors."""


class PreconditionError(ProvisioError):
    """Raised when a run cannot start (empty item list, bad capabilities)."""


class ItemFailure(ProvisioError):
    """Raised by install actions to report a failure with a reason."""


class ConsentInputError(ProvisioError):
    """Raised when a consent answer is neither yes nor no."""

    def __init__(self, answer: str):
        self.answer = answer
        super().__init__(f"Invalid input {answer!r}. Please enter 'y' or 'n'")


def format_error(message: str) -> str:
    """Format an error message with consistent prefix.

    Examples:
        >>> format_error("catalog not found")
        'Error: catalog not found'
    """
    return f"Error: {message}"


def format_field_error(entity: str, field: str, issue: str) -> str:
    """Format a field validation error with structured format.

    Examples:
        >>> format_field_error("Item 'fzf'", "install", "must be a list")
        "Item 'fzf' field 'install' must be a list"
    """
    return f"{entity} field '{field}' {issue}"


def format_suggestion(message: str, suggestion: str) -> str:
    """Format an error message with a helpful suggestion.

    Examples:
        >>> format_suggestion("catalog 'foo' not found", "run 'provisio list' to see catalogs")
        "Error: catalog 'foo' not found. Hint: run 'provisio list' to see catalogs"
    """
    return f"{format_error(message)}. Hint: {suggestion}"


__all__ = [
    "ProvisioError",
    "PreconditionError",
    "ItemFailure",
    "ConsentInputError",
    "format_error",
    "format_field_error",
    "format_suggestion",
]
