"""
Errors raised by the search domain.

The API layer turns them into HTTP responses; nothing here knows about HTTP.
"""

from typing import Optional


class DomainException(Exception):
    """Root of every search domain error."""


class ValidationError(DomainException):
    """Input rejected before any store access."""


class InvalidOptionError(ValidationError):
    """An option id that is unknown, or not offered under the current scope."""

    def __init__(self, facet_id: str, option_id: str, reason: Optional[str] = None):
        self.facet_id = facet_id
        self.option_id = option_id
        self.reason = reason

        message = f"Option '{option_id}' is not valid for facet '{facet_id}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnknownFacetError(ValidationError):
    """A facet id outside the hierarchy."""

    def __init__(self, facet_id: str):
        self.facet_id = facet_id
        super().__init__(f"Unknown facet '{facet_id}'")


class ProcessingError(DomainException):
    """Input was valid but the operation could not complete."""


class SearchError(ProcessingError):
    """Search could not be executed."""


class SearchUnavailableError(SearchError):
    """Store unreachable or past its deadline; retry later."""

    def __init__(self, message: str = "Search backend is unavailable", original_error: Optional[Exception] = None):
        self.original_error = original_error
        super().__init__(message)


__all__ = [
    "DomainException",
    "ValidationError",
    "InvalidOptionError",
    "UnknownFacetError",
    "ProcessingError",
    "SearchError",
    "SearchUnavailableError",
]
