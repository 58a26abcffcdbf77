"""Exception hierarchy for the catalog clients.

Every error raised by XboxKit derives from :class:`XboxError`, so callers can
catch broadly or pick out a specific failure (e.g. ``HTTPStatusError`` to look
at ``status_code``).
"""
from typing import Optional


class XboxError(Exception):
    """Base class for all XboxKit exceptions."""


class InvalidInputError(XboxError):
    """Raised when a required argument is empty."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Invalid input: {message}")


class InvalidURLError(XboxError):
    """Raised when the query parameters cannot be encoded into a URL."""

    def __init__(self) -> None:
        super().__init__("Failed to construct a valid URL")


class HTTPStatusError(XboxError):
    """Raised when the catalog answers with a status outside 200–299.

    Attributes
    ----------
    status_code : The HTTP status returned by the server.
    """

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"HTTP error: {status_code}")


class JSONParsingError(XboxError):
    """Raised when the response body is not JSON or does not fit the schema.

    Attributes
    ----------
    underlying : The exception raised by the parser or schema check.
    """

    def __init__(self, underlying: Exception) -> None:
        self.underlying = underlying
        super().__init__(f"JSON Parsing error: {underlying}")


class InvalidResponseFormatError(XboxError):
    """Raised when the JSON parses but has the wrong top-level shape."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Invalid response format: {message}")


class MissingRequiredFieldError(XboxError):
    """Raised when a collection entry is neither a header nor a game item."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Missing required field: {message}")


class XboxNetworkError(XboxError):
    """Raised when the request never produced an HTTP response."""

    def __init__(self, underlying: Exception) -> None:
        self.underlying = underlying
        super().__init__(f"Network error: {underlying}")


class ReferenceDataError(XboxError):
    """Raised when the bundled market/language tables cannot be loaded.

    Attributes
    ----------
    path       : The resource file that failed.
    underlying : The I/O or decode error, when there is one.
    """

    def __init__(self, path: str, message: str,
                 underlying: Optional[Exception] = None) -> None:
        self.path = path
        self.underlying = underlying
        super().__init__(f"Failed to load {path}: {message}")
