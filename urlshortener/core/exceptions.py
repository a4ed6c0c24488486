"""Exceptions raised by the association service and stores.

Classes:
    ShortenerError:
        Base class for all service errors.

    InvalidURLError:
        Raised when a target URL is malformed or not absolute.

    InvalidRequestBodyError:
        Raised when a request body is not the expected JSON document.

    AssociationNotFoundError:
        Raised when no association exists for a short id.

    StoreUnavailableError:
        Raised when the association store cannot be reached or a call to it fails.
"""


class ShortenerError(Exception):
    """Base class for URL shortener errors."""

    default_message = "URL shortener error"

    def __init__(self, message: str = None):
        super().__init__(message or self.default_message)


class InvalidURLError(ShortenerError):
    """Exception raised when a target URL fails validation."""

    default_message = "Invalid url format"


class InvalidRequestBodyError(ShortenerError):
    """Exception raised when a request body cannot be parsed."""

    default_message = "Unable to parse json"


class AssociationNotFoundError(ShortenerError):
    """Exception raised when a short id has no association."""

    default_message = "URL not found"


class StoreUnavailableError(ShortenerError):
    """Exception raised when the store fails.

    e.g. connection refused, timeouts, authentication failures.
    """

    default_message = "URL store unavailable"
