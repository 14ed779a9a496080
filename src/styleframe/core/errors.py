"""Error taxonomy for Styleframe.

Every failure a generation request can hit maps to one of these classes.
Each carries the HTTP status code the API reports for it and a message that
is safe to show to the user as-is.
"""


class StyleframeError(Exception):
    """Base class for errors surfaced to the user.

    Attributes:
        message: User-facing message.
        status_code: HTTP status code reported by the API.
    """

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ConfigurationError(StyleframeError):
    """The server is missing a required setting (e.g. the API credential)."""

    status_code = 500


class ValidationError(StyleframeError):
    """User input failed validation.

    The message is intended to be displayed directly to the user.
    """

    status_code = 400


class UpstreamError(StyleframeError):
    """The inference provider failed or could not be reached.

    ``status_code`` is the provider's own status when it answered, 504 on a
    timeout and 502 on any other transport failure.
    """

    status_code = 502


class UnexpectedError(StyleframeError):
    """Any other failure, reported with a generic message."""

    status_code = 500

    def __init__(self, message: str = "An unexpected error occurred"):
        super().__init__(message)
