"""Exceptions raised by the API clients."""

UNKNOWN_ERROR = "unknown error"
REQUEST_FAILED = "API request failed"


class CotGameError(Exception):
    """Base class for client errors."""


class RequestFailed(CotGameError):
    """A request did not produce a usable response.

    ``message`` is what the server put in the error body when it sent one,
    otherwise a generic fallback. It is meant to be shown to the user as is.
    """

    def __init__(self, message: str = UNKNOWN_ERROR, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class InvalidPrompt(CotGameError):
    """A prompt that fails validation was about to be sent."""

    def __init__(self, reason: str):
        super().__init__(f"Refusing to submit invalid prompt: {reason}")
        self.reason = reason
