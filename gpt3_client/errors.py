"""
Exception hierarchy for gpt3-client.

Every failure a call can produce derives from GPT3Error so callers can tell
local encoding problems, transport problems and upstream API problems apart.
"""


def describe(cause: object) -> str:
    """Short human-readable description of an underlying cause."""
    text = str(cause)
    if text:
        return text
    return type(cause).__name__


class GPT3Error(Exception):
    """Base exception for all gpt3-client errors."""
    pass


class ConfigurationError(GPT3Error):
    """Raised when client configuration is missing or invalid."""
    pass


class EncodingError(GPT3Error):
    """Raised when a request payload cannot be serialized to JSON."""
    pass


class TransportError(GPT3Error):
    """
    Network-level failure while sending a request.

    Rendered as ``<Method> "<url>": <cause>`` so the originating call is
    visible in logs.
    """

    def __init__(self, method: str, url: str, cause: BaseException):
        self.method = method.upper()
        self.url = url
        self.cause = cause
        super().__init__(f'{self.method.capitalize()} "{url}": {describe(cause)}')


class BodyReadError(GPT3Error):
    """Raised when a response body cannot be read."""

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"failed to read from body: {describe(cause)}")


class DecodeError(GPT3Error):
    """Raised when a body or stream line is not valid JSON for the expected shape."""
    pass


class StreamReadError(GPT3Error):
    """Raised when a completion stream fails or ends before the [DONE] sentinel."""

    def __init__(self, cause: object):
        self.cause = cause
        super().__init__(f"failed to read from stream: {describe(cause)}")


class APIError(GPT3Error):
    """
    Failure reported by the upstream API.

    status_code always comes from the HTTP status line, never from the body.
    """

    def __init__(self, status_code: int, type: str, message: str):
        self.status_code = status_code
        self.type = type
        self.message = message
        super().__init__(str(self))

    def __str__(self) -> str:
        return f"[{self.status_code}:{self.type}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"APIError(status_code={self.status_code!r}, "
            f"type={self.type!r}, message={self.message!r})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, APIError):
            return NotImplemented
        return (
            self.status_code == other.status_code
            and self.type == other.type
            and self.message == other.message
        )

    def __hash__(self) -> int:
        return hash((self.status_code, self.type, self.message))
