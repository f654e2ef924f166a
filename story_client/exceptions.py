"""Exception hierarchy for the Story Spoiler API client.

This module defines all exceptions that can be raised by the story client.
The hierarchy is designed to allow catching specific error types or broader
categories as needed.

Exception Hierarchy:
    StoryClientError (base)
    ├── ConnectionError - Network/connection failures
    ├── TimeoutError - Request timeout
    ├── ResponseFormatError - Body is empty, not JSON, or the wrong shape
    └── AuthenticationError - Login failed or returned no token

HTTP error statuses are not exceptions here. ``StoryClient`` hands back the
raw response so callers can assert on a 400 or 404 they expect.
"""


class StoryClientError(Exception):
    """Base exception for all story client errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class ConnectionError(StoryClientError):
    """Failed to connect to the Story Spoiler server.

    Attributes:
        message: Human-readable error description.
        url: The URL that failed to connect.
        cause: The underlying exception that caused the connection failure.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.url = url
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.url:
            return f"{self.message} (url: {self.url})"
        return self.message


class TimeoutError(StoryClientError):
    """Request timed out.

    Attributes:
        message: Human-readable error description.
        timeout: The timeout value in seconds.
        url: The URL that timed out.
    """

    def __init__(
        self,
        message: str,
        timeout: float | None = None,
        url: str | None = None,
    ) -> None:
        self.timeout = timeout
        self.url = url
        super().__init__(message)

    def __str__(self) -> str:
        parts = []
        if self.timeout is not None:
            parts.append(f"timeout: {self.timeout}s")
        if self.url:
            parts.append(f"url: {self.url}")
        if not parts:
            return self.message
        return f"{self.message} ({', '.join(parts)})"


class ResponseFormatError(StoryClientError):
    """Response body could not be interpreted.

    Raised when a body is empty, is not valid JSON, or does not have the
    shape an endpoint promises (e.g. the story list is not an array).

    Attributes:
        status_code: HTTP status of the offending response.
        body: Raw response text for debugging.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class AuthenticationError(StoryClientError):
    """Login did not produce a usable access token.

    This is a setup failure: nothing that needs a bearer token can run
    after it.

    Attributes:
        username: The username the login was attempted for.
        status_code: HTTP status of the login response, if one arrived.
    """

    def __init__(
        self,
        message: str,
        username: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self.username = username
        self.status_code = status_code
        super().__init__(message)
