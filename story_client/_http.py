"""Internal HTTP handling utilities for the story client.

This module provides the low-level HTTP communication layer used by the
Story sub-client and the login call. It handles:
- Making HTTP requests over one shared ``httpx.Client``
- Mapping transport failures to client exceptions
- Extracting readable messages from error bodies

Requests are never retried. A failed call surfaces to the caller as-is.

This is an internal module and should not be imported directly by users.
"""

import logging
from typing import Any, Literal

import httpx

from story_client.exceptions import ConnectionError, TimeoutError

logger = logging.getLogger(__name__)


# HTTP methods used by the Story Spoiler API
HttpMethod = Literal["GET", "POST", "PUT", "DELETE"]


def _parse_error_response(response: httpx.Response) -> str:
    """Extract a human-readable message from an error response.

    Understands the Story API envelope (``{"msg": ...}``) and ASP.NET's
    validation problem details (``{"title": ..., "errors": {...}}``).
    Falls back to the raw response text if the body isn't JSON.

    Args:
        response: The HTTP response to parse.

    Returns:
        The error message.
    """
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        if text:
            return text
        return f"HTTP {response.status_code} error"

    if isinstance(body, dict):
        # Field names arrive in whatever case the server chose
        lowered = {str(k).lower(): v for k, v in body.items()}
        if lowered.get("msg"):
            return str(lowered["msg"])

        errors = lowered.get("errors")
        if isinstance(errors, dict) and errors:
            messages = [
                f"{field}: {'; '.join(map(str, problems)) if isinstance(problems, list) else problems}"
                for field, problems in errors.items()
            ]
            return "; ".join(messages)

        if lowered.get("title"):
            return str(lowered["title"])
        if lowered.get("message"):
            return str(lowered["message"])

    return str(body)


class HTTPClient:
    """Synchronous HTTP client for the Story Spoiler API.

    Wraps a single ``httpx.Client`` that is shared by every call of a run.
    The bearer authenticator is installed once, after login, through
    ``set_auth``.

    Attributes:
        base_url: The base URL for all API requests.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
        auth: httpx.Auth | None = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            base_url: The base URL for all API requests.
            timeout: Request timeout in seconds.
            transport: Custom transport (e.g., MockTransport for testing).
            auth: Authenticator applied to every request.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            auth=auth,
        )

    def set_auth(self, auth: httpx.Auth) -> None:
        """Install the authenticator used for all subsequent requests."""
        self._client.auth = auth

    def close(self) -> None:
        """Close the HTTP client and release resources."""
        self._client.close()

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def send(
        self,
        method: HttpMethod,
        path: str,
        json: Any = None,
        auth: httpx.Auth | None = None,
    ) -> httpx.Response:
        """Make an HTTP request and return the response whatever its status.

        Error statuses are data here, not failures: the caller decides
        whether a 400 or 404 is what it expected.

        Args:
            method: The HTTP method.
            path: The URL path (will be appended to base_url).
            json: JSON body to send with the request.
            auth: Per-request authenticator overriding the client's.

        Returns:
            The ``httpx.Response``.

        Raises:
            ConnectionError: If the connection fails or breaks mid-request.
            TimeoutError: If the request times out.
        """
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)

        kwargs: dict[str, Any] = {}
        if auth is not None:
            kwargs["auth"] = auth

        try:
            response = self._client.request(
                method=method,
                url=path,
                json=json,
                **kwargs,
            )
        except httpx.ConnectError as e:
            raise ConnectionError(
                message=f"Failed to connect to {url}",
                url=url,
                cause=e,
            ) from e
        except httpx.TimeoutException as e:
            raise TimeoutError(
                message=f"Request to {url} timed out",
                timeout=self.timeout,
                url=url,
            ) from e
        except httpx.TransportError as e:
            # Read/write failures, protocol errors and the like
            raise ConnectionError(
                message=f"Transport error talking to {url}: {e}",
                url=url,
                cause=e,
            ) from e

        logger.debug("%s %s -> %d", method, url, response.status_code)
        return response

    def get(self, path: str) -> httpx.Response:
        """Make a GET request."""
        return self.send("GET", path)

    def post(self, path: str, json: Any = None) -> httpx.Response:
        """Make a POST request."""
        return self.send("POST", path, json=json)

    def put(self, path: str, json: Any = None) -> httpx.Response:
        """Make a PUT request."""
        return self.send("PUT", path, json=json)

    def delete(self, path: str) -> httpx.Response:
        """Make a DELETE request."""
        return self.send("DELETE", path)
