"""Base class for sub-clients.

This module provides the base class that resource sub-clients inherit from.
It gives access to the shared HTTP client and convenience methods for
making requests.

This is an internal module and should not be imported directly by users.
"""

from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from story_client._http import HTTPClient


class BaseClient:
    """Base class for synchronous sub-clients.

    Attributes:
        _http: The shared HTTP client for making requests.
    """

    def __init__(self, http_client: "HTTPClient") -> None:
        """Initialize the sub-client.

        Args:
            http_client: The shared HTTP client instance.
        """
        self._http = http_client

    def _get(self, path: str) -> httpx.Response:
        return self._http.get(path)

    def _post(self, path: str, json: Any = None) -> httpx.Response:
        return self._http.post(path, json=json)

    def _put(self, path: str, json: Any = None) -> httpx.Response:
        return self._http.put(path, json=json)

    def _delete(self, path: str) -> httpx.Response:
        return self._http.delete(path)
