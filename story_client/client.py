"""Main Story Spoiler client class.

This module provides the entry point for talking to the Story Spoiler API.
One ``StorySpoilerClient`` owns one HTTP connection pool for the whole run:
log in once, then use the ``stories`` sub-client.

Example:
    with StorySpoilerClient(base_url="https://stories.example.com") as client:
        client.login(Credentials(username="user", password="secret"))
        response = client.stories.list_all()
        stories = parse_story_list(response)
"""

from typing import Any

from story_client._http import HTTPClient
from story_client._stories import StoryClient
from story_client.auth import BearerAuth, authenticate
from story_client.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, Settings
from story_client.models import Credentials


class StorySpoilerClient:
    """Synchronous client for the Story Spoiler REST API.

    Supports the context manager protocol for automatic resource cleanup.

    Attributes:
        base_url: The base URL of the Story Spoiler server.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Any = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: The base URL of the Story Spoiler server.
            timeout: Request timeout in seconds (default: 30.0).
            transport: Custom HTTP transport (e.g., MockTransport for testing).
        """
        self.base_url = base_url
        self.timeout = timeout

        self._http = HTTPClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )
        self._token: str | None = None
        self._stories: StoryClient | None = None

    @classmethod
    def from_settings(cls, settings: Settings, transport: Any = None) -> "StorySpoilerClient":
        """Create a client from loaded settings."""
        return cls(
            base_url=settings.base_url,
            timeout=settings.timeout,
            transport=transport,
        )

    def __enter__(self) -> "StorySpoilerClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the client and release resources."""
        self._http.close()

    def login(self, credentials: Credentials) -> str:
        """Authenticate and attach the token to all later requests.

        Args:
            credentials: Username and password.

        Returns:
            The access token.

        Raises:
            AuthenticationError: If no token was issued.
        """
        token = authenticate(self._http, credentials)
        self._http.set_auth(BearerAuth(token))
        self._token = token
        return token

    @property
    def is_authenticated(self) -> bool:
        """Whether ``login`` has succeeded on this client."""
        return bool(self._token)

    @property
    def stories(self) -> StoryClient:
        """Access story endpoints (/api/Story/*).

        Returns:
            StoryClient instance for story operations.
        """
        if self._stories is None:
            self._stories = StoryClient(self._http)
        return self._stories
