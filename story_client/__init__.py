"""Story Spoiler API Client Library.

This package provides a typed Python client for the Story Spoiler REST API,
used by the acceptance workflows in ``workflows``.

Example:
    from story_client import Credentials, StoryDTO, StorySpoilerClient

    with StorySpoilerClient(base_url="https://stories.example.com") as client:
        client.login(Credentials(username="user", password="secret"))
        response = client.stories.create(
            StoryDTO(title="Twist", description="It was a dream.")
        )

Exports:
    StorySpoilerClient: Synchronous client for the Story Spoiler API.
    StoryClient: Sub-client for /api/Story/* endpoints.
    BearerAuth: httpx authenticator for the access token.
    Settings: Environment-driven configuration.

    Models:
        Credentials, StoryDTO, ApiResponse, LoginResponse,
        parse_api_response, parse_story_list

    Exceptions:
        StoryClientError: Base exception for all client errors.
        ConnectionError: Failed to connect to the server.
        TimeoutError: Request timed out.
        ResponseFormatError: Response body had the wrong shape.
        AuthenticationError: Login produced no token.
"""

from story_client._stories import StoryClient
from story_client.auth import BearerAuth, authenticate
from story_client.client import StorySpoilerClient
from story_client.config import Settings
from story_client.exceptions import (
    AuthenticationError,
    ConnectionError,
    ResponseFormatError,
    StoryClientError,
    TimeoutError,
)
from story_client.models import (
    ApiResponse,
    Credentials,
    LoginResponse,
    StoryDTO,
    parse_api_response,
    parse_story_list,
)

__all__ = [
    # Clients
    "StorySpoilerClient",
    "StoryClient",
    "BearerAuth",
    "authenticate",
    "Settings",
    # Models
    "ApiResponse",
    "Credentials",
    "LoginResponse",
    "StoryDTO",
    "parse_api_response",
    "parse_story_list",
    # Exceptions
    "StoryClientError",
    "ConnectionError",
    "TimeoutError",
    "ResponseFormatError",
    "AuthenticationError",
]
