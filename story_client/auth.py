"""Authentication for the Story Spoiler API.

Login is a plain JSON POST that returns a JWT; every other endpoint wants
that token as a bearer credential.
"""

import logging
from typing import Generator

import httpx
from pydantic import ValidationError

from story_client._http import HTTPClient, _parse_error_response
from story_client.exceptions import AuthenticationError
from story_client.models import Credentials, LoginResponse

logger = logging.getLogger(__name__)

LOGIN_PATH = "/api/User/Authentication"


class BearerAuth(httpx.Auth):
    """Attach ``Authorization: Bearer <token>`` to every request."""

    def __init__(self, token: str) -> None:
        self.token = token

    def auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = f"Bearer {self.token}"
        yield request


def authenticate(http: HTTPClient, credentials: Credentials) -> str:
    """Exchange credentials for an access token.

    Args:
        http: The HTTP client to log in through.
        credentials: Username and password.

    Returns:
        The access token.

    Raises:
        AuthenticationError: If the response carries no ``accessToken``.
        ConnectionError: If the server cannot be reached.
        TimeoutError: If the login request times out.
    """
    response = http.send(
        "POST",
        LOGIN_PATH,
        json=credentials.model_dump(),
    )

    try:
        body = response.json()
    except ValueError:
        body = None

    token = None
    if isinstance(body, dict):
        try:
            token = LoginResponse.model_validate(body).access_token
        except ValidationError:
            token = None

    if not token:
        message = (
            f"Login for {credentials.username!r} returned no accessToken "
            f"(HTTP {response.status_code})"
        )
        if not response.is_success:
            message = f"{message}: {_parse_error_response(response)}"
        raise AuthenticationError(
            message,
            username=credentials.username,
            status_code=response.status_code,
        )

    logger.info("Authenticated as %s", credentials.username)
    return token
