"""Request and response models for the Story Spoiler API.

The server speaks camelCase JSON but is not consistent about key casing
(``storyId`` in one deployment, ``storyid`` in another), so response models
match field names case-insensitively.
"""

from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from story_client.exceptions import ResponseFormatError

__all__ = [
    "ApiResponse",
    "Credentials",
    "LoginResponse",
    "StoryDTO",
    "parse_api_response",
    "parse_story_list",
]


def _lowercase_keys(data: Any) -> Any:
    if isinstance(data, dict):
        return {str(key).lower(): value for key, value in data.items()}
    return data


class Credentials(BaseModel):
    """Login credentials for the authentication endpoint.

    Attributes:
        username: Account user name.
        password: Account password.
    """

    username: str
    password: str = Field(..., repr=False)


class LoginResponse(BaseModel):
    """Response model for the authentication endpoint.

    Attributes:
        access_token: The JWT to present as a bearer credential.
    """

    model_config = ConfigDict(extra="ignore")

    access_token: str | None = Field(None, alias="accesstoken")

    @model_validator(mode="before")
    @classmethod
    def _normalize_keys(cls, data: Any) -> Any:
        return _lowercase_keys(data)


class StoryDTO(BaseModel):
    """A story spoiler as sent to the create and edit endpoints.

    No client-side validation is applied: empty titles must reach the
    server so that its rejection can be observed.

    Attributes:
        title: Story title.
        description: Spoiler text.
        url: Optional image URL.
    """

    title: str
    description: str
    url: str | None = None

    def to_payload(self) -> dict[str, Any]:
        """Serialize for the wire, omitting null fields."""
        return self.model_dump(exclude_none=True)


class ApiResponse(BaseModel):
    """Standard response envelope of the Story endpoints.

    Attributes:
        msg: Human-readable outcome message.
        story_id: Id of the created story; only present after a create.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    msg: str | None = None
    story_id: str | None = Field(None, alias="storyid")

    @model_validator(mode="before")
    @classmethod
    def _normalize_keys(cls, data: Any) -> Any:
        data = _lowercase_keys(data)
        if isinstance(data, dict) and "story_id" in data:
            data.setdefault("storyid", data.pop("story_id"))
        return data


def _decode_json(response: httpx.Response) -> Any:
    if not response.content:
        raise ResponseFormatError(
            f"Empty response body (HTTP {response.status_code})",
            status_code=response.status_code,
            body="",
        )
    try:
        return response.json()
    except ValueError as e:
        raise ResponseFormatError(
            f"Response body is not valid JSON (HTTP {response.status_code})",
            status_code=response.status_code,
            body=response.text,
        ) from e


def parse_api_response(response: httpx.Response) -> ApiResponse:
    """Parse a Story endpoint response into the standard envelope.

    Args:
        response: The raw HTTP response.

    Returns:
        The parsed envelope.

    Raises:
        ResponseFormatError: If the body is empty, not JSON, or not an object.
    """
    data = _decode_json(response)
    if not isinstance(data, dict):
        raise ResponseFormatError(
            f"Expected a JSON object, got {type(data).__name__}",
            status_code=response.status_code,
            body=response.text,
        )
    try:
        return ApiResponse.model_validate(data)
    except ValidationError as e:
        raise ResponseFormatError(
            f"Unexpected response envelope: {e}",
            status_code=response.status_code,
            body=response.text,
        ) from e


def parse_story_list(response: httpx.Response) -> list[dict[str, Any]]:
    """Parse the list endpoint response into a list of story objects.

    Args:
        response: The raw HTTP response.

    Returns:
        The stories, each as a plain dict.

    Raises:
        ResponseFormatError: If the body is not a JSON array of objects.
    """
    data = _decode_json(response)
    if not isinstance(data, list):
        raise ResponseFormatError(
            f"Expected a JSON array, got {type(data).__name__}",
            status_code=response.status_code,
            body=response.text,
        )
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise ResponseFormatError(
                f"Item {index} is {type(item).__name__}, expected an object",
                status_code=response.status_code,
                body=response.text,
            )
    return data
