"""Story sub-client for the Story Spoiler API.

This module provides StoryClient for the story endpoints (/api/Story/*).

Every method returns the raw ``httpx.Response``: the acceptance suite
asserts on error statuses as often as on success, so nothing here raises
for a 4xx. Use ``parse_api_response`` or ``parse_story_list`` from
``story_client.models`` to read the body.

This is an internal module. Import from `story_client` instead.
"""

from urllib.parse import quote

import httpx

from story_client._base import BaseClient
from story_client.models import StoryDTO


class StoryClient(BaseClient):
    """Synchronous client for story endpoints (/api/Story/*).

    Example:
        with StorySpoilerClient() as client:
            client.login(Credentials(username="user", password="secret"))

            response = client.stories.create(
                StoryDTO(title="Twist", description="It was a dream.")
            )
            story_id = parse_api_response(response).story_id

            client.stories.delete(story_id)
    """

    _BASE_PATH = "/api/Story"

    def create(self, story: StoryDTO) -> httpx.Response:
        """Create a story. The server answers 201 with its new ``storyId``."""
        return self._post(f"{self._BASE_PATH}/Create", json=story.to_payload())

    def edit(self, story_id: str, story: StoryDTO) -> httpx.Response:
        """Replace the title, description and url of an existing story.

        Args:
            story_id: Id returned by a previous create.
            story: The new contents.
        """
        return self._put(
            f"{self._BASE_PATH}/Edit/{quote(story_id, safe='')}",
            json=story.to_payload(),
        )

    def list_all(self) -> httpx.Response:
        """List every story visible to the authenticated user."""
        return self._get(f"{self._BASE_PATH}/All")

    def delete(self, story_id: str) -> httpx.Response:
        """Delete a story by id."""
        return self._delete(f"{self._BASE_PATH}/Delete/{quote(story_id, safe='')}")
