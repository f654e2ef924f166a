"""
Response validation helpers for workflow scenarios.

These validators provide reusable assertion functions that can be
attached to workflow steps to verify the parsed response body.

Example:
    step(
        StepType.CREATE_STORY,
        "create",
        "Create a story",
        story=StoryDTO(title="Twist", description="It was a dream."),
        expect_status=201,
        assertions=[
            ResponseValidator.story_id_present(),
            ResponseValidator.message_contains("Successfully created!"),
        ],
    )
"""

from typing import Any

from story_client.models import ApiResponse

from .base import AssertionFunc


class ResponseValidator:
    """Helpers for validating ApiResponse envelopes."""

    @staticmethod
    def story_id_present() -> AssertionFunc:
        """Check the response carries a non-empty storyId."""
        def check(response: ApiResponse) -> None:
            if not response.story_id:
                raise AssertionError("StoryId should be returned.")
        return check

    @staticmethod
    def message_contains(text: str) -> AssertionFunc:
        """Check the response msg contains a substring."""
        def check(response: ApiResponse) -> None:
            if response.msg is None:
                raise AssertionError(f"Expected msg containing {text!r}, got no msg")
            if text not in response.msg:
                raise AssertionError(
                    f"Expected msg containing {text!r}, got {response.msg!r}"
                )
        return check


class ListValidator:
    """Helpers for validating the story list."""

    @staticmethod
    def not_empty() -> AssertionFunc:
        """Check at least one story is listed."""
        def check(stories: list[dict[str, Any]]) -> None:
            if not stories:
                raise AssertionError("Expected non-empty stories array.")
        return check
