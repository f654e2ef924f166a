"""
Story CRUD acceptance scenario.

Creates a story, edits it, lists stories, and deletes it, then checks how
the API rejects bad input and unknown ids.

Steps 1-4 depend on each other through the context's created story id and
must run in this order. Steps 5-7 are independent.
"""

from story_client.models import StoryDTO

from ..base import CONTEXT_STORY_ID, StepType, WorkflowScenario, step
from ..validators import ListValidator, ResponseValidator


# =============================================================================
# Payloads
# =============================================================================

NEW_STORY = StoryDTO(
    title="New Spoiler Title",
    description="A short spoiler description.",
    url=None,
)

UPDATED_STORY = StoryDTO(
    title="Updated Spoiler Title",
    description="Updated spoiler description.",
    url="",
)

INVALID_STORY = StoryDTO(title="", description="", url=None)

PLACEHOLDER_STORY = StoryDTO(
    title="Does not matter",
    description="Does not matter",
    url=None,
)

MISSING_EDIT_ID = "non-existing-id-123"
MISSING_DELETE_ID = "non-existing-id-456"

# Confirmation messages the service sends back
CREATED_MESSAGE = "Successfully created!"
EDITED_MESSAGE = "Successfully edited"
DELETED_MESSAGE = "Deleted successfully!"
NOT_FOUND_MESSAGE = "No spoilers"
UNABLE_TO_DELETE_MESSAGE = "Unable to delete this story spoiler!"


# =============================================================================
# Scenario Definition
# =============================================================================

STORY_CRUD_SCENARIO = WorkflowScenario(
    name="Story CRUD",
    description=(
        "Create, edit, list and delete a story spoiler, then verify the "
        "responses for an invalid payload and for unknown story ids."
    ),
    steps=[
        step(
            StepType.CREATE_STORY,
            "create_story",
            "Create a story; expect 201 and a storyId",
            story=NEW_STORY,
            expect_status=201,
            assertions=[
                ResponseValidator.story_id_present(),
                ResponseValidator.message_contains(CREATED_MESSAGE),
            ],
            store_as=CONTEXT_STORY_ID,
        ),
        step(
            StepType.EDIT_STORY,
            "edit_story",
            "Edit the created story; expect 200",
            story=UPDATED_STORY,
            use_context_id=True,
            assertions=[ResponseValidator.message_contains(EDITED_MESSAGE)],
        ),
        step(
            StepType.LIST_STORIES,
            "list_stories",
            "List all stories; expect a non-empty array",
            assertions=[ListValidator.not_empty()],
        ),
        step(
            StepType.DELETE_STORY,
            "delete_story",
            "Delete the created story; expect 200",
            use_context_id=True,
            assertions=[ResponseValidator.message_contains(DELETED_MESSAGE)],
        ),
        step(
            StepType.CREATE_STORY,
            "create_invalid_story",
            "Create a story without title and description; expect 400",
            story=INVALID_STORY,
            expect_status=400,
        ),
        step(
            StepType.EDIT_STORY,
            "edit_missing_story",
            "Edit an unknown story id; expect 404",
            story=PLACEHOLDER_STORY,
            story_id=MISSING_EDIT_ID,
            expect_status=404,
            assertions=[ResponseValidator.message_contains(NOT_FOUND_MESSAGE)],
        ),
        step(
            StepType.DELETE_STORY,
            "delete_missing_story",
            "Delete an unknown story id; expect 400",
            story_id=MISSING_DELETE_ID,
            expect_status=400,
            assertions=[ResponseValidator.message_contains(UNABLE_TO_DELETE_MESSAGE)],
        ),
    ],
)
