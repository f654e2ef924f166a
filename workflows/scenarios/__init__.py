"""
Workflow scenario definitions.

Each scenario is a WorkflowScenario holding an ordered list of steps.
"""

from .story_crud import STORY_CRUD_SCENARIO

__all__ = [
    "STORY_CRUD_SCENARIO",
]
