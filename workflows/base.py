"""
Base classes for workflow scenario definitions.

This module provides the small DSL used to describe an acceptance run as an
ordered list of steps, plus the context and result types the runner
threads through them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from story_client.models import StoryDTO


# Storing a step under this key also records its storyId on the context
CONTEXT_STORY_ID = "created_story_id"

# Assertions receive the parsed body: an ApiResponse, or a list of dicts
# for LIST_STORIES
AssertionFunc = Callable[[Any], None]


class StepType(Enum):
    """Types of workflow steps.

    Each step type maps to one Story API operation.
    """

    CREATE_STORY = "create_story"
    EDIT_STORY = "edit_story"
    LIST_STORIES = "list_stories"
    DELETE_STORY = "delete_story"


class StepOutcome(Enum):
    """How a step ended."""

    PASSED = "passed"
    # Status/body mismatch or an unmet precondition
    FAILED = "failed"
    # Transport fault; the request never produced a response
    ERROR = "error"


@dataclass
class SuiteContext:
    """State shared by the steps of one run.

    Args:
        created_story_id: Id of the last story created in this run.
        stored: Parsed bodies of steps that asked to be stored, by key.
    """

    created_story_id: str | None = None
    stored: dict[str, Any] = field(default_factory=dict)


@dataclass
class WorkflowStep:
    """A single step in a workflow scenario.

    Args:
        step_type: The operation to perform.
        name: Short identifier, used in reports and test ids.
        description: Human-readable description of the step.
        story: Payload for create and edit steps.
        story_id: Explicit target id for edit and delete steps.
        use_context_id: Target ``SuiteContext.created_story_id`` instead.
        expect_status: Expected HTTP status code (default 200).
        assertions: Assertion functions run on the parsed response body.
        store_as: Optional key to store the parsed body under.
    """

    step_type: StepType
    name: str
    description: str
    story: StoryDTO | None = None
    story_id: str | None = None
    use_context_id: bool = False

    expect_status: int = 200
    assertions: list[AssertionFunc] = field(default_factory=list)

    store_as: str | None = None


@dataclass
class WorkflowScenario:
    """Complete workflow scenario definition.

    Args:
        name: Short name for the scenario.
        description: What the scenario verifies.
        steps: Ordered list of workflow steps to execute.
    """

    name: str
    description: str
    steps: list[WorkflowStep] = field(default_factory=list)


@dataclass
class StepResult:
    """Outcome of one executed step.

    Args:
        step: The step that ran.
        outcome: Passed, failed or errored.
        status_code: HTTP status, or None if no response arrived.
        body: Parsed response body, when it was parsed.
        message: Why the step did not pass.
        error: The transport exception for errored steps.
    """

    step: WorkflowStep
    outcome: StepOutcome
    status_code: int | None = None
    body: Any = None
    message: str | None = None
    error: Exception | None = None

    @property
    def passed(self) -> bool:
        return self.outcome is StepOutcome.PASSED

    def describe(self) -> str:
        """One-line summary for reports."""
        line = f"[{self.outcome.value}] {self.step.name}: {self.step.description}"
        if self.message:
            line += f" - {self.message}"
        return line


@dataclass
class WorkflowReport:
    """Results of running a scenario.

    Args:
        scenario: The scenario that ran.
        context: The context after the last step.
        results: One result per step, in execution order.
    """

    scenario: WorkflowScenario
    context: SuiteContext
    results: list[StepResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(result.passed for result in self.results)

    @property
    def failures(self) -> list[StepResult]:
        return [result for result in self.results if not result.passed]

    def result_for(self, name: str) -> StepResult:
        """Look up the result of a step by name.

        Raises:
            KeyError: If no step with that name ran.
        """
        for result in self.results:
            if result.step.name == name:
                return result
        raise KeyError(name)

    def raise_for_failures(self) -> None:
        """Raise if any step did not pass.

        A single errored step is re-raised as its original exception.

        Raises:
            AssertionError: Summarizing every failed step.
        """
        failures = self.failures
        if not failures:
            return
        if len(failures) == 1 and failures[0].error is not None:
            raise failures[0].error
        summary = "\n".join(result.describe() for result in failures)
        raise AssertionError(
            f"Scenario '{self.scenario.name}': {len(failures)} of "
            f"{len(self.results)} steps did not pass\n{summary}"
        )


def step(
    step_type: StepType,
    name: str,
    description: str,
    *,
    story: StoryDTO | None = None,
    story_id: str | None = None,
    use_context_id: bool = False,
    expect_status: int = 200,
    assertions: list[AssertionFunc] | None = None,
    store_as: str | None = None,
) -> WorkflowStep:
    """Factory function for creating WorkflowStep instances.

    Provides a cleaner syntax for defining steps in scenarios.

    Returns:
        A configured WorkflowStep instance.

    Raises:
        ValueError: If an edit or delete step has no target.
    """
    if step_type in (StepType.EDIT_STORY, StepType.DELETE_STORY):
        if story_id is None and not use_context_id:
            raise ValueError(f"Step '{name}' needs story_id or use_context_id")
    if step_type in (StepType.CREATE_STORY, StepType.EDIT_STORY) and story is None:
        raise ValueError(f"Step '{name}' needs a story payload")

    return WorkflowStep(
        step_type=step_type,
        name=name,
        description=description,
        story=story,
        story_id=story_id,
        use_context_id=use_context_id,
        expect_status=expect_status,
        assertions=assertions or [],
        store_as=store_as,
    )
