"""
Workflow execution engine.

The WorkflowRunner executes workflow scenarios step-by-step against the
Story Spoiler API, threading one SuiteContext through the steps and
recording a StepResult for each.

A step that fails does not stop the run: later steps still execute, and
each reports its own outcome. Nothing is retried.
"""

import logging
from typing import Callable

import httpx

from story_client import (
    ConnectionError,
    Credentials,
    ResponseFormatError,
    StorySpoilerClient,
    TimeoutError,
    parse_api_response,
    parse_story_list,
)

from .base import (
    CONTEXT_STORY_ID,
    StepOutcome,
    StepResult,
    StepType,
    SuiteContext,
    WorkflowReport,
    WorkflowScenario,
    WorkflowStep,
)

logger = logging.getLogger(__name__)

MISSING_STORY_MESSAGE = "Previous step must create a story."


class WorkflowRunner:
    """Executes workflow scenarios against the API.

    The runner handles:
    - Logging in once before the first step, when given credentials
    - Running each workflow step in order
    - Guarding steps that need a story id created earlier in the run
    - Storing parsed bodies on the context for later steps
    - Running assertions after each step

    Args:
        client: The API client; shared by every step of the run.
        verbose: Log progress at INFO rather than DEBUG.
    """

    def __init__(self, client: StorySpoilerClient, verbose: bool = True):
        self.client = client
        self.verbose = verbose

    def run(
        self,
        scenario: WorkflowScenario,
        context: SuiteContext | None = None,
        credentials: Credentials | None = None,
    ) -> WorkflowReport:
        """Execute a complete workflow scenario.

        Args:
            scenario: The scenario definition to execute.
            context: Context to continue from; a fresh one by default.
            credentials: Log in with these before the first step.

        Returns:
            A report with one result per step.

        Raises:
            AuthenticationError: If login yields no token. No step runs.
        """
        if context is None:
            context = SuiteContext()

        self._print_header(scenario)

        if credentials is not None:
            self.client.login(credentials)
            self._log("  ✓ Authenticated\n")

        report = WorkflowReport(scenario=scenario, context=context)
        for i, step in enumerate(scenario.steps, 1):
            self._print_step(i, step)
            result = self.execute_step(step, context)
            report.results.append(result)
            self._print_step_result(result)

        self._print_footer(report)
        return report

    def execute_step(self, step: WorkflowStep, context: SuiteContext) -> StepResult:
        """Execute a single workflow step.

        Args:
            step: The step to execute.
            context: Shared run state; updated when the step stores.

        Returns:
            The step's result.
        """
        story_id = step.story_id
        if step.use_context_id:
            if not context.created_story_id:
                return StepResult(
                    step=step,
                    outcome=StepOutcome.FAILED,
                    message=MISSING_STORY_MESSAGE,
                )
            story_id = context.created_story_id

        handler = self._get_handler(step.step_type)
        try:
            response = handler(step, story_id)
        except (ConnectionError, TimeoutError) as e:
            return StepResult(
                step=step,
                outcome=StepOutcome.ERROR,
                message=str(e),
                error=e,
            )

        if response.status_code != step.expect_status:
            return StepResult(
                step=step,
                outcome=StepOutcome.FAILED,
                status_code=response.status_code,
                message=(
                    f"Expected status {step.expect_status}, got "
                    f"{response.status_code}: {response.text[:200]}"
                ),
            )

        # Status-only steps don't need a parseable body
        if not step.assertions and step.store_as is None:
            return StepResult(
                step=step,
                outcome=StepOutcome.PASSED,
                status_code=response.status_code,
            )

        try:
            if step.step_type is StepType.LIST_STORIES:
                body = parse_story_list(response)
            else:
                body = parse_api_response(response)
        except ResponseFormatError as e:
            return StepResult(
                step=step,
                outcome=StepOutcome.FAILED,
                status_code=response.status_code,
                message=str(e),
            )

        try:
            for assertion in step.assertions:
                assertion(body)
        except AssertionError as e:
            return StepResult(
                step=step,
                outcome=StepOutcome.FAILED,
                status_code=response.status_code,
                body=body,
                message=str(e) or "Assertion failed",
            )

        if step.store_as:
            context.stored[step.store_as] = body
            if step.store_as == CONTEXT_STORY_ID:
                context.created_story_id = getattr(body, "story_id", None)
                logger.info("Created story id: %s", context.created_story_id)

        return StepResult(
            step=step,
            outcome=StepOutcome.PASSED,
            status_code=response.status_code,
            body=body,
        )

    def _get_handler(
        self, step_type: StepType
    ) -> Callable[[WorkflowStep, str | None], httpx.Response]:
        """Get the handler function for a step type."""
        handlers = {
            StepType.CREATE_STORY: self._handle_create,
            StepType.EDIT_STORY: self._handle_edit,
            StepType.LIST_STORIES: self._handle_list,
            StepType.DELETE_STORY: self._handle_delete,
        }
        return handlers[step_type]

    # -------------------------------------------------------------------------
    # Step Handlers
    # -------------------------------------------------------------------------

    def _handle_create(self, step: WorkflowStep, story_id: str | None) -> httpx.Response:
        return self.client.stories.create(step.story)

    def _handle_edit(self, step: WorkflowStep, story_id: str | None) -> httpx.Response:
        return self.client.stories.edit(story_id, step.story)

    def _handle_list(self, step: WorkflowStep, story_id: str | None) -> httpx.Response:
        return self.client.stories.list_all()

    def _handle_delete(self, step: WorkflowStep, story_id: str | None) -> httpx.Response:
        return self.client.stories.delete(story_id)

    # -------------------------------------------------------------------------
    # Logging Helpers
    # -------------------------------------------------------------------------

    def _log(self, message: str) -> None:
        logger.log(logging.INFO if self.verbose else logging.DEBUG, message)

    def _print_header(self, scenario: WorkflowScenario) -> None:
        self._log(f"\n{'='*60}")
        self._log(f"Running: {scenario.name}")
        self._log(f"Description: {scenario.description}")
        self._log(f"Steps: {len(scenario.steps)}")
        self._log(f"{'='*60}\n")

    def _print_step(self, index: int, step: WorkflowStep) -> None:
        self._log(f"Step {index}: {step.description}")

    def _print_step_result(self, result: StepResult) -> None:
        if result.passed:
            self._log("  ✓ Complete\n")
        else:
            logger.warning("  ✗ %s", result.describe())

    def _print_footer(self, report: WorkflowReport) -> None:
        self._log(f"\n{'='*60}")
        if report.ok:
            self._log(f"✅ Scenario '{report.scenario.name}' passed!")
        else:
            self._log(
                f"❌ Scenario '{report.scenario.name}': "
                f"{len(report.failures)} step(s) did not pass"
            )
        self._log(f"   {len(report.results)} steps executed")
        self._log(f"{'='*60}\n")
