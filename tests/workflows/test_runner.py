"""
Tests for the WorkflowRunner.

These cover the runner's contract independently of the canonical
scenario: ordered execution, the created-id context, the precondition
guard, continuing past failures, and transport errors.
"""

import httpx
import pytest

from story_client import (
    ApiResponse,
    AuthenticationError,
    ConnectionError,
    Credentials,
    StoryDTO,
    StorySpoilerClient,
)
from tests.fixtures.story_api import TEST_BASE_URL, FakeStoryApi
from workflows import (
    CONTEXT_STORY_ID,
    StepOutcome,
    StepType,
    SuiteContext,
    WorkflowRunner,
    WorkflowScenario,
    step,
)
from workflows.runner import MISSING_STORY_MESSAGE
from workflows.validators import ListValidator, ResponseValidator


STORY = StoryDTO(title="Runner Story", description="Runner description.")


def create_step(**overrides):
    params = dict(
        story=STORY,
        expect_status=201,
        assertions=[ResponseValidator.story_id_present()],
        store_as=CONTEXT_STORY_ID,
    )
    params.update(overrides)
    return step(StepType.CREATE_STORY, "create", "Create a story", **params)


def delete_step(**overrides):
    params = dict(use_context_id=True)
    params.update(overrides)
    return step(StepType.DELETE_STORY, "delete", "Delete the story", **params)


@pytest.fixture
def runner(logged_in_client: StorySpoilerClient) -> WorkflowRunner:
    return WorkflowRunner(logged_in_client, verbose=False)


class TestStepFactory:
    """Tests for the step() factory's validation."""

    def test_edit_needs_target(self):
        with pytest.raises(ValueError, match="story_id or use_context_id"):
            step(StepType.EDIT_STORY, "edit", "Edit", story=STORY)

    def test_delete_needs_target(self):
        with pytest.raises(ValueError):
            step(StepType.DELETE_STORY, "delete", "Delete")

    def test_create_needs_payload(self):
        with pytest.raises(ValueError, match="needs a story payload"):
            step(StepType.CREATE_STORY, "create", "Create")

    def test_defaults(self):
        built = step(StepType.LIST_STORIES, "list", "List")
        assert built.expect_status == 200
        assert built.assertions == []
        assert built.store_as is None


class TestContextThreading:
    """The created id flows from create to later steps via the context."""

    def test_create_stores_id_on_context(self, runner, story_api: FakeStoryApi):
        scenario = WorkflowScenario(name="create", description="", steps=[create_step()])

        report = runner.run(scenario)

        assert report.ok
        assert report.context.created_story_id in story_api.stories
        stored = report.context.stored[CONTEXT_STORY_ID]
        assert isinstance(stored, ApiResponse)
        assert stored.story_id == report.context.created_story_id

    def test_delete_uses_context_id(self, runner, story_api: FakeStoryApi):
        scenario = WorkflowScenario(
            name="create-delete", description="", steps=[create_step(), delete_step()]
        )

        report = runner.run(scenario)

        assert report.ok
        assert story_api.stories == {}
        created_id = report.context.created_story_id
        assert story_api.requests[-1].url.path == f"/api/Story/Delete/{created_id}"

    def test_caller_supplied_context(self, runner, story_api: FakeStoryApi):
        story_id = story_api.seed("Existing")
        context = SuiteContext(created_story_id=story_id)
        scenario = WorkflowScenario(name="delete", description="", steps=[delete_step()])

        report = runner.run(scenario, context=context)

        assert report.ok
        assert report.context is context
        assert story_id not in story_api.stories

    def test_context_is_not_reset_by_later_steps(self, runner):
        scenario = WorkflowScenario(
            name="create-list",
            description="",
            steps=[create_step(), step(StepType.LIST_STORIES, "list", "List")],
        )

        report = runner.run(scenario)

        assert report.context.created_story_id is not None


class TestPreconditionGuard:
    """Steps that need a created id fail clearly when there is none."""

    def test_guard_fails_without_request(self, runner, story_api: FakeStoryApi):
        requests_before = len(story_api.requests)
        scenario = WorkflowScenario(name="orphan", description="", steps=[delete_step()])

        report = runner.run(scenario)

        result = report.result_for("delete")
        assert result.outcome is StepOutcome.FAILED
        assert result.message == MISSING_STORY_MESSAGE
        assert result.status_code is None
        assert len(story_api.requests) == requests_before

    def test_failed_create_trips_guard(self, runner):
        scenario = WorkflowScenario(
            name="bad-create",
            description="",
            steps=[
                create_step(story=StoryDTO(title="", description="")),
                step(StepType.EDIT_STORY, "edit", "Edit", story=STORY, use_context_id=True),
                delete_step(),
            ],
        )

        report = runner.run(scenario)

        assert [r.outcome for r in report.results] == [StepOutcome.FAILED] * 3
        assert report.result_for("create").status_code == 400
        assert report.result_for("edit").message == MISSING_STORY_MESSAGE
        assert report.result_for("delete").message == MISSING_STORY_MESSAGE


class TestFailureSemantics:
    """A failing step is reported and the run continues."""

    def test_status_mismatch(self, runner):
        scenario = WorkflowScenario(
            name="mismatch",
            description="",
            steps=[step(StepType.DELETE_STORY, "delete", "Delete", story_id="missing")],
        )

        result = runner.run(scenario).result_for("delete")

        assert result.outcome is StepOutcome.FAILED
        assert result.status_code == 400
        assert result.message.startswith("Expected status 200, got 400")

    def test_assertion_failure_keeps_body(self, runner, story_api: FakeStoryApi):
        story_id = story_api.seed("Existing")
        scenario = WorkflowScenario(
            name="wrong-msg",
            description="",
            steps=[
                step(
                    StepType.DELETE_STORY,
                    "delete",
                    "Delete",
                    story_id=story_id,
                    assertions=[ResponseValidator.message_contains("Gone forever")],
                )
            ],
        )

        result = runner.run(scenario).result_for("delete")

        assert result.outcome is StepOutcome.FAILED
        assert result.body.msg == "Deleted successfully!"
        assert "Gone forever" in result.message

    def test_failed_assertion_does_not_store(self, runner):
        scenario = WorkflowScenario(
            name="no-store",
            description="",
            steps=[create_step(assertions=[ResponseValidator.message_contains("nope")])],
        )

        report = runner.run(scenario)

        assert report.context.created_story_id is None
        assert CONTEXT_STORY_ID not in report.context.stored

    def test_run_continues_after_failure(self, runner, story_api: FakeStoryApi):
        story_api.seed("Existing")
        scenario = WorkflowScenario(
            name="continue",
            description="",
            steps=[
                step(StepType.DELETE_STORY, "bad", "Delete missing", story_id="missing"),
                step(StepType.LIST_STORIES, "list", "List", assertions=[ListValidator.not_empty()]),
            ],
        )

        report = runner.run(scenario)

        assert not report.ok
        assert [r.outcome for r in report.results] == [StepOutcome.FAILED, StepOutcome.PASSED]
        assert report.failures == [report.results[0]]

    def test_unparseable_body_fails_step(self, credentials: Credentials):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/api/User/Authentication":
                return httpx.Response(200, json={"accessToken": "t"})
            return httpx.Response(200, text="<html>maintenance</html>")

        with StorySpoilerClient(TEST_BASE_URL, transport=httpx.MockTransport(handler)) as client:
            runner = WorkflowRunner(client, verbose=False)
            scenario = WorkflowScenario(
                name="html",
                description="",
                steps=[step(StepType.LIST_STORIES, "list", "List", assertions=[ListValidator.not_empty()])],
            )
            result = runner.run(scenario, credentials=credentials).result_for("list")

        assert result.outcome is StepOutcome.FAILED
        assert "not valid JSON" in result.message

    def test_status_only_step_skips_parsing(self, runner):
        scenario = WorkflowScenario(
            name="invalid",
            description="",
            steps=[create_step(story=StoryDTO(title="", description=""), expect_status=400,
                               assertions=[], store_as=None)],
        )

        result = runner.run(scenario).result_for("create")

        assert result.passed
        assert result.body is None


class TestTransportErrors:
    def test_connection_error_recorded_and_run_continues(self, credentials: Credentials):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url.path)
            if request.url.path == "/api/User/Authentication":
                return httpx.Response(200, json={"accessToken": "t"})
            if request.url.path == "/api/Story/All":
                raise httpx.ConnectError("reset", request=request)
            return httpx.Response(400, json={"msg": "Unable to delete this story spoiler!"})

        with StorySpoilerClient(TEST_BASE_URL, transport=httpx.MockTransport(handler)) as client:
            scenario = WorkflowScenario(
                name="flaky",
                description="",
                steps=[
                    step(StepType.LIST_STORIES, "list", "List"),
                    step(StepType.DELETE_STORY, "delete", "Delete", story_id="x", expect_status=400),
                ],
            )
            report = WorkflowRunner(client, verbose=False).run(scenario, credentials=credentials)

        listed = report.result_for("list")
        assert listed.outcome is StepOutcome.ERROR
        assert isinstance(listed.error, ConnectionError)
        assert report.result_for("delete").passed
        # No retry of the failed call
        assert calls.count("/api/Story/All") == 1

        with pytest.raises(ConnectionError):
            report.raise_for_failures()


class TestAuthentication:
    def test_login_before_first_step(self, story_client, story_api: FakeStoryApi, credentials):
        runner = WorkflowRunner(story_client, verbose=False)
        scenario = WorkflowScenario(name="list", description="", steps=[step(StepType.LIST_STORIES, "list", "List")])

        report = runner.run(scenario, credentials=credentials)

        assert report.ok
        assert story_api.requests[0].url.path == "/api/User/Authentication"

    def test_failed_login_stops_before_steps(self, story_client, story_api: FakeStoryApi):
        runner = WorkflowRunner(story_client, verbose=False)
        scenario = WorkflowScenario(name="list", description="", steps=[step(StepType.LIST_STORIES, "list", "List")])

        with pytest.raises(AuthenticationError):
            runner.run(scenario, credentials=Credentials(username="nobody", password="x"))

        assert [r.url.path for r in story_api.requests] == ["/api/User/Authentication"]

    def test_unauthenticated_steps_fail_on_status(self, story_client):
        runner = WorkflowRunner(story_client, verbose=False)
        scenario = WorkflowScenario(name="list", description="", steps=[step(StepType.LIST_STORIES, "list", "List")])

        result = runner.run(scenario).result_for("list")

        assert result.outcome is StepOutcome.FAILED
        assert result.status_code == 401


class TestReport:
    def test_raise_for_failures_summarizes(self, runner):
        scenario = WorkflowScenario(
            name="two-bad",
            description="",
            steps=[
                delete_step(),
                step(StepType.DELETE_STORY, "missing", "Delete missing", story_id="nope"),
            ],
        )
        report = runner.run(scenario)

        with pytest.raises(AssertionError) as exc_info:
            report.raise_for_failures()

        text = str(exc_info.value)
        assert "2 of 2 steps did not pass" in text
        assert "[failed] delete" in text
        assert "[failed] missing" in text

    def test_raise_for_failures_passes_when_ok(self, runner):
        report = runner.run(WorkflowScenario(name="empty", description=""))
        assert report.ok
        report.raise_for_failures()

    def test_result_for_unknown_name(self, runner):
        report = runner.run(WorkflowScenario(name="empty", description=""))
        with pytest.raises(KeyError):
            report.result_for("nope")

    def test_verbose_logs_progress(self, logged_in_client, caplog):
        caplog.set_level("INFO", logger="workflows.runner")
        scenario = WorkflowScenario(name="Logged", description="", steps=[create_step()])

        WorkflowRunner(logged_in_client, verbose=True).run(scenario)

        assert "Running: Logged" in caplog.text
        assert "Created story id:" in caplog.text
