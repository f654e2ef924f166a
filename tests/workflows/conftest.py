"""
Pytest fixtures for workflow tests.

Runners here drive the in-memory fake Story API; the client is
unauthenticated so each test decides whether the runner logs in.
"""

import pytest

from workflows import WorkflowRunner


@pytest.fixture
def workflow_runner(story_client):
    """Create a verbose WorkflowRunner for the test.

    Usage:
        def test_my_workflow(workflow_runner, credentials):
            report = workflow_runner.run(MY_SCENARIO, credentials=credentials)
    """
    return WorkflowRunner(story_client, verbose=True)


@pytest.fixture
def quiet_workflow_runner(story_client):
    """Create a quiet WorkflowRunner (progress logged at DEBUG)."""
    return WorkflowRunner(story_client, verbose=False)
