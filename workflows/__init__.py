"""
Acceptance workflows for the Story Spoiler API.

Structure:
- base.py: Step, scenario, context and result types
- validators.py: Reusable response assertions
- runner.py: WorkflowRunner class that executes scenarios
- scenarios/: Scenario definitions (data-driven)
"""

from .base import (
    CONTEXT_STORY_ID,
    StepOutcome,
    StepResult,
    StepType,
    SuiteContext,
    WorkflowReport,
    WorkflowScenario,
    WorkflowStep,
    step,
)
from .runner import WorkflowRunner
from .scenarios import STORY_CRUD_SCENARIO

__all__ = [
    "CONTEXT_STORY_ID",
    "STORY_CRUD_SCENARIO",
    "StepOutcome",
    "StepResult",
    "StepType",
    "SuiteContext",
    "WorkflowReport",
    "WorkflowRunner",
    "WorkflowScenario",
    "WorkflowStep",
    "step",
]
