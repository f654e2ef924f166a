"""Pytest configuration and shared fixtures."""

import pytest

# Load environment variables from .env file at test startup
# This makes the live API credentials available before fixtures are created
from dotenv import load_dotenv
load_dotenv()

pytest_plugins = [
    "tests.fixtures.story_api",
]


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "live: runs against the real Story Spoiler API (needs credentials)",
    )
