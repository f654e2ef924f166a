"""Runtime configuration for the Story Spoiler client.

Settings come from environment variables. Call ``load_dotenv()`` before
``Settings.from_env()`` to pick them up from a ``.env`` file; the test
suite does this in ``tests/conftest.py``.

Variables:
    STORY_API_BASE_URL: API root (default: the public exam deployment).
    STORY_API_USERNAME: Login user name.
    STORY_API_PASSWORD: Login password.
    STORY_API_TIMEOUT: Per-request timeout in seconds (default: 30).
"""

import os
from collections.abc import Mapping

from pydantic import BaseModel, Field

from story_client.models import Credentials

DEFAULT_BASE_URL = "https://d3s5nxhwblsjbi.cloudfront.net"
DEFAULT_TIMEOUT = 30.0


class Settings(BaseModel):
    """Connection settings for one suite run."""

    base_url: str = DEFAULT_BASE_URL
    username: str | None = None
    password: str | None = Field(None, repr=False)
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``.
        """
        env = os.environ if environ is None else environ
        return cls(
            base_url=env.get("STORY_API_BASE_URL") or DEFAULT_BASE_URL,
            username=env.get("STORY_API_USERNAME") or None,
            password=env.get("STORY_API_PASSWORD") or None,
            timeout=env.get("STORY_API_TIMEOUT") or DEFAULT_TIMEOUT,
        )

    @property
    def credentials(self) -> Credentials | None:
        """Login credentials, or None unless both parts are configured."""
        if not self.username or not self.password:
            return None
        return Credentials(username=self.username, password=self.password)
