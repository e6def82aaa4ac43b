"""Runner configuration."""

from collections.abc import Sequence

from pydantic import Field

from fixtest.models.base import Model

DEFAULT_TIMEOUT_MS = 500


class RunnerSettings(Model):
    """Settings shared by the loader, runner and CLI."""

    patterns: Sequence[str] = Field(
        default_factory=list, description="Glob patterns of test files"
    )
    timeout_ms: int = Field(
        default=DEFAULT_TIMEOUT_MS,
        gt=0,
        description="Timeout for asynchronous cases without their own timeout",
    )
