"""Metadata recorded against fixture classes and their methods."""

from typing import Any, Literal, TypeAlias

from pydantic import Field

from fixtest.models.base import Model

HookKind: TypeAlias = Literal["setup", "teardown"]


class FixtureMetadata(Model):
    """Metadata attached to a fixture class."""

    ignored: bool = Field(default=False, description="Skip every case")
    ignore_reason: str | None = Field(default=None, description="Why it is skipped")
    focused: bool = Field(default=False, description="Run only focused cases")
    description: str | None = Field(default=None, description="Display name")


class TestMethodMetadata(Model):
    """Metadata attached to a test method.

    An empty ``parameter_sets`` means the method runs once with no arguments.
    """

    __test__ = False

    description: str | None = Field(default=None, description="Display name")
    timeout_ms: int | None = Field(
        default=None, gt=0, description="Per-case timeout in milliseconds"
    )
    parameter_sets: tuple[tuple[Any, ...], ...] = Field(
        default=(), description="Argument tuples, one case each"
    )
    ignored: bool = Field(default=False, description="Skip this method")
    ignore_reason: str | None = Field(default=None, description="Why it is skipped")
    focused: bool = Field(default=False, description="Run only focused cases")
