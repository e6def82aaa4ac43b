"""Tests for fixture and method metadata models."""

import pytest
from pydantic import ValidationError

from fixtest.models.metadata import FixtureMetadata, TestMethodMetadata


class Widget:
    """Arbitrary object used as a test argument."""


def test_parameter_sets_hold_arbitrary_objects() -> None:
    """Argument tuples keep any object as is."""
    widget = Widget()

    metadata = TestMethodMetadata(parameter_sets=((widget, [1, 2]),))

    assert metadata.parameter_sets[0][0] is widget


def test_metadata_is_frozen() -> None:
    """Metadata cannot be changed after creation."""
    metadata = FixtureMetadata(description="Arithmetic")

    with pytest.raises(ValidationError):
        metadata.description = "Other"  # type: ignore[misc]


def test_timeout_must_be_positive() -> None:
    """A zero timeout is rejected."""
    with pytest.raises(ValidationError):
        TestMethodMetadata(timeout_ms=0)
