"""Tests for TestCase and TestSet run set selection."""

from dataclasses import FrozenInstanceError

import pytest

from fixtest.models.case import TestCase, TestSet


class Sample:
    """Fixture class used by the cases below."""


def make_case(label: str, *, ignored: bool = False, focused: bool = False) -> TestCase:
    return TestCase(
        fixture=Sample,
        method_name="runs",
        label=label,
        ignored=ignored,
        focused=focused,
    )


def test_runs_everything_but_ignored_without_focus() -> None:
    """Without focus the run set excludes ignored cases."""
    test_set = TestSet(
        cases=(make_case("a"), make_case("b", ignored=True), make_case("c"))
    )

    assert test_set.has_focus is False
    assert [case.label for case in test_set.runnable_cases] == ["a", "c"]


def test_focus_selects_exactly_focused_cases() -> None:
    """Any focused case restricts the run set to focused cases."""
    test_set = TestSet(
        cases=(
            make_case("a"),
            make_case("b", focused=True),
            make_case("c", focused=True, ignored=True),
        )
    )

    assert test_set.has_focus is True
    assert [case.label for case in test_set.runnable_cases] == ["b", "c"]


def test_cases_are_immutable() -> None:
    """Test cases cannot be changed after creation."""
    case = make_case("a")

    with pytest.raises(FrozenInstanceError):
        case.label = "b"  # type: ignore[misc]


def test_create_fixture_returns_new_instances() -> None:
    """Each call creates a fresh fixture."""
    case = make_case("a")

    first = case.create_fixture()

    assert isinstance(first, Sample)
    assert case.create_fixture() is not first
