"""Models for test execution outcomes."""

from dataclasses import dataclass
from typing import Literal, TypeAlias

from fixtest.errors import MatchError

OutcomeState: TypeAlias = Literal["passed", "failed", "errored", "ignored"]


@dataclass(frozen=True, kw_only=True)
class TestOutcome:
    """Result of a single test case.

    ``match_error`` is set for failed cases, ``error`` for errored ones and
    ``reason`` (possibly None) for ignored ones.
    """

    __test__ = False

    label: str
    state: OutcomeState
    duration: float
    match_error: MatchError | None = None
    error: Exception | None = None
    reason: str | None = None
