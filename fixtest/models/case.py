"""Runnable test cases and the ordered sets they belong to."""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, kw_only=True)
class TestCase:
    """One concrete invocation of a test method with an argument tuple."""

    __test__ = False

    fixture: type
    method_name: str
    arguments: tuple[Any, ...] = ()
    label: str
    ignored: bool = False
    ignore_reason: str | None = None
    focused: bool = False
    timeout_ms: int | None = None
    setup_hooks: Sequence[str] = ()
    teardown_hooks: Sequence[str] = ()

    def create_fixture(self) -> Any:
        """Instantiate a fresh fixture for this case."""
        return self.fixture()


@dataclass(frozen=True, kw_only=True)
class TestSet:
    """Test cases in discovery order.

    When any case is focused only focused cases run; otherwise every case
    except the ignored ones runs.
    """

    __test__ = False

    cases: tuple[TestCase, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[TestCase]:
        return iter(self.cases)

    def __len__(self) -> int:
        return len(self.cases)

    @property
    def has_focus(self) -> bool:
        return any(case.focused for case in self.cases)

    def should_run(self, case: TestCase) -> bool:
        """Whether ``case`` belongs to the effective run set."""
        if self.has_focus:
            return case.focused
        return not case.ignored

    @property
    def runnable_cases(self) -> Sequence[TestCase]:
        return [case for case in self.cases if self.should_run(case)]
