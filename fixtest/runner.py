"""Sequential execution of test sets."""

import asyncio
import inspect
import logging
import time
from collections import Counter
from collections.abc import AsyncIterator, Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from fixtest.errors import MatchError
from fixtest.models.case import TestCase, TestSet
from fixtest.models.result import OutcomeState, TestOutcome
from fixtest.models.settings import RunnerSettings

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class TestRunner:
    """Runs the cases of a test set one after another.

    Every case is fully awaited, hooks included, before the next one starts.
    A failing or erroring case never stops the run.
    """

    __test__ = False

    settings: RunnerSettings = field(default_factory=RunnerSettings)

    async def run(self, test_set: TestSet) -> Sequence[TestOutcome]:
        """Run all cases and return their outcomes in test set order."""
        return [outcome async for outcome in self.iter_outcomes(test_set)]

    async def iter_outcomes(self, test_set: TestSet) -> AsyncIterator[TestOutcome]:
        """Yield each case's outcome as soon as it is known."""
        if not len(test_set):
            log.info("No test cases to run")
            return

        if test_set.has_focus:
            log.info("Focused cases found, running only those")

        log.info("Running %d test case(s)...", len(test_set))
        for case in test_set:
            if test_set.should_run(case):
                outcome = await self.run_case(case)
            else:
                outcome = TestOutcome(
                    label=case.label,
                    state="ignored",
                    duration=0.0,
                    reason=case.ignore_reason,
                )
            log.info(
                "Test completed: case=%s state=%s duration=%.3fs",
                outcome.label,
                outcome.state,
                outcome.duration,
            )
            yield outcome

    async def run_case(self, case: TestCase) -> TestOutcome:
        """Run one case through setup, the test method and teardown.

        One deadline covers the whole case, hooks included. When several
        phases raise, the first error is reported and the others are logged.
        """
        timeout_ms = case.timeout_ms or self.settings.timeout_ms
        started = time.perf_counter()

        try:
            fixture = case.create_fixture()
        except Exception as e:
            log.error("Could not create fixture for %s: %s", case.label, e)
            return self._outcome(case, started, e)

        errors: list[Exception] = []
        deadline = asyncio.timeout(timeout_ms / 1000)
        try:
            async with deadline:
                await self._run_phases(case, fixture, errors)
        except TimeoutError:
            if not deadline.expired():
                raise
            errors.append(TimeoutError(f"Timed out after {timeout_ms}ms"))

        for error in errors[1:]:
            log.warning("%s also raised after its first error: %s", case.label, error)
        return self._outcome(case, started, errors[0] if errors else None)

    async def _run_phases(
        self, case: TestCase, fixture: Any, errors: list[Exception]
    ) -> None:
        try:
            for hook in case.setup_hooks:
                await self._invoke(getattr(fixture, hook))
            await self._invoke(getattr(fixture, case.method_name), case.arguments)
        except Exception as e:
            errors.append(e)
        finally:
            for hook in case.teardown_hooks:
                try:
                    await self._invoke(getattr(fixture, hook))
                except Exception as e:
                    errors.append(e)

    @staticmethod
    async def _invoke(
        function: Callable[..., Any], arguments: Sequence[Any] = ()
    ) -> None:
        result = function(*arguments)
        if inspect.isawaitable(result):
            await result

    @staticmethod
    def _outcome(
        case: TestCase, started: float, error: Exception | None
    ) -> TestOutcome:
        duration = time.perf_counter() - started
        if error is None:
            return TestOutcome(label=case.label, state="passed", duration=duration)
        if isinstance(error, MatchError):
            return TestOutcome(
                label=case.label,
                state="failed",
                duration=duration,
                match_error=error,
            )
        return TestOutcome(
            label=case.label, state="errored", duration=duration, error=error
        )


def summarize(outcomes: Sequence[TestOutcome]) -> Mapping[OutcomeState, int]:
    """Count outcomes per state."""
    counts = Counter(outcome.state for outcome in outcomes)
    return {
        "passed": counts["passed"],
        "failed": counts["failed"],
        "errored": counts["errored"],
        "ignored": counts["ignored"],
    }
