"""CLI entry point for running fixtest test files."""

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from fixtest.loader import (
    GlobPathResolver,
    LoadError,
    PathResolutionError,
    TestLoader,
)
from fixtest.models.result import TestOutcome
from fixtest.models.settings import RunnerSettings
from fixtest.runner import TestRunner, summarize
from fixtest.settings_loader import load_settings

STATUS_SYMBOLS = {
    "passed": "✓",
    "failed": "✗",
    "errored": "!",
    "ignored": "-",
}


def log_results_summary(log: logging.Logger, outcomes: Sequence[TestOutcome]) -> None:
    """Log one line per outcome plus the failure or error message."""
    log.info("=" * 80)
    log.info("Test Results Summary:")
    log.info("=" * 80)

    for outcome in outcomes:
        symbol = STATUS_SYMBOLS.get(outcome.state, "?")
        log.info(
            "%s %s: %s (%.3fs)", symbol, outcome.label, outcome.state, outcome.duration
        )
        if outcome.match_error is not None:
            log.info("  Message: %s", outcome.match_error)
        if outcome.error is not None:
            log.info("  Error: %s: %s", type(outcome.error).__name__, outcome.error)
        if outcome.reason:
            log.info("  Reason: %s", outcome.reason)


def outcome_message(outcome: TestOutcome) -> str | None:
    """Return the failure message, error message or ignore reason of an outcome."""
    if outcome.match_error is not None:
        return str(outcome.match_error)
    if outcome.error is not None:
        return f"{type(outcome.error).__name__}: {outcome.error}"
    return outcome.reason


def format_output(
    outcomes: Sequence[TestOutcome], load_errors: Sequence[LoadError] = ()
) -> dict[str, Any]:
    """Format outcomes for JSON output."""
    results = [
        {
            "label": outcome.label,
            "state": outcome.state,
            "duration": outcome.duration,
            "message": outcome_message(outcome),
        }
        for outcome in outcomes
    ]
    return {
        "total": len(results),
        **summarize(outcomes),
        "load_errors": [
            {"path": str(error.path), "message": str(error)} for error in load_errors
        ],
        "results": results,
    }


async def run(settings: RunnerSettings, root: Path | None = None) -> int:
    """Load, run and report the configured test files; return the exit code."""
    log = logging.getLogger("fixtest")

    if not settings.patterns:
        log.error("No test file patterns given")
        return 2

    loader = TestLoader(path_resolver=GlobPathResolver(root))
    try:
        loaded = loader.load(settings.patterns)
    except PathResolutionError as e:
        log.error("Cannot resolve test files: %s", e)
        return 2

    outcomes = await TestRunner(settings=settings).run(loaded.test_set)

    log_results_summary(log, outcomes)
    print(json.dumps(format_output(outcomes, loaded.errors), indent=2))

    has_failures = bool(loaded.errors) or any(
        outcome.state in {"failed", "errored"} for outcome in outcomes
    )
    return 1 if has_failures else 0


def build_settings(args: argparse.Namespace) -> RunnerSettings:
    """Merge the optional settings file with command line overrides."""
    settings = load_settings(args.config) if args.config else RunnerSettings()
    overrides: dict[str, Any] = {}
    if args.patterns:
        overrides["patterns"] = args.patterns
    if args.timeout is not None:
        overrides["timeout_ms"] = args.timeout
    return RunnerSettings.model_validate(dict(settings) | overrides)


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Run fixtest test fixtures")
    parser.add_argument(
        "patterns",
        nargs="*",
        help="Glob patterns of test files (e.g. 'tests/**/*_spec.py')",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a YAML settings file",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        help="Default timeout in milliseconds for asynchronous cases",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        settings = build_settings(args)
    except (FileNotFoundError, ValueError) as e:
        logging.getLogger("fixtest").error("%s", e)
        sys.exit(2)

    sys.exit(asyncio.run(run(settings)))


if __name__ == "__main__":  # pragma: no cover
    main()
