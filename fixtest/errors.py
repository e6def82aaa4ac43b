"""Assertion failures raised by the matcher engine.

Every matcher operation raises one of these when its outcome contradicts the
matcher's polarity. They are the only errors the runner reports as failed
rather than errored.
"""

from collections.abc import Sequence
from typing import Any


def _polarity(should_match: bool) -> str:
    return "" if should_match else "not "


class MatchError(Exception):
    """Base class for a failed expectation.

    Attributes:
        kind: Name of the matcher operation that failed (e.g. "to_equal")
        actual: The value under test
        expected: The value, limit, pattern or content it was compared with
        should_match: Polarity of the matcher when it failed
        extra: Matcher specific payload (raised error, call arguments...)

    """

    def __init__(
        self,
        message: str,
        *,
        kind: str,
        actual: Any,
        expected: Any = None,
        should_match: bool = True,
        extra: Any = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.actual = actual
        self.expected = expected
        self.should_match = should_match
        self.extra = extra

    @property
    def message(self) -> str:
        return str(self)


class ExactMatchError(MatchError):
    """Raised when a value is not strictly the expected one."""

    def __init__(
        self, actual: Any, expected: Any, should_match: bool, *, kind: str = "to_be"
    ) -> None:
        super().__init__(
            f"Expected {actual!r} {_polarity(should_match)}to be {expected!r}.",
            kind=kind,
            actual=actual,
            expected=expected,
            should_match=should_match,
        )


class DefinedMatchError(MatchError):
    """Raised when a value is or is not ``UNDEFINED`` against expectation."""

    def __init__(self, actual: Any, should_match: bool) -> None:
        super().__init__(
            f"Expected {actual!r} {_polarity(should_match)}to be defined.",
            kind="to_be_defined",
            actual=actual,
            should_match=should_match,
        )


class EqualMatchError(MatchError):
    """Raised when a value is not equal to the expected one."""

    def __init__(self, actual: Any, expected: Any, should_match: bool) -> None:
        super().__init__(
            f"Expected {actual!r} {_polarity(should_match)}"
            f"to be equal to {expected!r}.",
            kind="to_equal",
            actual=actual,
            expected=expected,
            should_match=should_match,
        )


class RegexMatchError(MatchError):
    """Raised when a string does not conform to a regular expression."""

    def __init__(self, actual: str, regex: Any, should_match: bool) -> None:
        pattern = getattr(regex, "pattern", regex)
        super().__init__(
            f"Expected {actual!r} {_polarity(should_match)}to conform to /{pattern}/.",
            kind="to_match",
            actual=actual,
            expected=regex,
            should_match=should_match,
        )


class TruthyMatchError(MatchError):
    """Raised when a value's truthiness is not the expected one."""

    def __init__(self, actual: Any, should_match: bool) -> None:
        super().__init__(
            f"Expected {actual!r} {_polarity(should_match)}to be truthy.",
            kind="to_be_truthy",
            actual=actual,
            expected=should_match,
            should_match=should_match,
        )


class ContentsMatchError(MatchError):
    """Raised when a string or sequence does not contain the given content."""

    def __init__(self, actual: Any, content: Any, should_match: bool) -> None:
        super().__init__(
            f"Expected {actual!r} {_polarity(should_match)}to contain {content!r}.",
            kind="to_contain",
            actual=actual,
            expected=content,
            should_match=should_match,
        )


class LessThanMatchError(MatchError):
    """Raised when a number is not below its limit."""

    def __init__(self, actual: Any, limit: Any, should_match: bool) -> None:
        super().__init__(
            f"Expected {actual!r} {_polarity(should_match)}to be less than {limit!r}.",
            kind="to_be_less_than",
            actual=actual,
            expected=limit,
            should_match=should_match,
        )


class GreaterThanMatchError(MatchError):
    """Raised when a number is not above its limit."""

    def __init__(self, actual: Any, limit: Any, should_match: bool) -> None:
        super().__init__(
            f"Expected {actual!r} {_polarity(should_match)}"
            f"to be greater than {limit!r}.",
            kind="to_be_greater_than",
            actual=actual,
            expected=limit,
            should_match=should_match,
        )


class ErrorMatchError(MatchError):
    """Raised when a callable did or did not raise as expected.

    ``actual`` is the error that was raised, or None when the callable
    returned normally.
    """

    def __init__(
        self,
        actual_error: BaseException | None,
        should_match: bool,
        expected_type: type[BaseException] | None = None,
        expected_message: str | None = None,
    ) -> None:
        if expected_type is None:
            kind = "to_throw"
            message = f"Expected an error {_polarity(should_match)}to be thrown"
            if actual_error is not None:
                message += f" but {type(actual_error).__name__} was thrown"
            message += "."
        else:
            kind = "to_throw_error"
            message = (
                f"Expected {expected_type.__name__} with message "
                f"{expected_message!r} {_polarity(should_match)}to be thrown"
            )
            if actual_error is None:
                message += " but no error was thrown."
            else:
                message += (
                    f" but {type(actual_error).__name__}({str(actual_error)!r})"
                    " was thrown."
                )

        expected = None if expected_type is None else (expected_type, expected_message)
        super().__init__(
            message,
            kind=kind,
            actual=actual_error,
            expected=expected,
            should_match=should_match,
            extra=actual_error,
        )
        self.expected_type = expected_type
        self.expected_message = expected_message


class FunctionCallMatchError(MatchError):
    """Raised when a function spy was or was not called as expected."""

    def __init__(
        self,
        spy: Any,
        should_match: bool,
        args: Sequence[Any] | None = None,
    ) -> None:
        if args is None:
            kind = "to_have_been_called"
            message = f"Expected function {_polarity(should_match)}to be called."
        else:
            kind = "to_have_been_called_with"
            message = (
                f"Expected function {_polarity(should_match)}to be called "
                f"with {list(args)!r}."
            )
        super().__init__(
            message,
            kind=kind,
            actual=spy,
            expected=args,
            should_match=should_match,
            extra=args,
        )


class PropertySetMatchError(MatchError):
    """Raised when a property spy was or was not set as expected."""

    def __init__(self, spy: Any, should_match: bool, *value: Any) -> None:
        if not value:
            kind = "to_have_been_set"
            message = f"Expected property {_polarity(should_match)}to be set."
            expected = None
        else:
            kind = "to_have_been_set_to"
            expected = value[0]
            message = (
                f"Expected property {_polarity(should_match)}to be set to {expected!r}."
            )
        super().__init__(
            message,
            kind=kind,
            actual=spy,
            expected=expected,
            should_match=should_match,
            extra=expected,
        )
