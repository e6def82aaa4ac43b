"""Fluent assertions used inside test method bodies.

Every comparison evaluates a predicate and raises the matching ``MatchError``
exactly when the predicate disagrees with the matcher's polarity:

    expect(total).to_be(3)
    expect([1, 2]).not_.to_contain(5)

Misuse (e.g. ``to_match`` on a number) raises ``TypeError`` straight away.
"""

import re
import types
from collections.abc import Mapping, Sequence
from typing import Any, Final

from fixtest.errors import (
    ContentsMatchError,
    DefinedMatchError,
    EqualMatchError,
    ErrorMatchError,
    ExactMatchError,
    FunctionCallMatchError,
    GreaterThanMatchError,
    LessThanMatchError,
    PropertySetMatchError,
    RegexMatchError,
    TruthyMatchError,
)
from fixtest.spies import FunctionSpy, PropertySpy


class _Undefined:
    """Type of the ``UNDEFINED`` sentinel."""

    _instance: "_Undefined | None" = None

    def __new__(cls) -> "_Undefined":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False


UNDEFINED: Final = _Undefined()

PRIMITIVE_TYPES = (type(None), bool, int, float, complex, str, bytes, _Undefined)


def is_primitive(value: Any) -> bool:
    return isinstance(value, PRIMITIVE_TYPES)


def _is_array(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def strictly_equal(a: Any, b: Any) -> bool:
    """Equal primitives of the same type, otherwise the very same object."""
    if is_primitive(a) and is_primitive(b):
        return type(a) is type(b) and a == b
    return a is b


def _own_keys(value: Any) -> Sequence[Any] | None:
    if isinstance(value, Mapping):
        return list(value.keys())
    if _is_array(value):
        return list(range(len(value)))
    if callable(value) or isinstance(value, types.ModuleType):
        return None
    if hasattr(value, "__dict__"):
        return list(vars(value).keys())
    return None


def _item(value: Any, key: Any) -> Any:
    if isinstance(value, Mapping):
        return value.get(key, UNDEFINED)
    if _is_array(value):
        return value[key] if key < len(value) else UNDEFINED
    return vars(value).get(key, UNDEFINED)


def deep_equal(a: Any, b: Any) -> bool:
    """Structural equality of two non-primitive values.

    Array-ness must match, both must have the same number of own keys, and
    each of ``a``'s values must be strictly equal to ``b``'s or, when both are
    non-primitive, deep-equal to it. There is no cycle guard: a cyclic
    structure recurses until ``RecursionError``. Callables, modules and shapes
    without keys (sets, slotted objects) fall back to ``==``.
    """
    if _is_array(a) != _is_array(b):
        return False

    keys_a = _own_keys(a)
    keys_b = _own_keys(b)
    if keys_a is None or keys_b is None:
        return bool(a == b)

    if len(keys_a) != len(keys_b):
        return False

    for key in keys_a:
        value_a = _item(a, key)
        value_b = _item(b, key)
        if strictly_equal(value_a, value_b):
            continue
        if is_primitive(value_a) or is_primitive(value_b):
            return False
        if not deep_equal(value_a, value_b):
            return False

    return True


def _require_number(value: Any, role: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{role} must be a number, got {type(value).__name__}.")


class Matcher:
    """Mediates one assertion about a value.

    ``not_`` flips the polarity of the same matcher; a matcher is meant to be
    used for a single assertion statement.
    """

    def __init__(self, actual: Any) -> None:
        self._actual = actual
        self._should_match = True

    @property
    def actual(self) -> Any:
        return self._actual

    @property
    def should_match(self) -> bool:
        return self._should_match

    @property
    def not_(self) -> "Matcher":
        """Look for the opposite criteria in the next comparison."""
        self._should_match = not self._should_match
        return self

    def to_be(self, expected: Any) -> None:
        """Check that the value is strictly the expected one."""
        if strictly_equal(self._actual, expected) != self._should_match:
            raise ExactMatchError(self._actual, expected, self._should_match)

    def to_equal(self, expected: Any) -> None:
        """Check equality, falling back to structural equality for objects."""
        equal = self._actual == expected
        if not equal and not is_primitive(expected) and not is_primitive(self._actual):
            equal = deep_equal(expected, self._actual)
        if bool(equal) != self._should_match:
            raise EqualMatchError(self._actual, expected, self._should_match)

    def to_match(self, regex: "re.Pattern[str] | str | None") -> None:
        """Check that a string contains a match for ``regex``."""
        if regex is None:
            raise TypeError("to_match regular expression must not be None.")
        if not isinstance(self._actual, str):
            raise TypeError("to_match must only be used to match on strings.")

        pattern = re.compile(regex) if isinstance(regex, str) else regex
        if (pattern.search(self._actual) is not None) != self._should_match:
            raise RegexMatchError(self._actual, pattern, self._should_match)

    def to_be_defined(self) -> None:
        """Check that the value is not ``UNDEFINED``."""
        if (self._actual is not UNDEFINED) != self._should_match:
            raise DefinedMatchError(self._actual, self._should_match)

    def to_be_none(self) -> None:
        """Check that the value is None."""
        if (self._actual is None) != self._should_match:
            raise ExactMatchError(
                self._actual, None, self._should_match, kind="to_be_none"
            )

    def to_be_truthy(self) -> None:
        """Check that the value is truthy."""
        if bool(self._actual) != self._should_match:
            raise TruthyMatchError(self._actual, self._should_match)

    def to_contain(self, content: Any) -> None:
        """Check that a string contains a substring or a sequence an item."""
        if isinstance(self._actual, str):
            if not isinstance(content, str):
                raise TypeError("to_contain on a string expects string content.")
            found = content in self._actual
        elif _is_array(self._actual):
            found = any(strictly_equal(item, content) for item in self._actual)
        else:
            raise TypeError("to_contain must only be used on strings or sequences.")

        if found != self._should_match:
            raise ContentsMatchError(self._actual, content, self._should_match)

    def to_be_less_than(self, upper_limit: float) -> None:
        """Check that a number is below ``upper_limit``."""
        _require_number(upper_limit, "to_be_less_than limit")
        _require_number(self._actual, "to_be_less_than value")
        if (self._actual < upper_limit) != self._should_match:
            raise LessThanMatchError(self._actual, upper_limit, self._should_match)

    def to_be_greater_than(self, lower_limit: float) -> None:
        """Check that a number is above ``lower_limit``."""
        _require_number(lower_limit, "to_be_greater_than limit")
        _require_number(self._actual, "to_be_greater_than value")
        if (self._actual > lower_limit) != self._should_match:
            raise GreaterThanMatchError(self._actual, lower_limit, self._should_match)

    def _capture_error(self, operation: str) -> Exception | None:
        if not callable(self._actual):
            raise TypeError(f"{operation} must only be used on callables.")
        try:
            self._actual()
        except Exception as error:
            return error
        return None

    def to_throw(self) -> None:
        """Check that calling the value raises any error."""
        error = self._capture_error("to_throw")
        if (error is not None) != self._should_match:
            raise ErrorMatchError(error, self._should_match)

    def to_throw_error(self, error_type: type[Exception], message: str) -> None:
        """Check that calling the value raises ``error_type`` with ``message``."""
        error = self._capture_error("to_throw_error")
        threw_right_error = isinstance(error, error_type) and str(error) == message
        if threw_right_error != self._should_match:
            raise ErrorMatchError(error, self._should_match, error_type, message)

    def _function_spy(self, operation: str) -> FunctionSpy:
        if not isinstance(self._actual, FunctionSpy):
            raise TypeError(f"{operation} must only be used on function spies.")
        return self._actual

    def _property_spy(self, operation: str) -> PropertySpy:
        if not isinstance(self._actual, PropertySpy):
            raise TypeError(f"{operation} must only be used on property spies.")
        return self._actual

    def to_have_been_called(self) -> None:
        """Check that a function spy was called."""
        spy = self._function_spy("to_have_been_called")
        if bool(spy.calls) != self._should_match:
            raise FunctionCallMatchError(spy, self._should_match)

    def to_have_been_called_with(self, *args: Any) -> None:
        """Check that a function spy was called with exactly ``args``."""
        spy = self._function_spy("to_have_been_called_with")
        called = any(
            len(call.args) == len(args)
            and all(strictly_equal(a, b) for a, b in zip(call.args, args))
            for call in spy.calls
        )
        if called != self._should_match:
            raise FunctionCallMatchError(spy, self._should_match, args)

    def to_have_been_set(self) -> None:
        """Check that a property spy was written to."""
        spy = self._property_spy("to_have_been_set")
        if bool(spy.set_calls) != self._should_match:
            raise PropertySetMatchError(spy, self._should_match)

    def to_have_been_set_to(self, value: Any) -> None:
        """Check that a property spy was written ``value``."""
        spy = self._property_spy("to_have_been_set_to")
        was_set = any(strictly_equal(call.args[0], value) for call in spy.set_calls)
        if was_set != self._should_match:
            raise PropertySetMatchError(spy, self._should_match, value)


def expect(actual: Any) -> Matcher:
    """Start an assertion about ``actual``."""
    return Matcher(actual)


