"""fixtest: fixture based unit testing with fluent assertions."""

from fixtest.builder import build_test_set
from fixtest.decorators import (
    case,
    fixture,
    focus,
    ignore,
    setup,
    teardown,
    test,
    timeout,
)
from fixtest.errors import MatchError
from fixtest.loader import LoadError, TestLoader
from fixtest.matchers import UNDEFINED, Matcher, expect
from fixtest.models.case import TestCase, TestSet
from fixtest.models.result import TestOutcome
from fixtest.registry import AnnotationRegistry, default_registry
from fixtest.runner import TestRunner
from fixtest.spies import (
    FunctionSpy,
    PropertySpy,
    create_function_spy,
    spy_on,
    spy_on_property,
)

__all__ = [
    "UNDEFINED",
    "AnnotationRegistry",
    "FunctionSpy",
    "LoadError",
    "MatchError",
    "Matcher",
    "PropertySpy",
    "TestCase",
    "TestLoader",
    "TestOutcome",
    "TestRunner",
    "TestSet",
    "build_test_set",
    "case",
    "create_function_spy",
    "default_registry",
    "expect",
    "fixture",
    "focus",
    "ignore",
    "setup",
    "spy_on",
    "spy_on_property",
    "teardown",
    "test",
    "timeout",
]
