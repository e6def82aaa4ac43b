"""Declaration helpers that record fixture and test metadata.

Each decorator writes to the default annotation registry and returns its
target unchanged. Any method level decorator marks the method as a test.

    @fixture("Arithmetic")
    class ArithmeticTests:
        @case(1, 2, 3)
        @case(2, 2, 4)
        def adds(self, a, b, total):
            expect(a + b).to_be(total)
"""

from collections.abc import Callable
from typing import Any, TypeVar

from fixtest.registry import default_registry

_T = TypeVar("_T")
_C = TypeVar("_C", bound=type)
_F = TypeVar("_F", bound=Callable[..., Any])


def fixture(description: str | None = None) -> Callable[[_C], _C]:
    """Mark a class as a test fixture with an optional display name."""

    def decorate(cls: _C) -> _C:
        default_registry.attach_fixture_metadata(cls, description=description)
        return cls

    return decorate


def test(description: str | None = None) -> Callable[[_F], _F]:
    """Mark a method as a test with an optional display name."""

    def decorate(method: _F) -> _F:
        default_registry.attach_method_metadata(method, description=description)
        return method

    return decorate


test.__test__ = False  # type: ignore[attr-defined]


def case(*args: Any) -> Callable[[_F], _F]:
    """Mark a method as a test and add one argument tuple to run it with.

    Decorators apply bottom-up, so each new tuple goes in front of those
    already recorded to keep the written top-to-bottom order.
    """

    def decorate(method: _F) -> _F:
        default_registry.add_parameter_set(method, args, prepend=True)
        return method

    return decorate


def focus(target: _T) -> _T:
    """Focus a fixture class or a test method.

    On a class this also marks the class as a fixture, so ``@fixture`` is
    only needed to give it a display name.
    """
    if isinstance(target, type):
        default_registry.attach_fixture_metadata(target, focused=True)
    else:
        default_registry.attach_method_metadata(
            target,  # type: ignore[arg-type]
            focused=True,
        )
    return target


def ignore(reason: str | None = None) -> Callable[[_T], _T]:
    """Ignore a fixture class or a test method, with an optional reason.

    Like ``focus``, applying it to a class marks the class as a fixture.
    """
    if reason is not None and not isinstance(reason, str):
        raise TypeError("ignore must be called: use @ignore() or @ignore('reason')")

    def decorate(target: _T) -> _T:
        if isinstance(target, type):
            default_registry.attach_fixture_metadata(
                target, ignored=True, ignore_reason=reason
            )
        else:
            default_registry.attach_method_metadata(
                target,  # type: ignore[arg-type]
                ignored=True,
                ignore_reason=reason,
            )
        return target

    return decorate


def timeout(timeout_ms: int) -> Callable[[_F], _F]:
    """Set the timeout of an asynchronous test method in milliseconds."""

    def decorate(method: _F) -> _F:
        default_registry.attach_method_metadata(method, timeout_ms=timeout_ms)
        return method

    return decorate


def setup(method: _F) -> _F:
    """Run a fixture method before every test case of the fixture."""
    default_registry.attach_hook(method, "setup")
    return method


def teardown(method: _F) -> _F:
    """Run a fixture method after every test case of the fixture."""
    default_registry.attach_hook(method, "teardown")
    return method
