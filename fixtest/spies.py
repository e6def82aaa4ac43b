"""Call and property recording objects used by the spy matchers."""

import functools
import inspect
import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

log = logging.getLogger(__name__)

_MISSING = object()


@dataclass(frozen=True, kw_only=True)
class RecordedCall:
    """One recorded invocation of a spy."""

    args: Sequence[Any]
    kwargs: Mapping[str, Any] = field(default_factory=dict)


class FunctionSpy:
    """Callable that records every call made to it.

    By default a spy returns None, or calls through to the function it
    replaced when created with ``spy_on``. A spy that replaced a plain method
    on a class binds like that method: calls through an instance are
    recorded without the instance, which is passed on to the original only.
    """

    def __init__(self, original: Callable[..., Any] | None = None) -> None:
        self.calls: list[RecordedCall] = []
        self._original = original
        self._fake: Callable[..., Any] | None = original
        self._return_value: Any = None
        self._restore: Callable[[], None] | None = None
        self._binds_instance = False

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self._dispatch(args, kwargs)

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None or not self._binds_instance:
            return self
        return functools.partial(self._dispatch_bound, instance)

    def _dispatch_bound(self, instance: Any, *args: Any, **kwargs: Any) -> Any:
        return self._dispatch(args, kwargs, instance)

    def _dispatch(
        self, args: Sequence[Any], kwargs: Mapping[str, Any], instance: Any = _MISSING
    ) -> Any:
        self.calls.append(RecordedCall(args=args, kwargs=kwargs))
        if self._fake is None:
            return self._return_value
        if instance is not _MISSING and self._fake is self._original:
            return self._fake(instance, *args, **kwargs)
        return self._fake(*args, **kwargs)

    def and_return(self, value: Any) -> "FunctionSpy":
        """Return ``value`` from every call instead of calling through."""
        self._fake = None
        self._return_value = value
        return self

    def and_call(self, fake: Callable[..., Any]) -> "FunctionSpy":
        """Forward every call to ``fake``."""
        self._fake = fake
        return self

    def and_call_through(self) -> "FunctionSpy":
        """Forward every call to the replaced function."""
        self._fake = self._original
        return self

    def and_stub(self) -> "FunctionSpy":
        """Neither call through nor return anything."""
        return self.and_return(None)

    def reset(self) -> None:
        """Forget recorded calls."""
        self.calls.clear()

    def restore(self) -> None:
        """Put back the attribute this spy replaced."""
        if self._restore is not None:
            self._restore()
            self._restore = None


def create_function_spy() -> FunctionSpy:
    """Create a free standing spy that records calls and returns None."""
    return FunctionSpy()


def spy_on(target: Any, name: str) -> FunctionSpy:
    """Replace ``target.name`` with a spy that calls through to the original.

    Raises:
        AttributeError: If ``target`` has no attribute ``name``
        TypeError: If the attribute is not callable

    """
    original = getattr(target, name)
    if not callable(original):
        raise TypeError(f"spy_on can only replace callables, {name!r} is not")

    had_own = name in getattr(target, "__dict__", {})
    previous = target.__dict__[name] if had_own else None
    spy = FunctionSpy(original)
    spy._binds_instance = isinstance(target, type) and inspect.isfunction(
        inspect.getattr_static(target, name)
    )
    setattr(target, name, spy)

    def restore() -> None:
        if had_own:
            setattr(target, name, previous)
        else:
            delattr(target, name)

    spy._restore = restore
    log.debug("Spying on %r.%s", target, name)
    return spy


class PropertySpy:
    """Data descriptor that records reads and writes of one attribute.

    Installed on the owning class, so it intercepts the attribute for every
    instance of that class until restored.
    """

    def __init__(self, initial: Any = None) -> None:
        self.get_calls: list[RecordedCall] = []
        self.set_calls: list[RecordedCall] = []
        self._value = initial
        self._getter: Callable[[], Any] | None = None
        self._setter: Callable[[Any], None] | None = None
        self._return_value: Any = _MISSING
        self._restore: Callable[[], None] | None = None

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        self.get_calls.append(RecordedCall(args=()))
        if self._getter is not None:
            return self._getter()
        if self._return_value is not _MISSING:
            return self._return_value
        return self._value

    def __set__(self, instance: Any, value: Any) -> None:
        self.set_calls.append(RecordedCall(args=(value,)))
        if self._setter is not None:
            self._setter(value)
        else:
            self._value = value

    def and_return_value(self, value: Any) -> "PropertySpy":
        """Return ``value`` from every read regardless of writes."""
        self._return_value = value
        return self

    def and_call_getter(self, getter: Callable[[], Any]) -> "PropertySpy":
        """Compute every read with ``getter``."""
        self._getter = getter
        return self

    def and_call_setter(self, setter: Callable[[Any], None]) -> "PropertySpy":
        """Forward every write to ``setter``."""
        self._setter = setter
        return self

    def restore(self) -> None:
        """Remove the descriptor and write the last value back."""
        if self._restore is not None:
            self._restore()
            self._restore = None


def spy_on_property(target: Any, name: str) -> PropertySpy:
    """Install a property spy for ``name`` on ``target``'s class."""
    owner = type(target)
    instance_dict = getattr(target, "__dict__", {})
    had_instance_value = name in instance_dict
    had_class_attr = name in vars(owner)
    class_attr = vars(owner)[name] if had_class_attr else None

    spy = PropertySpy(getattr(target, name, None))
    setattr(owner, name, spy)

    def restore() -> None:
        last = spy._value
        if had_class_attr:
            setattr(owner, name, class_attr)
        else:
            delattr(owner, name)
        if had_instance_value:
            target.__dict__[name] = last

    spy._restore = restore
    log.debug("Spying on property %s of %r", name, target)
    return spy
