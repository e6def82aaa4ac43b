"""Out-of-band store for fixture and test method metadata.

Metadata is keyed by identity and never written onto the classes or functions
themselves. Method decorators run before their owning class exists, so method
metadata is keyed by the function object and resolved through the class's own
namespace when read.
"""

import logging
from collections.abc import Callable, Sequence
from typing import Any

from fixtest.models.metadata import FixtureMetadata, HookKind, TestMethodMetadata

log = logging.getLogger(__name__)


def unwrap_method(member: Any) -> Any:
    """Return the plain function behind a class attribute, or None."""
    if isinstance(member, (staticmethod, classmethod)):
        return member.__func__
    return member if callable(member) else None


class AnnotationRegistry:
    """Stores metadata for fixtures, test methods and lifecycle hooks."""

    def __init__(self) -> None:
        self._fixtures: dict[type, FixtureMetadata] = {}
        self._methods: dict[Callable[..., Any], TestMethodMetadata] = {}
        self._hooks: dict[Callable[..., Any], HookKind] = {}

    def attach_fixture_metadata(self, cls: type, **changes: Any) -> FixtureMetadata:
        """Record (or update) the fixture metadata of a class.

        Scalar fields are last-write-wins. The stored model is replaced, never
        mutated.
        """
        current = self._fixtures.get(cls, FixtureMetadata())
        updated = FixtureMetadata.model_validate(dict(current) | changes)
        self._fixtures[cls] = updated
        log.debug("Fixture metadata for %s: %s", cls.__qualname__, updated)
        return updated

    def attach_method_metadata(
        self, method: Callable[..., Any], **changes: Any
    ) -> TestMethodMetadata:
        """Record (or update) test metadata for a method.

        Use ``add_parameter_set`` to accumulate parameter sets; passing
        ``parameter_sets`` here replaces them.
        """
        current = self._methods.get(method, TestMethodMetadata())
        updated = TestMethodMetadata.model_validate(dict(current) | changes)
        self._methods[method] = updated
        return updated

    def add_parameter_set(
        self,
        method: Callable[..., Any],
        args: Sequence[Any],
        *,
        prepend: bool = False,
    ) -> TestMethodMetadata:
        """Add one argument tuple to a method's parameter sets."""
        current = self._methods.get(method, TestMethodMetadata())
        if prepend:
            parameter_sets = (tuple(args), *current.parameter_sets)
        else:
            parameter_sets = (*current.parameter_sets, tuple(args))
        return self.attach_method_metadata(method, parameter_sets=parameter_sets)

    def attach_hook(self, method: Callable[..., Any], kind: HookKind) -> None:
        """Mark a method as a per-case setup or teardown hook."""
        self._hooks[method] = kind

    def read_fixture_metadata(self, cls: type) -> FixtureMetadata | None:
        """Return the fixture metadata of a class, or None if it is not a fixture."""
        return self._fixtures.get(cls)

    def read_method_metadata(self, cls: type, name: str) -> TestMethodMetadata | None:
        """Return the test metadata of ``cls``'s own method ``name``."""
        member = unwrap_method(vars(cls).get(name))
        if member is None:
            return None
        return self._methods.get(member)

    def read_hook(self, cls: type, name: str) -> HookKind | None:
        """Return the hook kind of ``cls``'s own method ``name``, if it is one."""
        member = unwrap_method(vars(cls).get(name))
        if member is None:
            return None
        return self._hooks.get(member)

    def clear(self) -> None:
        """Forget everything recorded so far."""
        self._fixtures.clear()
        self._methods.clear()
        self._hooks.clear()


default_registry = AnnotationRegistry()
