"""Expansion of loaded modules into an ordered test set."""

import inspect
import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from fixtest.models.case import TestCase, TestSet
from fixtest.models.metadata import FixtureMetadata, TestMethodMetadata
from fixtest.registry import AnnotationRegistry, default_registry, unwrap_method

log = logging.getLogger(__name__)


def format_label(
    fixture_label: str,
    method_label: str,
    index: int | None = None,
    arguments: Sequence[Any] = (),
) -> str:
    """Build the display label of a case, disambiguated by argument index."""
    label = f"{fixture_label} > {method_label}"
    if index is not None:
        rendered = ", ".join(repr(argument) for argument in arguments)
        label += f" [{index}] ({rendered})"
    return label


def build_test_set(
    modules: Iterable[Mapping[str, Any]],
    registry: AnnotationRegistry | None = None,
) -> TestSet:
    """Build a test set from module exports.

    Args:
        modules: Export mappings (name to value), one per loaded module
        registry: Registry to read metadata from (default: the global one)

    Returns:
        Cases ordered by module, class, method and parameter set

    """
    registry = registry or default_registry
    seen: set[type] = set()
    cases: list[TestCase] = []

    for exports in modules:
        for member in exports.values():
            if not isinstance(member, type) or member in seen:
                continue
            if (metadata := registry.read_fixture_metadata(member)) is None:
                continue
            seen.add(member)
            cases.extend(expand_fixture(member, metadata, registry))

    log.debug("Built test set with %d case(s)", len(cases))
    return TestSet(cases=tuple(cases))


def expand_fixture(
    fixture: type,
    metadata: FixtureMetadata,
    registry: AnnotationRegistry,
) -> Sequence[TestCase]:
    """Expand every annotated own method of a fixture into test cases."""
    setup_hooks: list[str] = []
    teardown_hooks: list[str] = []
    test_methods: list[tuple[str, TestMethodMetadata]] = []

    for name, member in vars(fixture).items():
        if unwrap_method(member) is None or inspect.isclass(member):
            continue
        if (hook := registry.read_hook(fixture, name)) == "setup":
            setup_hooks.append(name)
        elif hook == "teardown":
            teardown_hooks.append(name)
        elif metadata_for_name := registry.read_method_metadata(fixture, name):
            test_methods.append((name, metadata_for_name))

    fixture_label = metadata.description or fixture.__name__
    cases: list[TestCase] = []
    for name, method_metadata in test_methods:
        method_label = method_metadata.description or name
        common: dict[str, Any] = {
            "fixture": fixture,
            "method_name": name,
            "ignored": metadata.ignored or method_metadata.ignored,
            "ignore_reason": method_metadata.ignore_reason or metadata.ignore_reason,
            "focused": metadata.focused or method_metadata.focused,
            "timeout_ms": method_metadata.timeout_ms,
            "setup_hooks": tuple(setup_hooks),
            "teardown_hooks": tuple(teardown_hooks),
        }

        if not method_metadata.parameter_sets:
            cases.append(
                TestCase(label=format_label(fixture_label, method_label), **common)
            )
            continue

        for index, arguments in enumerate(method_metadata.parameter_sets):
            cases.append(
                TestCase(
                    arguments=arguments,
                    label=format_label(fixture_label, method_label, index, arguments),
                    **common,
                )
            )

    return cases
