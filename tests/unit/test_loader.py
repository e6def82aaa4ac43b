"""Tests for the test loader with fake collaborators."""

from collections.abc import Mapping
from pathlib import Path
from typing import Any
from unittest.mock import Mock

import pytest

from fixtest import decorators as fx
from fixtest.loader import (
    LoadError,
    ModuleLoader,
    ModuleLoadError,
    PathResolutionError,
    PathResolver,
    TestFileNotFoundError,
    TestLoader,
)


@fx.fixture()
class AlphaFixture:
    """Fixture exported by the fake alpha module."""

    @fx.test()
    def runs(self) -> None: ...


@fx.fixture()
class BetaFixture:
    """Fixture exported by the fake beta module."""

    @fx.test()
    def runs(self) -> None: ...


MODULES: Mapping[Path, Mapping[str, Any]] = {
    Path("/tests/alpha.py"): {"AlphaFixture": AlphaFixture},
    Path("/tests/beta.py"): {"BetaFixture": BetaFixture},
}


@pytest.fixture
def path_resolver() -> Mock:
    """Create mock path resolver."""
    return Mock(spec=PathResolver)


@pytest.fixture
def module_loader() -> Mock:
    """Create mock module loader serving MODULES."""
    loader = Mock(spec=ModuleLoader)
    loader.load.side_effect = lambda path: MODULES[path]
    return loader


@pytest.fixture
def loader(path_resolver: Mock, module_loader: Mock) -> TestLoader:
    """Create test loader with mock collaborators."""
    return TestLoader(path_resolver=path_resolver, module_loader=module_loader)


def test_builds_test_set_in_resolved_order(
    loader: TestLoader, path_resolver: Mock
) -> None:
    """Modules are loaded and built in resolution order."""
    path_resolver.resolve.return_value = [
        Path("/tests/beta.py"),
        Path("/tests/alpha.py"),
    ]

    loaded = loader.load(["**/*.py"])

    assert [case.label for case in loaded.test_set] == [
        "BetaFixture > runs",
        "AlphaFixture > runs",
    ]
    assert loaded.errors == []
    path_resolver.resolve.assert_called_once_with(["**/*.py"])


def test_accepts_single_pattern(loader: TestLoader, path_resolver: Mock) -> None:
    """A single string pattern is wrapped in a list."""
    path_resolver.resolve.return_value = []

    loader.load("tests/*.py")

    path_resolver.resolve.assert_called_once_with(["tests/*.py"])


def test_duplicate_paths_are_loaded_once(
    loader: TestLoader, path_resolver: Mock, module_loader: Mock
) -> None:
    """Paths resolved by several patterns are loaded a single time."""
    alpha = Path("/tests/alpha.py")
    path_resolver.resolve.return_value = [alpha, Path("/tests/beta.py"), alpha]

    loaded = loader.load(["a", "b"])

    assert module_loader.load.call_count == 2
    assert list(loaded.paths) == [alpha, Path("/tests/beta.py")]
    assert len(loaded.test_set) == 2


def test_failed_file_is_reported_and_others_continue(
    loader: TestLoader, path_resolver: Mock, module_loader: Mock
) -> None:
    """A load failure is recorded for its file only."""
    broken = Path("/tests/broken.py")
    path_resolver.resolve.return_value = [broken, Path("/tests/alpha.py")]

    def load(path: Path) -> Mapping[str, Any]:
        if path == broken:
            raise TestFileNotFoundError(path, f"Test file not found: {path}")
        return MODULES[path]

    module_loader.load.side_effect = load

    loaded = loader.load(["*.py"])

    assert [case.label for case in loaded.test_set] == ["AlphaFixture > runs"]
    assert len(loaded.errors) == 1
    assert isinstance(loaded.errors[0], TestFileNotFoundError)
    assert loaded.errors[0].path == broken


def test_unexpected_loader_error_becomes_load_error(
    loader: TestLoader, module_loader: Mock
) -> None:
    """Errors other than LoadError are wrapped in ModuleLoadError."""
    module_loader.load.side_effect = RuntimeError("exploded")

    with pytest.raises(ModuleLoadError, match="exploded") as exc_info:
        loader.load_module(Path("/tests/alpha.py"))

    assert isinstance(exc_info.value, LoadError)
    assert isinstance(exc_info.value.__cause__, RuntimeError)


def test_resolution_error_propagates(loader: TestLoader, path_resolver: Mock) -> None:
    """Path resolution failures are raised to the caller."""
    path_resolver.resolve.side_effect = PathResolutionError("Empty file path pattern")

    with pytest.raises(PathResolutionError):
        loader.load([""])
