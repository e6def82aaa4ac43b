"""Loading of test modules from file path patterns."""

import glob
import hashlib
import importlib.util
import logging
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from fixtest.builder import build_test_set
from fixtest.models.case import TestSet
from fixtest.registry import AnnotationRegistry

log = logging.getLogger(__name__)


class LoadError(Exception):
    """Raised when a test file cannot be loaded."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(message)
        self.path = path


class TestFileNotFoundError(LoadError):
    """Raised when a resolved test file does not exist."""

    __test__ = False


class ModuleLoadError(LoadError):
    """Raised when a test module fails while being imported."""


class PathResolutionError(Exception):
    """Raised when file path patterns cannot be resolved."""


class PathResolver(Protocol):
    """Turns file path patterns into absolute file paths."""

    def resolve(self, patterns: Sequence[str]) -> Sequence[Path]: ...


class ModuleLoader(Protocol):
    """Loads one file and returns its exported members by name."""

    def load(self, path: Path) -> Mapping[str, Any]: ...


class GlobPathResolver:
    """Resolves recursive glob patterns relative to a root directory."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = root or Path.cwd()

    def resolve(self, patterns: Sequence[str]) -> Sequence[Path]:
        """Return matching files, pattern by pattern, each pattern sorted.

        Raises:
            PathResolutionError: If a pattern is empty

        """
        resolved: list[Path] = []
        for pattern in patterns:
            if not pattern.strip():
                raise PathResolutionError("Empty file path pattern")

            if not Path(pattern).is_absolute():
                pattern = str(self.root / pattern)
            matches = sorted(
                Path(match).resolve()
                for match in glob.glob(pattern, recursive=True)
                if Path(match).is_file()
            )
            if not matches:
                log.warning("Pattern %r matched no files", pattern)
            resolved.extend(matches)

        return resolved


class FileModuleLoader:
    """Imports Python source files by path."""

    def load(self, path: Path) -> Mapping[str, Any]:
        """Import ``path`` and return its exports.

        Exports are the names in ``__all__`` when the module defines it,
        otherwise every public name, in definition order.

        Raises:
            TestFileNotFoundError: If the file does not exist
            ModuleLoadError: If importing the module raises

        """
        if not path.is_file():
            raise TestFileNotFoundError(path, f"Test file not found: {path}")

        digest = hashlib.sha1(str(path).encode()).hexdigest()[:10]
        module_name = f"fixtest_loaded_{digest}_{path.stem}"
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise ModuleLoadError(path, f"Cannot import {path}: not a Python module")

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            del sys.modules[module_name]
            raise ModuleLoadError(path, f"Error while loading {path}: {e}") from e

        namespace = vars(module)
        names = namespace.get("__all__")
        if names is None:
            names = [name for name in namespace if not name.startswith("_")]
        return {name: namespace[name] for name in names if name in namespace}


@dataclass(frozen=True, kw_only=True)
class LoadedTests:
    """Test set built from the files that loaded, plus per-file failures."""

    test_set: TestSet
    paths: Sequence[Path] = field(default_factory=list)
    errors: Sequence[LoadError] = field(default_factory=list)


@dataclass(frozen=True, kw_only=True)
class TestLoader:
    """Loads test files matching patterns and builds their test set."""

    __test__ = False

    path_resolver: PathResolver = field(default_factory=GlobPathResolver)
    module_loader: ModuleLoader = field(default_factory=FileModuleLoader)
    registry: AnnotationRegistry | None = None

    def resolve_paths(self, patterns: str | Sequence[str]) -> Sequence[Path]:
        """Resolve patterns and drop duplicate paths, keeping first occurrence."""
        if isinstance(patterns, str):
            patterns = [patterns]
        return list(dict.fromkeys(self.path_resolver.resolve(patterns)))

    def load_module(self, path: Path) -> Mapping[str, Any]:
        """Load a single resolved path.

        Raises:
            LoadError: If the module cannot be loaded

        """
        try:
            return self.module_loader.load(path)
        except LoadError:
            raise
        except Exception as e:
            raise ModuleLoadError(path, f"Error while loading {path}: {e}") from e

    def load(self, patterns: str | Sequence[str]) -> LoadedTests:
        """Load every file matching ``patterns`` and build a test set.

        A file that fails to load is recorded in ``errors`` and the remaining
        files are still loaded.

        Raises:
            PathResolutionError: If the patterns cannot be resolved

        """
        paths = self.resolve_paths(patterns)
        log.info("Loading %d test file(s)", len(paths))

        modules: list[Mapping[str, Any]] = []
        errors: list[LoadError] = []
        for path in paths:
            try:
                modules.append(self.load_module(path))
            except LoadError as e:
                log.error("Failed to load %s: %s", path, e, exc_info=e)
                errors.append(e)

        test_set = build_test_set(modules, self.registry)
        log.info(
            "Discovered %d test case(s) in %d file(s)", len(test_set), len(modules)
        )
        return LoadedTests(test_set=test_set, paths=paths, errors=errors)
