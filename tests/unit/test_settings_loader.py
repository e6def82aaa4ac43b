"""Tests for settings loader."""

from pathlib import Path

import pytest

from fixtest.models.settings import DEFAULT_TIMEOUT_MS
from fixtest.settings_loader import load_settings


class TestLoadSettings:
    """Tests for load_settings function."""

    __test__ = True  # Explicitly mark as test class despite "Test" prefix

    def test_loads_valid_yaml(self, tmp_path: Path) -> None:
        """Loads and validates a full settings file."""
        path = tmp_path / "fixtest.yaml"
        path.write_text(
            """
patterns:
  - "tests/**/*_spec.py"
  - "more/*.py"
timeout_ms: 1000
"""
        )

        settings = load_settings(path)

        assert list(settings.patterns) == ["tests/**/*_spec.py", "more/*.py"]
        assert settings.timeout_ms == 1000

    def test_applies_defaults(self, tmp_path: Path) -> None:
        """Missing fields fall back to defaults."""
        path = tmp_path / "fixtest.yaml"
        path.write_text("patterns: ['*.py']\n")

        settings = load_settings(path)

        assert settings.timeout_ms == DEFAULT_TIMEOUT_MS

    def test_raises_for_missing_file(self, tmp_path: Path) -> None:
        """Raises FileNotFoundError for missing settings."""
        with pytest.raises(FileNotFoundError, match="Settings file not found"):
            load_settings(tmp_path / "missing.yaml")

    def test_raises_for_invalid_yaml(self, tmp_path: Path) -> None:
        """Raises ValueError for malformed YAML."""
        path = tmp_path / "fixtest.yaml"
        path.write_text("invalid: yaml: content: [")

        with pytest.raises(ValueError, match="Invalid YAML"):
            load_settings(path)

    def test_raises_for_empty_file(self, tmp_path: Path) -> None:
        """Raises ValueError for an empty file."""
        path = tmp_path / "fixtest.yaml"
        path.write_text("")

        with pytest.raises(ValueError, match="Empty settings file"):
            load_settings(path)

    def test_raises_for_invalid_schema(self, tmp_path: Path) -> None:
        """Raises ValueError for schema validation errors."""
        path = tmp_path / "fixtest.yaml"
        path.write_text("timeout_ms: -5\n")

        with pytest.raises(ValueError, match="Invalid settings schema"):
            load_settings(path)
