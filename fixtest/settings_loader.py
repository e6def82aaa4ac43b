"""Loader for runner settings files."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from fixtest.models.settings import RunnerSettings


def load_settings(path: Path) -> RunnerSettings:
    """Load and validate runner settings from a YAML file.

    Args:
        path: Path to the settings file (e.g. ``fixtest.yaml``)

    Returns:
        Validated runner settings

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is empty, not valid YAML, or fails validation

    """
    if not path.is_file():
        raise FileNotFoundError(f"Settings file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        raise ValueError(f"Empty settings file: {path}")

    try:
        return RunnerSettings.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid settings schema in {path}: {e}") from e
