"""
YAML configuration loading utilities.

Provides functions to load and validate configuration from YAML files,
returning properly typed Pydantic model instances.
"""

from pathlib import Path
from typing import Any

import yaml

from basecorr_core.config.models import (
    BlendConfig,
    SensitivityConfig,
    TenorInterpolationConfig,
)


def _load_yaml(path: Path) -> dict[str, Any]:
    """
    Load a YAML file and return its contents as a dictionary.

    Parameters
    ----------
    path : Path
        Path to the YAML file

    Returns
    -------
    dict[str, Any]
        Parsed YAML contents (empty dict for an empty file)

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    yaml.YAMLError
        If the file contains invalid YAML
    """
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_sensitivity_config(path: Path | str) -> SensitivityConfig:
    """
    Load sensitivity configuration from a YAML file.

    Parameters
    ----------
    path : Path | str
        Path to the configuration YAML file

    Returns
    -------
    SensitivityConfig
        Validated configuration

    Example
    -------
    >>> config = load_sensitivity_config("data/sensitivity.yaml")
    >>> print(config.blend.singularity_policy)
    raise
    """
    path = Path(path)
    data = _load_yaml(path)

    # Handle nested 'sensitivity' key if present
    if "sensitivity" in data:
        data = data["sensitivity"]

    return SensitivityConfig(**data)


def create_default_sensitivity_config() -> SensitivityConfig:
    """
    Create the default configuration.

    Linear tenor interpolation, constant extrapolation and a blend that
    raises on singular tenor correlations.

    Returns
    -------
    SensitivityConfig
        Default configuration
    """
    return SensitivityConfig(
        interpolation=TenorInterpolationConfig(),
        blend=BlendConfig(),
    )
