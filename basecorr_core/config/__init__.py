"""
Configuration module for base correlation sensitivity calculations.

Provides Pydantic-validated configuration models and YAML loading utilities
for tenor interpolation and tenor blending.
"""

from basecorr_core.config.loader import (
    create_default_sensitivity_config,
    load_sensitivity_config,
)
from basecorr_core.config.models import (
    BlendConfig,
    ExtrapMethod,
    InterpMethod,
    SensitivityConfig,
    TenorInterpolationConfig,
)

__all__ = [
    # Models
    "InterpMethod",
    "ExtrapMethod",
    "TenorInterpolationConfig",
    "BlendConfig",
    "SensitivityConfig",
    # Loaders
    "load_sensitivity_config",
    "create_default_sensitivity_config",
]
