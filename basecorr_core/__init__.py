"""
Base Correlation Sensitivity Library - Core Package.

Aggregates analytic derivatives of implied base correlations with respect to
survival curve ordinates across a term structure of tenors: exact tenor
matches, flat extrapolation and linear interpolation between tenors, and the
square-root-weighted blend of several base correlation surfaces.

Example
-------
>>> from basecorr_core import TenorBlender, SensitivityLayout
>>> layout = SensitivityLayout((4, 4, 4))
>>> result = TenorBlender().blend([res_a, res_b], [0.5, 0.5], layout)
>>> print(f"Blended correlation: {result.correlation:.4f}")
"""

__version__ = "1.0.0"

# Core types
from basecorr_core._types import FloatArray, IntArray, TenorPrimitive

# Errors
from basecorr_core.errors import (
    BaseCorrelationError,
    ConfigurationError,
    NumericSingularity,
    PreconditionViolation,
)

# Configuration
from basecorr_core.config import (
    BlendConfig,
    ExtrapMethod,
    InterpMethod,
    SensitivityConfig,
    TenorInterpolationConfig,
    load_sensitivity_config,
)

# Sensitivities
from basecorr_core.sensitivity import (
    SensitivityBlock,
    SensitivityLayout,
    TenorBlender,
    TenorResult,
    blend_tenor_results,
)

# Term structure
from basecorr_core.term import (
    BaseCorrelationMixed,
    BaseCorrelationTermStructure,
    TenorDates,
    TermInterpolator,
    interpolate_tenor_result,
)

# Reporting
from basecorr_core.reporting import (
    create_block_table,
    create_gradient_table,
    create_name_summary_table,
    create_sensitivity_report,
)

__all__ = [
    # Version
    "__version__",
    # Types
    "FloatArray",
    "IntArray",
    "TenorPrimitive",
    # Errors
    "BaseCorrelationError",
    "ConfigurationError",
    "PreconditionViolation",
    "NumericSingularity",
    # Config
    "InterpMethod",
    "ExtrapMethod",
    "TenorInterpolationConfig",
    "BlendConfig",
    "SensitivityConfig",
    "load_sensitivity_config",
    # Sensitivities
    "SensitivityLayout",
    "SensitivityBlock",
    "TenorResult",
    "TenorBlender",
    "blend_tenor_results",
    # Term structure
    "TenorDates",
    "TermInterpolator",
    "interpolate_tenor_result",
    "BaseCorrelationTermStructure",
    "BaseCorrelationMixed",
    # Reporting
    "create_block_table",
    "create_gradient_table",
    "create_name_summary_table",
    "create_sensitivity_report",
]
