"""
Pydantic configuration models for base correlation sensitivity calculations.

These models replace process-wide settings: a configuration object is built
once (in code or from YAML) and handed explicitly to the blender and the
term interpolator.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class InterpMethod(str, Enum):
    """Interpolation methods a tenor interpolator may be configured with."""

    LINEAR = "linear"
    LOG_LINEAR = "log_linear"
    FLAT = "flat"
    WEIGHTED = "weighted"
    LOG_WEIGHTED = "log_weighted"
    CUBIC = "cubic"
    LOG_CUBIC = "log_cubic"
    QUADRATIC = "quadratic"
    LOG_QUADRATIC = "log_quadratic"
    PCHIP = "pchip"
    TENSION = "tension"
    SQUARED = "squared"


class ExtrapMethod(str, Enum):
    """Extrapolation methods beyond the first and last tenor."""

    NONE = "none"
    CONST = "const"
    SMOOTH = "smooth"


class TenorInterpolationConfig(BaseModel):
    """
    Interpolation across the tenors of a base correlation term structure.

    Only linear interpolation with constant extrapolation is supported by
    the sensitivity interpolator; other combinations are accepted here so
    they can be reported as a configuration error at the point of use.

    Attributes
    ----------
    interp_method : InterpMethod
        Interpolation between tenor dates
    extrap_method : ExtrapMethod
        Extrapolation before the first and after the last tenor date

    Example
    -------
    >>> config = TenorInterpolationConfig(interp_method="linear", extrap_method="const")
    >>> config.is_supported
    True
    """

    model_config = ConfigDict(frozen=True)

    interp_method: InterpMethod = InterpMethod.LINEAR
    extrap_method: ExtrapMethod = ExtrapMethod.CONST

    @property
    def is_supported(self) -> bool:
        """Whether the sensitivity interpolator can use this combination."""
        return (
            self.interp_method is InterpMethod.LINEAR
            and self.extrap_method is ExtrapMethod.CONST
        )


class BlendConfig(BaseModel):
    """
    Parameters of the square-root-weighted tenor blend.

    Attributes
    ----------
    singularity_policy : {"raise", "propagate"}
        What to do with a zero or negative tenor correlation.
        ``"raise"`` fails with ``NumericSingularity``; ``"propagate"``
        lets NaN/Inf flow into the output as legacy results did.
    """

    model_config = ConfigDict(frozen=True)

    singularity_policy: Literal["raise", "propagate"] = "raise"


class SensitivityConfig(BaseModel):
    """
    Complete configuration for correlation sensitivity aggregation.

    Attributes
    ----------
    interpolation : TenorInterpolationConfig
        Tenor interpolation settings
    blend : BlendConfig
        Tenor blend settings
    """

    model_config = ConfigDict(frozen=True)

    interpolation: TenorInterpolationConfig = Field(
        default_factory=TenorInterpolationConfig
    )
    blend: BlendConfig = Field(default_factory=BlendConfig)
