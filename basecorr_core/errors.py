"""
Exception hierarchy for base correlation sensitivity calculations.

All failures surface directly to the caller: the computations are
deterministic, so nothing is retried and no partial result is returned.
"""


class BaseCorrelationError(Exception):
    """Root of all errors raised by ``basecorr_core``."""


class ConfigurationError(BaseCorrelationError, ValueError):
    """Unsupported interpolation/extrapolation method combination."""


class PreconditionViolation(BaseCorrelationError, ValueError):
    """
    Malformed input shapes.

    Raised for block-length mismatches, non-ascending tenor dates,
    negative or all-zero weights and out-of-range tenor indices.
    """


class NumericSingularity(BaseCorrelationError, ArithmeticError):
    """
    Zero or negative tenor correlation in the square-root blend.

    Only raised when the blend runs with ``singularity_policy="raise"``.
    """
