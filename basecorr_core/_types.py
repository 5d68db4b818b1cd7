"""
Common type aliases used throughout the base correlation sensitivity library.

This module defines type aliases for numpy arrays and other common types
to improve code readability and enable better static type checking.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING, TypeAlias

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from basecorr_core.sensitivity.result import TenorResult

# Array type aliases
FloatArray: TypeAlias = npt.NDArray[np.float64]
"""1D or 2D array of 64-bit floats."""

IntArray: TypeAlias = npt.NDArray[np.int64]
"""1D or 2D array of 64-bit integers."""

TenorPrimitive: TypeAlias = "Callable[[int], TenorResult]"
"""
Per-tenor derivative function.

Given a tenor index it returns the correlation and the packed sensitivity
block of that tenor's base correlation surface.
"""
