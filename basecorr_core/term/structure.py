"""
Base correlation term structures and weighted mixtures of them.

A term structure owns the tenor dates and the per-tenor derivative function
of one base correlation surface. A mixture combines several surfaces, e.g.
one per index series, with fixed weights.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date

import numpy as np

from basecorr_core._types import FloatArray, TenorPrimitive
from basecorr_core.config.models import SensitivityConfig
from basecorr_core.errors import PreconditionViolation
from basecorr_core.sensitivity.blender import TenorBlender
from basecorr_core.sensitivity.layout import SensitivityLayout
from basecorr_core.sensitivity.result import TenorResult
from basecorr_core.term.dates import TenorDates
from basecorr_core.term.interpolator import TermInterpolator

logger = logging.getLogger(__name__)


@dataclass
class BaseCorrelationTermStructure:
    """
    Base correlation surface with one set of derivatives per tenor.

    Attributes
    ----------
    tenor_dates : TenorDates
        Tenor maturities, strictly ascending
    primitive : Callable[[int], TenorResult]
        Derivatives of the tenor with the given index
    config : SensitivityConfig
        Interpolation settings

    Example
    -------
    >>> surface = BaseCorrelationTermStructure(tenors, primitive)
    >>> result = surface.correlation_derivatives(date(2028, 6, 20))
    """

    tenor_dates: TenorDates
    primitive: TenorPrimitive
    config: SensitivityConfig = field(default_factory=SensitivityConfig)

    @property
    def interpolator(self) -> TermInterpolator:
        """Interpolator built from the configuration."""
        return TermInterpolator(config=self.config.interpolation)

    @property
    def n_tenors(self) -> int:
        """Number of tenors."""
        return len(self.tenor_dates)

    def tenor_result(self, idx: int) -> TenorResult:
        """
        Derivatives of a single tenor.

        Raises
        ------
        PreconditionViolation
            If ``idx`` is not a valid tenor index
        """
        if not 0 <= idx < self.n_tenors:
            raise PreconditionViolation(f"Tenor {idx} is out of range")
        return self.primitive(idx)

    def correlation_derivatives(self, maturity: date) -> TenorResult:
        """Correlation and derivatives interpolated at ``maturity``."""
        return self.interpolator.interpolate(
            maturity, self.tenor_dates, self.tenor_result
        )

    def correlation(self, maturity: date) -> float:
        """
        Correlation interpolated at ``maturity``.

        Only the tenors carrying weight are evaluated.
        """
        weights = self.interpolator.weights(maturity, self.tenor_dates)
        return float(
            sum(w * self.tenor_result(idx).correlation for idx, w in weights.items())
        )


@dataclass
class BaseCorrelationMixed:
    """
    Weighted mixture of base correlation term structures.

    The correlation level is the weight-normalised average of the component
    correlations. Derivatives are blended on the factor scale by
    ``TenorBlender``.

    Attributes
    ----------
    surfaces : Sequence[BaseCorrelationTermStructure]
        Component surfaces
    weights : FloatArray
        Non-negative weight of each surface
    layout : SensitivityLayout
        Packing shared by every component's sensitivity blocks
    config : SensitivityConfig
        Blend settings
    """

    surfaces: Sequence[BaseCorrelationTermStructure]
    weights: FloatArray
    layout: SensitivityLayout
    config: SensitivityConfig = field(default_factory=SensitivityConfig)

    def __post_init__(self) -> None:
        """Validate surface and weight counts."""
        self.weights = np.asarray(self.weights, dtype=np.float64)
        if len(self.surfaces) == 0:
            raise PreconditionViolation("At least one surface is required")
        if self.weights.shape != (len(self.surfaces),):
            raise PreconditionViolation(
                f"Expected {len(self.surfaces)} weights, got shape {self.weights.shape}"
            )

    def correlation(self, maturity: date) -> float:
        """
        Weighted average of the surface correlations at ``maturity``.

        Falls back to the unnormalised sum when the weights cancel out.
        """
        result = 0.0
        for surface, w in zip(self.surfaces, self.weights):
            result += w * surface.correlation(maturity)
        total = float(self.weights.sum())
        if abs(total) > 1e-15:
            result /= total
        return float(result)

    def correlation_derivatives(self, maturity: date) -> TenorResult:
        """Blend of the surfaces' interpolated derivatives at ``maturity``."""
        results = [s.correlation_derivatives(maturity) for s in self.surfaces]
        logger.debug("Blending %d surfaces at %s", len(results), maturity)
        blender = TenorBlender(config=self.config.blend)
        return blender.blend(results, self.weights, self.layout)
