"""
Interpolation of correlation derivatives across tenor dates.

For a requested maturity the interpolator either reuses one tenor's result
(single tenor, exact match, flat extrapolation) or blends the two bracketing
tenors linearly in calendar days.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date

from basecorr_core._types import TenorPrimitive
from basecorr_core.config.models import TenorInterpolationConfig
from basecorr_core.errors import ConfigurationError, PreconditionViolation
from basecorr_core.sensitivity.result import TenorResult
from basecorr_core.term.dates import TenorDates

logger = logging.getLogger(__name__)


@dataclass
class TermInterpolator:
    """
    Select or blend tenor results for a target maturity.

    Decision order, first match wins:

    1. a single tenor is always used as is
    2. a maturity on a tenor date uses that tenor
    3. anything but linear interpolation with constant extrapolation
       is a configuration error
    4. maturities on or before the first tenor use the first tenor
    5. maturities on or after the last tenor use the last tenor
    6. otherwise a*low + b*high with a = (t_high - T)/(t_high - t_low), b = 1 - a

    Attributes
    ----------
    config : TenorInterpolationConfig
        Interpolation and extrapolation methods

    Example
    -------
    >>> interp = TermInterpolator()
    >>> result = interp.interpolate(date(2028, 6, 20), tenors, surface.tenor_result)
    """

    config: TenorInterpolationConfig = field(default_factory=TenorInterpolationConfig)

    def _check_config(self) -> None:
        if not self.config.is_supported:
            raise ConfigurationError(
                "Only linear tenor interpolation with constant tenor extrapolation "
                f"is supported, got {self.config.interp_method.value} interpolation "
                f"and {self.config.extrap_method.value} extrapolation"
            )

    def weights(self, maturity: date, tenor_dates: TenorDates) -> dict[int, float]:
        """
        Tenor weights used for ``maturity``.

        Parameters
        ----------
        maturity : date
            Target maturity
        tenor_dates : TenorDates
            Tenor dates of the term structure

        Returns
        -------
        dict[int, float]
            Tenor index to weight; one entry with weight 1.0 when a single
            tenor is used, two entries (a, b) when interpolating
        """
        n = len(tenor_dates)
        if n == 1:
            logger.debug("Single tenor term structure, using tenor 0")
            return {0: 1.0}

        idx = tenor_dates.index_of(maturity)
        if idx is not None:
            logger.debug("Maturity %s matches tenor %d", maturity, idx)
            return {idx: 1.0}

        self._check_config()

        if maturity <= tenor_dates.first:
            logger.debug("Maturity %s before first tenor, extrapolating flat", maturity)
            return {0: 1.0}
        if maturity >= tenor_dates.last:
            logger.debug("Maturity %s after last tenor, extrapolating flat", maturity)
            return {n - 1: 1.0}

        k_low, k_high = tenor_dates.bracket(maturity)
        h = tenor_dates.days_between(k_low, k_high)
        a = tenor_dates.days_from(maturity, k_high) / h
        b = 1.0 - a
        logger.debug(
            "Maturity %s between tenors %d and %d (a=%.6f, b=%.6f)",
            maturity,
            k_low,
            k_high,
            a,
            b,
        )
        return {k_low: a, k_high: b}

    def interpolate(
        self,
        maturity: date,
        tenor_dates: TenorDates,
        tenor_primitive: TenorPrimitive,
    ) -> TenorResult:
        """
        Correlation derivatives at ``maturity``.

        Parameters
        ----------
        maturity : date
            Target maturity
        tenor_dates : TenorDates
            Tenor dates of the term structure
        tenor_primitive : Callable[[int], TenorResult]
            Computes the derivatives of one tenor

        Returns
        -------
        TenorResult
            The tenor's own result, or the linear blend of two tenors

        Raises
        ------
        ConfigurationError
            If interpolation is needed and the configured methods are not
            linear/constant
        PreconditionViolation
            If the two bracketing results have different layouts
        """
        weights = self.weights(maturity, tenor_dates)
        if len(weights) == 1:
            (idx,) = weights
            return tenor_primitive(idx)

        (k_low, a), (k_high, b) = weights.items()
        res_low = tenor_primitive(k_low)
        res_high = tenor_primitive(k_high)
        if res_low.layout != res_high.layout:
            raise PreconditionViolation(
                f"Tenors {k_low} and {k_high} returned blocks with curve lengths "
                f"{res_low.layout.curve_lengths} and {res_high.layout.curve_lengths}"
            )
        return TenorResult(
            correlation=a * res_low.correlation + b * res_high.correlation,
            block=res_low.block.combine(a, res_high.block, b),
        )

    def interpolate_correlation(
        self,
        maturity: date,
        tenor_dates: TenorDates,
        correlations: Sequence[float],
    ) -> float:
        """
        Interpolate plain tenor correlation levels at ``maturity``.

        Parameters
        ----------
        maturity : date
            Target maturity
        tenor_dates : TenorDates
            Tenor dates of the term structure
        correlations : Sequence[float]
            Correlation of each tenor

        Returns
        -------
        float
            Interpolated correlation
        """
        if len(correlations) != len(tenor_dates):
            raise PreconditionViolation(
                f"Expected {len(tenor_dates)} correlations, got {len(correlations)}"
            )
        weights = self.weights(maturity, tenor_dates)
        return float(sum(w * correlations[idx] for idx, w in weights.items()))


def interpolate_tenor_result(
    maturity: date,
    tenor_dates: TenorDates | Sequence[date],
    tenor_primitive: TenorPrimitive,
    config: TenorInterpolationConfig | None = None,
) -> TenorResult:
    """
    Convenience function for a one-off tenor interpolation.

    Parameters
    ----------
    maturity : date
        Target maturity
    tenor_dates : TenorDates | Sequence[date]
        Tenor dates; plain sequences are validated into ``TenorDates``
    tenor_primitive : Callable[[int], TenorResult]
        Per-tenor derivative function
    config : TenorInterpolationConfig | None
        Interpolation settings (defaults apply if None)

    Returns
    -------
    TenorResult
        Interpolated result
    """
    if not isinstance(tenor_dates, TenorDates):
        tenor_dates = TenorDates(tuple(tenor_dates))
    interpolator = TermInterpolator(config=config or TenorInterpolationConfig())
    return interpolator.interpolate(maturity, tenor_dates, tenor_primitive)
