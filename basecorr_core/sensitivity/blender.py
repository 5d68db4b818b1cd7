"""
Square-root-weighted blend of per-tenor correlation derivatives.

Several base correlation surfaces contribute to one implied correlation
through their factors f_n = sqrt(c_n):

    F = Σₙ wₙ fₙ,    corr = F²

with weights normalised to sum to one. The blended sensitivity block is the
first and second order chain rule of corr through every fₙ.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np

from basecorr_core._types import FloatArray, IntArray
from basecorr_core.config.models import BlendConfig
from basecorr_core.errors import NumericSingularity, PreconditionViolation
from basecorr_core.sensitivity.layout import SensitivityBlock, SensitivityLayout
from basecorr_core.sensitivity.result import TenorResult

logger = logging.getLogger(__name__)


@dataclass
class TenorBlender:
    """
    Combine the derivatives of several tenor surfaces into one result.

    For name i with gradient gₙ and packed Hessian hₙ on surface n:

        tmp[j]   = Σₙ wₙ/fₙ gₙ[j]
        grad[j]  = F tmp[j]
        hess[jk] = ½ tmp[j] tmp[k]
                   + Σₙ F (-½ wₙ/(cₙ fₙ) gₙ[j] gₙ[k] + wₙ/fₙ hₙ[jk])
        jump     = (Σₙ wₙ sqrt(cₙ + Jₙ))² - corr
        recovery = Σₙ wₙ/fₙ F Rₙ

    Attributes
    ----------
    config : BlendConfig
        Singularity policy

    Example
    -------
    >>> blender = TenorBlender()
    >>> result = blender.blend([res_5y, res_7y], [0.5, 0.5], layout)
    >>> print(f"Blended correlation: {result.correlation:.4f}")
    """

    config: BlendConfig = field(default_factory=BlendConfig)

    def blend(
        self,
        results: Sequence[TenorResult],
        weights: Sequence[float] | FloatArray,
        layout: SensitivityLayout,
    ) -> TenorResult:
        """
        Blend per-tenor correlations and sensitivity blocks.

        Parameters
        ----------
        results : Sequence[TenorResult]
            One result per base correlation surface, all with ``layout``
        weights : Sequence[float] | FloatArray
            Non-negative weight of each surface; normalised internally
        layout : SensitivityLayout
            Expected packing of every block

        Returns
        -------
        TenorResult
            Blended correlation F² and its derivatives

        Raises
        ------
        PreconditionViolation
            Empty input, mismatched lengths or layouts, bad weights
        NumericSingularity
            A contributing correlation is not positive and the policy is
            ``"raise"``
        """
        correlations, nw = self._validate(results, weights, layout)

        # Zero-weight tenors contribute nothing and are left out of the chain rule
        active = np.flatnonzero(nw > 0)
        if len(active) < len(results):
            results = [results[n] for n in active]
            correlations = correlations[active]
            nw = nw[active]

        if len(results) == 1:
            return results[0]

        if self.config.singularity_policy == "raise":
            self._check_singularities(results, correlations, active, layout)
            return self._blend(results, correlations, nw, layout)

        with np.errstate(divide="ignore", invalid="ignore"):
            blended = self._blend(results, correlations, nw, layout)
        if not np.isfinite(blended.correlation) or not np.all(
            np.isfinite(blended.block.values)
        ):
            logger.warning(
                "Non-finite values in blended correlation derivatives "
                "(tenor correlations %s)",
                correlations.tolist(),
            )
        return blended

    def _validate(
        self,
        results: Sequence[TenorResult],
        weights: Sequence[float] | FloatArray,
        layout: SensitivityLayout,
    ) -> tuple[FloatArray, FloatArray]:
        """Check shapes and normalise weights."""
        if len(results) == 0:
            raise PreconditionViolation("At least one tenor result is required")

        w = np.asarray(weights, dtype=np.float64)
        if w.shape != (len(results),):
            raise PreconditionViolation(
                f"Expected {len(results)} weights, got shape {w.shape}"
            )
        if not np.all(np.isfinite(w)) or np.any(w < 0):
            raise PreconditionViolation(
                f"Weights must be finite and non-negative, got {w.tolist()}"
            )
        total = w.sum()
        if not total > 0:
            raise PreconditionViolation(
                f"Sum of weights must be positive, got {total}"
            )

        for n, res in enumerate(results):
            if res.layout != layout:
                raise PreconditionViolation(
                    f"Tenor result {n} has curve lengths {res.layout.curve_lengths}, "
                    f"expected {layout.curve_lengths}"
                )

        correlations = np.array([res.correlation for res in results], dtype=np.float64)
        return correlations, w / total

    def _check_singularities(
        self,
        results: Sequence[TenorResult],
        correlations: FloatArray,
        tenors: IntArray,
        layout: SensitivityLayout,
    ) -> None:
        """Raise before any arithmetic would produce NaN or Inf."""
        for n, corr in enumerate(correlations):
            if not corr > 0:
                raise NumericSingularity(
                    f"Correlation of tenor {tenors[n]} must be positive to blend "
                    f"derivatives, got {corr}"
                )
        for i in range(layout.n_names):
            for n, res in enumerate(results):
                if correlations[n] + res.block.default_jump(i) < 0:
                    raise NumericSingularity(
                        f"Correlation after default of name {i} on tenor {tenors[n]} "
                        f"is negative: {correlations[n]} + "
                        f"{res.block.default_jump(i)}"
                    )

    def _blend(
        self,
        results: Sequence[TenorResult],
        correlations: FloatArray,
        nw: FloatArray,
        layout: SensitivityLayout,
    ) -> TenorResult:
        factors = np.sqrt(correlations)
        factor = float(np.dot(nw, factors))
        corr = factor * factor

        # Rows are tenors, columns are block entries
        stacked = np.vstack([res.block.values for res in results])
        grad_weight = nw / factors
        cross_weight = -0.5 * nw / (correlations * factors)

        out = np.empty(layout.size)
        for i in range(layout.n_names):
            k = layout.curve_lengths[i]
            grads = stacked[:, layout.gradient_slice(i)]
            hess = stacked[:, layout.hessian_slice(i)]

            tmp = grad_weight @ grads
            out[layout.gradient_slice(i)] = factor * tmp

            rows, cols = np.tril_indices(k)
            out[layout.hessian_slice(i)] = 0.5 * tmp[rows] * tmp[cols] + factor * (
                cross_weight @ (grads[:, rows] * grads[:, cols]) + grad_weight @ hess
            )

            jumps = stacked[:, layout.default_jump_index(i)]
            factor_p = float(np.dot(nw, np.sqrt(correlations + jumps)))
            out[layout.default_jump_index(i)] = factor_p * factor_p - corr

            recoveries = stacked[:, layout.recovery_index(i)]
            out[layout.recovery_index(i)] = factor * float(np.dot(grad_weight, recoveries))

        logger.debug(
            "Blended %d tenors over %d names into correlation %.6f",
            len(results),
            layout.n_names,
            corr,
        )
        return TenorResult(correlation=corr, block=SensitivityBlock(layout, out))


def blend_tenor_results(
    results: Sequence[TenorResult],
    weights: Sequence[float] | FloatArray,
    curve_lengths: Sequence[int],
    config: BlendConfig | None = None,
) -> TenorResult:
    """
    Convenience function for a one-off tenor blend.

    Parameters
    ----------
    results : Sequence[TenorResult]
        Per-surface results
    weights : Sequence[float] | FloatArray
        Surface weights
    curve_lengths : Sequence[int]
        Survival curve ordinate count of each basket name
    config : BlendConfig | None
        Blend settings (defaults apply if None)

    Returns
    -------
    TenorResult
        Blended result
    """
    blender = TenorBlender(config=config or BlendConfig())
    return blender.blend(results, weights, SensitivityLayout(tuple(curve_lengths)))
