"""
Result of a correlation derivative computation for one tenor.
"""

import math
from dataclasses import dataclass

from basecorr_core.sensitivity.layout import SensitivityBlock, SensitivityLayout


@dataclass(frozen=True)
class TenorResult:
    """
    Correlation and packed derivatives produced for a single tenor.

    Attributes
    ----------
    correlation : float
        Implied base correlation (expected in [0, 1], not enforced)
    block : SensitivityBlock
        Derivatives of the correlation for every basket name
    """

    correlation: float
    block: SensitivityBlock

    @property
    def layout(self) -> SensitivityLayout:
        """Layout of the sensitivity block."""
        return self.block.layout

    @property
    def factor(self) -> float:
        """Factor loading sqrt(correlation)."""
        return math.sqrt(self.correlation)
