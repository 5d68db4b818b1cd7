"""
Tenor term structure handling.

Provides validated tenor dates, the tenor interpolator and base correlation
term structures (single and mixed).
"""

from basecorr_core.term.dates import TenorDates, tenor_to_relativedelta
from basecorr_core.term.interpolator import TermInterpolator, interpolate_tenor_result
from basecorr_core.term.structure import BaseCorrelationMixed, BaseCorrelationTermStructure

__all__ = [
    "TenorDates",
    "tenor_to_relativedelta",
    "TermInterpolator",
    "interpolate_tenor_result",
    "BaseCorrelationTermStructure",
    "BaseCorrelationMixed",
]
