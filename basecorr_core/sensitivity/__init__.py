"""
Sensitivity blocks and the tenor blender.

Provides:
- Packed, length-checked sensitivity blocks and their layout
- Per-tenor results (correlation + block)
- Square-root-weighted blending of several tenor results
"""

from basecorr_core.sensitivity.blender import TenorBlender, blend_tenor_results
from basecorr_core.sensitivity.layout import SensitivityBlock, SensitivityLayout
from basecorr_core.sensitivity.result import TenorResult

__all__ = [
    "SensitivityLayout",
    "SensitivityBlock",
    "TenorResult",
    "TenorBlender",
    "blend_tenor_results",
]
