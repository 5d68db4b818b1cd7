"""
Reporting module for sensitivity inspection and export.

Provides:
- DataFrame formatters for sensitivity blocks
- CSV report of a block
"""

from basecorr_core.reporting.export import create_sensitivity_report
from basecorr_core.reporting.tables import (
    create_block_table,
    create_gradient_table,
    create_name_summary_table,
)

__all__ = [
    # Tables
    "create_block_table",
    "create_gradient_table",
    "create_name_summary_table",
    # Export
    "create_sensitivity_report",
]
