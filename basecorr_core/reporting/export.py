"""
CSV export of sensitivity blocks.
"""

from collections.abc import Sequence
from pathlib import Path

from basecorr_core.reporting.tables import (
    create_block_table,
    create_gradient_table,
    create_name_summary_table,
)
from basecorr_core.sensitivity.layout import SensitivityBlock


def create_sensitivity_report(
    block: SensitivityBlock,
    output_dir: str | Path,
    names: Sequence[str] | None = None,
    prefix: str = "sensitivities",
    float_format: str = "%.10g",
) -> dict[str, Path]:
    """
    Write the tables of a sensitivity block as CSV files.

    Three files are written to ``output_dir``:

    - ``{prefix}_gradients.csv``: one row per name and curve ordinate
    - ``{prefix}_names.csv``: per-name summary
    - ``{prefix}_block.csv``: every packed entry with its position

    Parameters
    ----------
    block : SensitivityBlock
        Block to export
    output_dir : str | Path
        Output directory, created if missing
    names : Sequence[str] | None
        Basket name labels (defaults to "Name i")
    prefix : str
        File name prefix
    float_format : str
        Format string for floats

    Returns
    -------
    dict[str, Path]
        Created file paths keyed by "gradients", "names" and "block"
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    tables = {
        "gradients": create_gradient_table(block, names),
        "names": create_name_summary_table(block, names),
        "block": create_block_table(block, names),
    }

    created_files = {}
    for key, df in tables.items():
        path = output_dir / f"{prefix}_{key}.csv"
        df.to_csv(path, index=False, float_format=float_format)
        created_files[key] = path

    return created_files
