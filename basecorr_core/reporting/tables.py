"""
Table generation utilities for sensitivity reporting.

Creates pandas DataFrames from packed sensitivity blocks for display and
export.
"""

from collections.abc import Sequence

import numpy as np
import pandas as pd

from basecorr_core.errors import PreconditionViolation
from basecorr_core.sensitivity.layout import SensitivityBlock


def _name_labels(block: SensitivityBlock, names: Sequence[str] | None) -> list[str]:
    if names is None:
        return [f"Name {i}" for i in range(block.layout.n_names)]
    if len(names) != block.layout.n_names:
        raise PreconditionViolation(
            f"Expected {block.layout.n_names} names, got {len(names)}"
        )
    return list(names)


def create_gradient_table(
    block: SensitivityBlock,
    names: Sequence[str] | None = None,
) -> pd.DataFrame:
    """
    Create a long table of correlation gradients.

    Parameters
    ----------
    block : SensitivityBlock
        Sensitivity block to tabulate
    names : Sequence[str] | None
        Basket name labels (defaults to "Name i")

    Returns
    -------
    pd.DataFrame
        One row per name and curve ordinate with columns
        Name, Ordinate, Gradient, Hessian Diagonal
    """
    labels = _name_labels(block, names)

    rows = []
    for i, label in enumerate(labels):
        grad = block.gradient(i)
        diag = np.diag(block.hessian(i))
        for j in range(len(grad)):
            rows.append(
                {
                    "Name": label,
                    "Ordinate": j,
                    "Gradient": grad[j],
                    "Hessian Diagonal": diag[j],
                }
            )

    return pd.DataFrame(rows, columns=["Name", "Ordinate", "Gradient", "Hessian Diagonal"])


def create_name_summary_table(
    block: SensitivityBlock,
    names: Sequence[str] | None = None,
) -> pd.DataFrame:
    """
    Create a per-name summary of a sensitivity block.

    Parameters
    ----------
    block : SensitivityBlock
        Sensitivity block to summarise
    names : Sequence[str] | None
        Basket name labels (defaults to "Name i")

    Returns
    -------
    pd.DataFrame
        Columns: Name, Ordinates, Gradient Norm, Default Jump,
        Recovery Derivative
    """
    labels = _name_labels(block, names)

    data = {
        "Name": labels,
        "Ordinates": list(block.layout.curve_lengths),
        "Gradient Norm": [
            float(np.linalg.norm(block.gradient(i))) for i in range(len(labels))
        ],
        "Default Jump": [block.default_jump(i) for i in range(len(labels))],
        "Recovery Derivative": [
            block.recovery_derivative(i) for i in range(len(labels))
        ],
    }

    return pd.DataFrame(data)


def create_block_table(
    block: SensitivityBlock,
    names: Sequence[str] | None = None,
) -> pd.DataFrame:
    """
    Create a table of every packed entry of a sensitivity block.

    Parameters
    ----------
    block : SensitivityBlock
        Sensitivity block to tabulate
    names : Sequence[str] | None
        Basket name labels (defaults to "Name i")

    Returns
    -------
    pd.DataFrame
        One row per block entry, in block order, with columns
        Name, Position, Component, Value
    """
    labels = _name_labels(block, names)
    layout = block.layout

    rows = []
    for i, label in enumerate(labels):
        grad_start = layout.gradient_slice(i).start
        hess_start = layout.hessian_slice(i).start
        entries = [
            (grad_start + j, f"gradient[{j}]") for j in range(layout.curve_length(i))
        ]
        for j in range(layout.curve_length(i)):
            for k in range(j + 1):
                entries.append(
                    (hess_start + layout.packed_index(j, k), f"hessian[{j},{k}]")
                )
        entries.append((layout.default_jump_index(i), "default_jump"))
        entries.append((layout.recovery_index(i), "recovery"))

        for position, component in entries:
            rows.append(
                {
                    "Name": label,
                    "Position": position,
                    "Component": component,
                    "Value": block.values[position],
                }
            )

    return pd.DataFrame(rows, columns=["Name", "Position", "Component", "Value"])
