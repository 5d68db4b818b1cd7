#!/usr/bin/env python3
"""
Base Correlation Sensitivities - Demo Script

This script demonstrates the sensitivity aggregation workflow:
1. Load the sensitivity configuration
2. Define a basket layout and two index term structures
3. Interpolate correlation derivatives at a tranche maturity
4. Blend the two surfaces into one result
5. Export gradient and per-name tables

The per-tenor derivatives are synthetic here; in practice they come from a
semi-analytic basket model.

Usage:
    python examples/run_demo.py
"""

import logging
from datetime import date
from pathlib import Path

import numpy as np

from basecorr_core import (
    BaseCorrelationMixed,
    BaseCorrelationTermStructure,
    SensitivityBlock,
    SensitivityLayout,
    TenorDates,
    TenorResult,
    create_name_summary_table,
    create_sensitivity_report,
    load_sensitivity_config,
)


def synthetic_surface(
    layout: SensitivityLayout,
    correlations: list[float],
    seed: int,
) -> list[TenorResult]:
    """Per-tenor results with random but well-formed derivatives."""
    rng = np.random.default_rng(seed)
    results = []
    for corr in correlations:
        gradients, hessians = [], []
        for k in layout.curve_lengths:
            gradients.append(rng.normal(scale=0.02, size=k))
            m = rng.normal(scale=0.01, size=(k, k))
            hessians.append(0.5 * (m + m.T))
        block = SensitivityBlock.from_components(
            layout,
            gradients=gradients,
            hessians=hessians,
            default_jumps=rng.uniform(0.0, 0.02, size=layout.n_names),
            recovery_derivatives=rng.normal(scale=0.01, size=layout.n_names),
        )
        results.append(TenorResult(correlation=corr, block=block))
    return results


def main() -> None:
    """Run the sensitivity demo."""
    logging.basicConfig(level=logging.INFO)

    print("=" * 60)
    print("Base Correlation Sensitivities - Demo")
    print("=" * 60)
    print()

    # =========================================================================
    # 1. Configuration
    # =========================================================================
    print("1. Loading configuration...")

    config = load_sensitivity_config(Path(__file__).parent / "sensitivity.yaml")

    print(f"   Tenor interpolation: {config.interpolation.interp_method.value}")
    print(f"   Tenor extrapolation: {config.interpolation.extrap_method.value}")
    print(f"   Singularity policy: {config.blend.singularity_policy}")
    print()

    # =========================================================================
    # 2. Basket and term structures
    # =========================================================================
    print("2. Building term structures...")

    names = ["ACME", "GLOBEX", "INITECH", "UMBRELLA"]
    layout = SensitivityLayout((4, 4, 6, 4))
    tenors = TenorDates.from_tenors(date(2024, 6, 20), ["3Y", "5Y", "7Y", "10Y"])

    series_a = synthetic_surface(layout, [0.18, 0.22, 0.26, 0.31], seed=1)
    series_b = synthetic_surface(layout, [0.20, 0.25, 0.28, 0.33], seed=2)

    surface_a = BaseCorrelationTermStructure(tenors, lambda idx: series_a[idx], config)
    surface_b = BaseCorrelationTermStructure(tenors, lambda idx: series_b[idx], config)

    print(f"   Names: {layout.n_names}, block length: {layout.size}")
    print(f"   Tenors: {', '.join(tenors.names or ())}")
    print()

    # =========================================================================
    # 3. Interpolate at the tranche maturity
    # =========================================================================
    print("3. Interpolating at tranche maturity...")

    maturity = date(2030, 12, 20)
    result_a = surface_a.correlation_derivatives(maturity)
    result_b = surface_b.correlation_derivatives(maturity)

    print(f"   Maturity: {maturity}")
    print(f"   Series A correlation: {result_a.correlation:.4f}")
    print(f"   Series B correlation: {result_b.correlation:.4f}")
    print()

    # =========================================================================
    # 4. Blend surfaces
    # =========================================================================
    print("4. Blending surfaces...")

    mixed = BaseCorrelationMixed(
        [surface_a, surface_b], np.array([0.6, 0.4]), layout, config
    )
    blended = mixed.correlation_derivatives(maturity)

    print(f"   Blended correlation: {blended.correlation:.4f}")
    print(f"   Average correlation: {mixed.correlation(maturity):.4f}")
    print()
    print(create_name_summary_table(blended.block, names).to_string(index=False))
    print()

    # =========================================================================
    # 5. Export Results
    # =========================================================================
    print("5. Exporting results...")

    output_dir = Path(__file__).parent / "outputs"
    created = create_sensitivity_report(
        blended.block, output_dir, names, prefix="demo"
    )

    for path in created.values():
        print(f"   Saved: {path}")

    print()
    print("=" * 60)
    print("Demo complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
