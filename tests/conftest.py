"""
Pytest fixtures for base correlation sensitivity testing.

Provides reusable layouts, sensitivity blocks, tenor dates and per-tenor
derivative functions.
"""

from collections.abc import Callable
from datetime import date

import numpy as np
import pytest

from basecorr_core.sensitivity import SensitivityBlock, SensitivityLayout, TenorResult
from basecorr_core.term import TenorDates


def random_block(
    layout: SensitivityLayout, rng: np.random.Generator, scale: float = 0.01
) -> SensitivityBlock:
    """Block with small random gradients, symmetric Hessians and jumps."""
    gradients = []
    hessians = []
    for k in layout.curve_lengths:
        gradients.append(rng.normal(scale=scale, size=k))
        m = rng.normal(scale=scale, size=(k, k))
        hessians.append(0.5 * (m + m.T))
    return SensitivityBlock.from_components(
        layout,
        gradients=gradients,
        hessians=hessians,
        default_jumps=rng.uniform(0.0, scale, size=layout.n_names),
        recovery_derivatives=rng.normal(scale=scale, size=layout.n_names),
    )


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded random generator."""
    return np.random.default_rng(42)


@pytest.fixture
def layout() -> SensitivityLayout:
    """Three names with uneven survival curve lengths."""
    return SensitivityLayout((2, 3, 1))


@pytest.fixture
def make_result(
    layout: SensitivityLayout, rng: np.random.Generator
) -> Callable[[float], TenorResult]:
    """Factory of tenor results with random blocks on the standard layout."""

    def _make(correlation: float) -> TenorResult:
        return TenorResult(correlation=correlation, block=random_block(layout, rng))

    return _make


@pytest.fixture
def tenor_dates() -> TenorDates:
    """Standard index tenors 3Y, 5Y, 7Y, 10Y."""
    return TenorDates.from_tenors(date(2024, 6, 20), ["3Y", "5Y", "7Y", "10Y"])


@pytest.fixture
def tenor_results(
    tenor_dates: TenorDates, make_result: Callable[[float], TenorResult]
) -> list[TenorResult]:
    """One result per standard tenor with increasing correlation."""
    return [make_result(c) for c in np.linspace(0.15, 0.30, len(tenor_dates))]


class RecordingPrimitive:
    """Per-tenor derivative function that records the tenors requested."""

    def __init__(self, results: list[TenorResult]) -> None:
        self.results = results
        self.calls: list[int] = []

    def __call__(self, idx: int) -> TenorResult:
        self.calls.append(idx)
        return self.results[idx]


@pytest.fixture
def primitive(tenor_results: list[TenorResult]) -> RecordingPrimitive:
    """Recording primitive over the standard tenor results."""
    return RecordingPrimitive(tenor_results)

