"""
Tests for tenor dates, the term interpolator and base correlation surfaces.
"""

from datetime import date, timedelta

import numpy as np
import pytest

from basecorr_core.config.models import (
    ExtrapMethod,
    InterpMethod,
    SensitivityConfig,
    TenorInterpolationConfig,
)
from basecorr_core.errors import ConfigurationError, PreconditionViolation
from basecorr_core.sensitivity import (
    SensitivityBlock,
    SensitivityLayout,
    TenorBlender,
    TenorResult,
)
from basecorr_core.term import (
    BaseCorrelationMixed,
    BaseCorrelationTermStructure,
    TenorDates,
    TermInterpolator,
    interpolate_tenor_result,
    tenor_to_relativedelta,
)


class TestTenorDates:
    """Tests for the validated tenor date sequence."""

    def test_from_tenors(self, tenor_dates: TenorDates) -> None:
        """Tenor strings roll the anchor date forward."""
        assert tenor_dates.dates == (
            date(2027, 6, 20),
            date(2029, 6, 20),
            date(2031, 6, 20),
            date(2034, 6, 20),
        )
        assert tenor_dates.names == ("3Y", "5Y", "7Y", "10Y")

    def test_not_ascending_raises(self) -> None:
        """Dates must be strictly increasing."""
        with pytest.raises(PreconditionViolation):
            TenorDates((date(2029, 6, 20), date(2027, 6, 20)))
        with pytest.raises(PreconditionViolation):
            TenorDates((date(2027, 6, 20), date(2027, 6, 20)))

    def test_empty_raises(self) -> None:
        """At least one date is required."""
        with pytest.raises(PreconditionViolation):
            TenorDates(())

    def test_names_length_mismatch(self) -> None:
        """Tenor names and dates must match in length."""
        with pytest.raises(PreconditionViolation):
            TenorDates((date(2027, 6, 20), date(2029, 6, 20)), names=("5Y",))

    def test_index_of(self, tenor_dates: TenorDates) -> None:
        """Exact matches are found, other dates are not."""
        assert tenor_dates.index_of(date(2031, 6, 20)) == 2
        assert tenor_dates.index_of(date(2031, 6, 21)) is None
        assert tenor_dates.index_of(date(2040, 1, 1)) is None

    def test_bracket(self, tenor_dates: TenorDates) -> None:
        """Bracket satisfies dates[low] <= d < dates[high]."""
        assert tenor_dates.bracket(date(2027, 6, 20)) == (0, 1)
        assert tenor_dates.bracket(date(2030, 1, 1)) == (1, 2)
        assert tenor_dates.bracket(date(2034, 6, 19)) == (2, 3)

    def test_bracket_outside_range(self, tenor_dates: TenorDates) -> None:
        """Dates outside [first, last) have no bracket."""
        with pytest.raises(PreconditionViolation):
            tenor_dates.bracket(date(2034, 6, 20))
        with pytest.raises(PreconditionViolation):
            tenor_dates.bracket(date(2020, 1, 1))

    def test_invalid_tenor_string(self) -> None:
        """Unknown tenor strings are rejected."""
        with pytest.raises(PreconditionViolation):
            tenor_to_relativedelta("5X")
        assert date(2024, 1, 31) + tenor_to_relativedelta("1M") == date(2024, 2, 29)


class TestTermInterpolator:
    """Tests for tenor selection and linear interpolation."""

    def test_single_tenor_identity(self, tenor_results: list[TenorResult]) -> None:
        """A single tenor is returned unchanged for any maturity."""
        single = TenorDates((date(2029, 6, 20),))
        result = TermInterpolator().interpolate(
            date(2026, 1, 1), single, lambda idx: tenor_results[idx]
        )
        assert result is tenor_results[0]

    def test_single_tenor_ignores_configuration(self, tenor_results) -> None:
        """Unsupported methods do not matter for a single tenor."""
        single = TenorDates((date(2029, 6, 20),))
        interp = TermInterpolator(
            config=TenorInterpolationConfig(interp_method=InterpMethod.CUBIC)
        )
        result = interp.interpolate(date(2026, 1, 1), single, lambda idx: tenor_results[idx])
        assert result is tenor_results[0]

    @pytest.mark.parametrize("idx", [0, 1, 2, 3])
    def test_exact_match_identity(self, tenor_dates, tenor_results, primitive, idx) -> None:
        """A maturity on a tenor date returns that tenor's result."""
        result = TermInterpolator().interpolate(tenor_dates[idx], tenor_dates, primitive)
        assert result is tenor_results[idx]
        assert primitive.calls == [idx]

    def test_left_extrapolation(self, tenor_dates, tenor_results, primitive) -> None:
        """Maturities before the first tenor use the first tenor."""
        result = TermInterpolator().interpolate(date(2025, 3, 20), tenor_dates, primitive)
        assert result is tenor_results[0]

    def test_right_extrapolation(self, tenor_dates, tenor_results, primitive) -> None:
        """Maturities after the last tenor use the last tenor."""
        result = TermInterpolator().interpolate(date(2040, 3, 20), tenor_dates, primitive)
        assert result is tenor_results[-1]

    def test_interpolated_block(self, tenor_dates, tenor_results, primitive) -> None:
        """Interior maturities blend the bracketing tenors linearly."""
        maturity = date(2030, 3, 1)
        result = TermInterpolator().interpolate(maturity, tenor_dates, primitive)

        low, high = tenor_results[1], tenor_results[2]
        h = (tenor_dates[2] - tenor_dates[1]).days
        a = (tenor_dates[2] - maturity).days / h
        b = 1.0 - a
        assert sorted(primitive.calls) == [1, 2]
        assert np.isclose(result.correlation, a * low.correlation + b * high.correlation)
        assert np.allclose(
            result.block.values, a * low.block.values + b * high.block.values
        )

    def test_endpoints(self, tenor_dates, tenor_results) -> None:
        """Near either bracket end the result approaches that tenor."""
        interp = TermInterpolator()
        low, high = tenor_results[1], tenor_results[2]
        h = (tenor_dates[2] - tenor_dates[1]).days

        weights = interp.weights(tenor_dates[1] + timedelta(days=1), tenor_dates)
        assert weights == pytest.approx({1: (h - 1) / h, 2: 1 / h})

        near_high = interp.interpolate(
            tenor_dates[2] - timedelta(days=1), tenor_dates, lambda idx: tenor_results[idx]
        )
        tol = abs(high.correlation - low.correlation) / h + 1e-15
        assert abs(near_high.correlation - high.correlation) <= tol

    def test_linearity_in_maturity(self, tenor_dates, primitive) -> None:
        """Interpolated correlation is affine in the maturity date."""
        interp = TermInterpolator()
        start = tenor_dates[1]
        days = [100, 250, 600]
        corr_start = primitive(1).correlation
        slopes = []
        for d in days:
            result = interp.interpolate(start + timedelta(days=d), tenor_dates, primitive)
            slopes.append((result.correlation - corr_start) / d)
        assert np.allclose(slopes, slopes[0], rtol=1e-10)

    def test_concrete_midpoint(self, make_result) -> None:
        """Correlations 0.10 and 0.20 interpolate to about 0.15 at mid-2022."""
        tenors = TenorDates((date(2020, 1, 1), date(2025, 1, 1)))
        results = [make_result(0.10), make_result(0.20)]
        weights = TermInterpolator().weights(date(2022, 7, 2), tenors)
        assert weights[0] == pytest.approx(0.5, abs=1e-3)
        assert weights[1] == pytest.approx(0.5, abs=1e-3)
        result = TermInterpolator().interpolate(
            date(2022, 7, 2), tenors, lambda idx: results[idx]
        )
        assert result.correlation == pytest.approx(0.15, abs=1e-4)

    @pytest.mark.parametrize(
        "interp_method, extrap_method",
        [
            (InterpMethod.CUBIC, ExtrapMethod.CONST),
            (InterpMethod.LINEAR, ExtrapMethod.SMOOTH),
            (InterpMethod.PCHIP, ExtrapMethod.NONE),
        ],
    )
    def test_unsupported_configuration_raises(
        self, tenor_dates, primitive, interp_method, extrap_method
    ) -> None:
        """Anything but linear/constant fails when a tenor must be chosen."""
        interp = TermInterpolator(
            config=TenorInterpolationConfig(
                interp_method=interp_method, extrap_method=extrap_method
            )
        )
        for maturity in [date(2025, 1, 1), date(2030, 1, 1), date(2040, 1, 1)]:
            with pytest.raises(ConfigurationError):
                interp.interpolate(maturity, tenor_dates, primitive)
        assert primitive.calls == []

    def test_unsupported_configuration_exact_match(self, tenor_dates, tenor_results, primitive) -> None:
        """Exact tenor matches are resolved before the configuration check."""
        interp = TermInterpolator(
            config=TenorInterpolationConfig(interp_method=InterpMethod.CUBIC)
        )
        assert interp.interpolate(tenor_dates[1], tenor_dates, primitive) is tenor_results[1]

    def test_layout_mismatch_raises(self, tenor_dates, tenor_results) -> None:
        """Bracketing tenors must share a layout."""
        odd = TenorResult(0.2, SensitivityBlock.zeros(SensitivityLayout((5,))))
        results = [tenor_results[0], odd, tenor_results[2], tenor_results[3]]
        with pytest.raises(PreconditionViolation):
            TermInterpolator().interpolate(
                date(2028, 6, 20), tenor_dates, lambda idx: results[idx]
            )

    def test_interpolate_correlation(self, tenor_dates) -> None:
        """Plain correlation levels follow the same policy."""
        interp = TermInterpolator()
        correlations = [0.1, 0.2, 0.3, 0.4]
        assert interp.interpolate_correlation(date(2020, 1, 1), tenor_dates, correlations) == 0.1
        assert interp.interpolate_correlation(date(2031, 6, 20), tenor_dates, correlations) == 0.3
        mid = interp.interpolate_correlation(date(2030, 6, 20), tenor_dates, correlations)
        assert 0.2 < mid < 0.3

    def test_interpolate_correlation_length_mismatch(self, tenor_dates) -> None:
        """One correlation per tenor is required."""
        with pytest.raises(PreconditionViolation):
            TermInterpolator().interpolate_correlation(date(2030, 1, 1), tenor_dates, [0.1])

    def test_convenience_function(self, tenor_dates, tenor_results, primitive) -> None:
        """interpolate_tenor_result accepts plain date sequences."""
        result = interpolate_tenor_result(date(2040, 1, 1), list(tenor_dates), primitive)
        assert result is tenor_results[-1]


class TestBaseCorrelationTermStructure:
    """Tests for a single base correlation surface."""

    def test_correlation_matches_derivatives(self, tenor_dates, primitive) -> None:
        """Correlation level equals the interpolated result's correlation."""
        surface = BaseCorrelationTermStructure(tenor_dates, primitive)
        maturity = date(2032, 12, 20)
        assert np.isclose(
            surface.correlation(maturity),
            surface.correlation_derivatives(maturity).correlation,
        )

    def test_tenor_out_of_range(self, tenor_dates, primitive) -> None:
        """Tenor indices are range checked."""
        surface = BaseCorrelationTermStructure(tenor_dates, primitive)
        with pytest.raises(PreconditionViolation):
            surface.tenor_result(4)

    def test_configuration_is_used(self, tenor_dates, primitive) -> None:
        """The surface's configuration reaches the interpolator."""
        config = SensitivityConfig(
            interpolation=TenorInterpolationConfig(extrap_method=ExtrapMethod.SMOOTH)
        )
        surface = BaseCorrelationTermStructure(tenor_dates, primitive, config)
        with pytest.raises(ConfigurationError):
            surface.correlation_derivatives(date(2030, 1, 1))


class TestBaseCorrelationMixed:
    """Tests for weighted mixtures of surfaces."""

    @pytest.fixture
    def surfaces(self, tenor_dates, make_result) -> list[BaseCorrelationTermStructure]:
        out = []
        for level in [0.15, 0.25]:
            results = [make_result(level + 0.02 * i) for i in range(len(tenor_dates))]
            out.append(
                BaseCorrelationTermStructure(tenor_dates, lambda idx, r=results: r[idx])
            )
        return out

    def test_correlation_weighted_average(self, surfaces) -> None:
        """Correlation level is the normalised weighted average."""
        mixed = BaseCorrelationMixed(
            surfaces, np.array([1.0, 3.0]), SensitivityLayout((2, 3, 1))
        )
        maturity = date(2030, 1, 1)
        expected = 0.25 * surfaces[0].correlation(maturity) + 0.75 * surfaces[1].correlation(
            maturity
        )
        assert np.isclose(mixed.correlation(maturity), expected)

    def test_derivatives_use_blender(self, surfaces, layout) -> None:
        """Derivatives are the tenor blend of each surface's result."""
        weights = np.array([0.4, 0.6])
        mixed = BaseCorrelationMixed(surfaces, weights, layout)
        maturity = date(2033, 1, 1)
        expected = TenorBlender().blend(
            [s.correlation_derivatives(maturity) for s in surfaces], weights, layout
        )
        result = mixed.correlation_derivatives(maturity)
        assert np.isclose(result.correlation, expected.correlation)
        assert np.allclose(result.block.values, expected.block.values)

    def test_weight_count_mismatch(self, surfaces, layout) -> None:
        """One weight per surface is required."""
        with pytest.raises(PreconditionViolation):
            BaseCorrelationMixed(surfaces, np.array([1.0]), layout)
