"""Tests for frequency units and frequency series."""

from __future__ import annotations

import dataclasses
import math

import numpy as np
import pytest

from netparams import EmptySeriesError, FrequencySeries, FrequencyUnit, InvalidUnitError


class TestFrequencyUnit:
    """Tests for FrequencyUnit parsing and scaling."""

    @pytest.mark.parametrize(
        ("token", "expected"),
        [
            ("hz", FrequencyUnit.HZ),
            ("kHz", FrequencyUnit.KHZ),
            ("MHZ", FrequencyUnit.MHZ),
            ("GHz", FrequencyUnit.GHZ),
            ("thz", FrequencyUnit.THZ),
        ],
    )
    def test_parse_is_case_insensitive(self, token: str, expected: FrequencyUnit) -> None:
        """Unit tokens match regardless of case."""
        assert FrequencyUnit.parse(token) is expected

    @pytest.mark.parametrize("token", ["", "ghzz", "phz", "hertz", "g"])
    def test_parse_rejects_unknown(self, token: str) -> None:
        """Unknown tokens raise InvalidUnitError."""
        with pytest.raises(InvalidUnitError):
            FrequencyUnit.parse(token)

    def test_invalid_unit_is_value_error(self) -> None:
        """InvalidUnitError can be caught as ValueError."""
        with pytest.raises(ValueError, match="Unknown frequency unit"):
            FrequencyUnit.parse("xhz")

    @pytest.mark.parametrize(
        ("unit", "factor"),
        [
            (FrequencyUnit.HZ, 1.0),
            (FrequencyUnit.KHZ, 1e3),
            (FrequencyUnit.MHZ, 1e6),
            (FrequencyUnit.GHZ, 1e9),
            (FrequencyUnit.THZ, 1e12),
        ],
    )
    def test_scale_factor(self, unit: FrequencyUnit, factor: float) -> None:
        """scale multiplies by the unit's power of ten."""
        assert unit.scale(1.0) == factor
        assert unit.multiplier == factor

    @pytest.mark.parametrize("unit", list(FrequencyUnit))
    @pytest.mark.parametrize(("k", "x"), [(2.0, 1.5), (-3.0, 0.25), (10.0, 7.0)])
    def test_scale_is_linear(self, unit: FrequencyUnit, k: float, x: float) -> None:
        """scale(k*x) == k*scale(x)."""
        assert math.isclose(unit.scale(k * x), k * unit.scale(x), rel_tol=1e-12)

    def test_scale_accepts_arrays(self) -> None:
        """scale works element-wise on numpy arrays."""
        out = FrequencyUnit.MHZ.scale(np.array([1.0, 2.5]))
        np.testing.assert_allclose(out, [1e6, 2.5e6])


class TestFrequencySeriesFromSamples:
    """Tests for FrequencySeries.from_samples."""

    def test_adopts_values_in_order(self) -> None:
        """Samples keep insertion order; bounds are first and last."""
        series = FrequencySeries.from_samples([3.0, 1.0, 2.0])
        np.testing.assert_array_equal(series.f, [3.0, 1.0, 2.0])
        assert series.start == 3.0
        assert series.stop == 2.0
        assert series.count == 3
        assert len(series) == 3

    def test_empty_rejected(self) -> None:
        """Zero samples raise EmptySeriesError."""
        with pytest.raises(EmptySeriesError):
            FrequencySeries.from_samples([])

    def test_array_is_read_only(self) -> None:
        """The backing array cannot be modified in place."""
        series = FrequencySeries.from_samples([1.0, 2.0])
        with pytest.raises(ValueError):
            series.f[0] = 5.0

    def test_source_list_is_copied(self) -> None:
        """Mutating the input afterwards does not affect the series."""
        values = np.array([1.0, 2.0])
        series = FrequencySeries.from_samples(values)
        values[0] = 9.0
        assert series.f[0] == 1.0

    def test_frozen(self) -> None:
        """Fields cannot be reassigned."""
        series = FrequencySeries.from_samples([1.0])
        with pytest.raises(dataclasses.FrozenInstanceError):
            series.count = 2  # type: ignore[misc]


class TestFrequencySeriesGenerate:
    """Tests for FrequencySeries.generate."""

    def test_linspace_hz(self) -> None:
        """Six points from 0 to 5 Hz are 0, 1, ..., 5."""
        series = FrequencySeries.generate(0.0, 5.0, 6, FrequencyUnit.HZ)
        np.testing.assert_allclose(series.f, [0.0, 1.0, 2.0, 3.0, 4.0, 5.0])
        assert series.start == 0.0
        assert series.stop == 5.0
        assert series.count == 6

    def test_unit_applied(self) -> None:
        """Bounds given in GHz are stored in Hz."""
        series = FrequencySeries.generate(1.0, 3.0, 3, FrequencyUnit.GHZ)
        np.testing.assert_allclose(series.f, [1e9, 2e9, 3e9])
        assert series.start == 1e9
        assert series.stop == 3e9

    @pytest.mark.parametrize("unit", list(FrequencyUnit))
    def test_single_sample_equals_scaled_start(self, unit: FrequencyUnit) -> None:
        """count=1 yields exactly [unit.scale(start)]."""
        series = FrequencySeries.generate(2.5, 7.0, 1, unit)
        assert series.count == 1
        assert series.f.tolist() == [unit.scale(2.5)]

    def test_zero_count_is_empty(self) -> None:
        """count=0 yields an empty series."""
        series = FrequencySeries.generate(1.0, 2.0, 0)
        assert series.count == 0
        assert series.f.shape == (0,)

    def test_default_unit_is_hz(self) -> None:
        """Without a unit the bounds are taken as Hz."""
        series = FrequencySeries.generate(10.0, 20.0, 2)
        np.testing.assert_allclose(series.f, [10.0, 20.0])

    @pytest.mark.parametrize(
        ("start", "stop"),
        [(float("nan"), 1.0), (0.0, float("inf")), (float("-inf"), 0.0)],
    )
    def test_non_finite_bounds_rejected(self, start: float, stop: float) -> None:
        """NaN and Inf bounds raise ValueError."""
        with pytest.raises(ValueError, match="finite"):
            FrequencySeries.generate(start, stop, 3)

    def test_negative_count_rejected(self) -> None:
        """A negative count raises ValueError."""
        with pytest.raises(ValueError, match="non-negative"):
            FrequencySeries.generate(0.0, 1.0, -1)

    def test_equality(self) -> None:
        """Series with equal samples and bounds compare equal."""
        a = FrequencySeries.generate(1.0, 2.0, 3, FrequencyUnit.GHZ)
        b = FrequencySeries.generate(1e3, 2e3, 3, FrequencyUnit.MHZ)
        assert a == b
        assert a != FrequencySeries.generate(1.0, 2.0, 4, FrequencyUnit.GHZ)
