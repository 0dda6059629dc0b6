"""Frequency units and frequency sample series.

All frequency arrays handed out by this package are float64 numpy arrays.
Scaling to Hz happens through :meth:`FrequencyUnit.scale`; the parser keeps
raw file values and :class:`~netparams.network.NetworkModel` applies the
file's unit when it builds its series.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .errors import EmptySeriesError, InvalidUnitError

FloatArray = NDArray[np.float64]


class FrequencyUnit(Enum):
    """Frequency unit specifier in Touchstone files."""

    HZ = "Hz"
    KHZ = "kHz"
    MHZ = "MHz"
    GHZ = "GHz"
    THZ = "THz"

    @classmethod
    def parse(cls, token: str) -> FrequencyUnit:
        """Parse a unit token case-insensitively.

        Raises:
            InvalidUnitError: If the token is not a known unit.
        """
        unit = _UNITS_BY_TOKEN.get(token.strip().lower())
        if unit is None:
            raise InvalidUnitError(f"Unknown frequency unit: {token!r}")
        return unit

    @property
    def multiplier(self) -> float:
        """Return the multiplier to convert to Hz."""
        return _MULTIPLIERS[self]

    def scale(self, value: float | FloatArray) -> float | FloatArray:
        """Convert a value expressed in this unit to Hz."""
        return value * self.multiplier


_MULTIPLIERS: dict[FrequencyUnit, float] = {
    FrequencyUnit.HZ: 1.0,
    FrequencyUnit.KHZ: 1e3,
    FrequencyUnit.MHZ: 1e6,
    FrequencyUnit.GHZ: 1e9,
    FrequencyUnit.THZ: 1e12,
}

_UNITS_BY_TOKEN: dict[str, FrequencyUnit] = {unit.value.lower(): unit for unit in FrequencyUnit}


@dataclass(frozen=True, slots=True, eq=False)
class FrequencySeries:
    """Ordered frequency samples with cached bounds.

    Samples are not required to be monotonic. The backing array is marked
    read-only so the series cannot be mutated through ``f``.

    Attributes:
        f: 1D float64 array of samples.
        start: First sample (or requested lower bound for generated series).
        stop: Last sample (or requested upper bound for generated series).
        count: Number of samples.
    """

    f: FloatArray
    start: float
    stop: float
    count: int

    @classmethod
    def from_samples(cls, values: Sequence[float] | ArrayLike) -> FrequencySeries:
        """Adopt an externally supplied, non-empty sequence of samples.

        Raises:
            EmptySeriesError: If ``values`` has no elements.
        """
        f = np.array(values, dtype=np.float64).reshape(-1)
        if f.size == 0:
            raise EmptySeriesError("Frequency series requires at least one sample")
        f.flags.writeable = False
        return cls(f=f, start=float(f[0]), stop=float(f[-1]), count=int(f.size))

    @classmethod
    def generate(
        cls,
        start: float,
        stop: float,
        count: int,
        unit: FrequencyUnit = FrequencyUnit.HZ,
    ) -> FrequencySeries:
        """Generate ``count`` evenly spaced samples, inclusive of both bounds.

        ``start`` and ``stop`` are given in ``unit`` and stored in Hz.
        ``count == 1`` yields ``[start]``; ``count == 0`` yields an empty series.

        Raises:
            ValueError: If a bound is NaN/Inf or ``count`` is negative.
        """
        if not (math.isfinite(start) and math.isfinite(stop)):
            raise ValueError(f"Frequency bounds must be finite, got start={start!r}, stop={stop!r}")
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")

        start_hz = float(unit.scale(start))
        stop_hz = float(unit.scale(stop))
        f = np.linspace(start_hz, stop_hz, int(count), dtype=np.float64)
        f.flags.writeable = False
        return cls(f=f, start=start_hz, stop=stop_hz, count=int(count))

    def __len__(self) -> int:
        return self.count

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FrequencySeries):
            return NotImplemented
        return (
            self.start == other.start
            and self.stop == other.stop
            and self.count == other.count
            and np.array_equal(self.f, other.f)
        )
