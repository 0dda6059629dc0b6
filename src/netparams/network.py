"""Network model built from a parsed Touchstone file.

:class:`NetworkModel` is the final aggregate handed to RF tooling: a
frequency series in Hz, the raw complex parameter tensor and the reference
impedances. No parameter-kind conversion (S/Y/Z/G/H) happens here.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from .config import ParserConfig
from .frequency import FrequencySeries
from .options import ParameterKind, TouchstoneOptions, decode_pairs
from .touchstone import Touchstone, read_touchstone

if TYPE_CHECKING:
    import skrf

ComplexArray = NDArray[np.complex128]


@dataclass(frozen=True, slots=True, eq=False)
class NetworkModel:
    """Frequency-dependent network parameters.

    Attributes:
        frequency: Frequency samples in Hz.
        s: Raw value pairs as complex, shape (n_freq, rank, rank).
        z0: Reference impedance per frequency, shape (1, n_freq).
        options: Option line the data was recorded with.
        port_z0: Reference impedance per frequency and port, shape (n_freq, rank).
        name: Source file name.
    """

    frequency: FrequencySeries
    s: ComplexArray
    z0: ComplexArray
    options: TouchstoneOptions
    port_z0: ComplexArray
    name: str = ""

    @classmethod
    def from_touchstone(cls, result: Touchstone) -> NetworkModel:
        """Wrap a completed parse.

        Raises:
            EmptySeriesError: If the file held no frequency points.
        """
        frequency = FrequencySeries.from_samples(result.options.unit.scale(result.frequencies))
        n_freq = frequency.count
        resistance = complex(result.options.resistance, 0.0)
        z0 = np.full((1, n_freq), resistance, dtype=np.complex128)

        if result.reference is not None and len(result.reference) == result.rank:
            port_row = np.asarray(result.reference, dtype=np.complex128)
        else:
            port_row = np.full(result.rank, resistance, dtype=np.complex128)
        port_z0 = np.tile(port_row, (n_freq, 1))
        z0.flags.writeable = False
        port_z0.flags.writeable = False

        return cls(
            frequency=frequency,
            s=result.s_params,
            z0=z0,
            options=result.options,
            port_z0=port_z0,
            name=result.filename,
        )

    @classmethod
    def from_file(cls, path: str | Path, config: ParserConfig | None = None) -> NetworkModel:
        """Read a Touchstone file and wrap the result."""
        return cls.from_touchstone(read_touchstone(path, config=config))

    @property
    def rank(self) -> int:
        """Return the number of ports."""
        return int(self.s.shape[1])

    @property
    def f(self) -> NDArray[np.float64]:
        """Return the frequency samples in Hz."""
        return self.frequency.f

    def decoded_parameters(self) -> ComplexArray:
        """Return the tensor with the DB/MA/RI pair encoding applied."""
        return decode_pairs(self.s, self.options.value_encoding)


def to_skrf_network(model: NetworkModel) -> skrf.Network:
    """Convert a NetworkModel to a scikit-rf Network object.

    Raises:
        ValueError: If the model does not hold S-parameters.
        ImportError: If scikit-rf is not installed.
    """
    if model.options.parameter_kind is not ParameterKind.S:
        raise ValueError(f"Only S-parameter networks convert to scikit-rf, got {model.options.parameter_kind.value}")

    try:
        import skrf
    except ImportError as e:
        raise ImportError("scikit-rf is required. Install with: pip install scikit-rf") from e

    frequency = skrf.Frequency.from_f(np.asarray(model.f), unit="Hz")
    network = skrf.Network(
        frequency=frequency,
        s=model.decoded_parameters(),
        z0=np.array(model.port_z0),
        name=Path(model.name).stem if model.name else "netparams_network",
    )
    return network
