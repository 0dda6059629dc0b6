"""Touchstone option line (``# GHz S MA R 50``) decoding.

The option line declares the frequency unit, the network parameter kind,
how each value pair is encoded and the reference resistance. Any field the
line omits keeps the Touchstone default (GHz, S, MA, 50 ohm).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum

import numpy as np
from numpy.typing import NDArray

from .errors import InvalidParameterKindError, InvalidValueEncodingError, MalformedOptionsLineError
from .frequency import FrequencyUnit

logger = logging.getLogger(__name__)

ComplexArray = NDArray[np.complex128]


class ParameterKind(Enum):
    """Network parameter type."""

    S = "S"  # scattering
    Y = "Y"  # admittance
    Z = "Z"  # impedance
    G = "G"  # inverse hybrid
    H = "H"  # hybrid

    @classmethod
    def parse(cls, token: str) -> ParameterKind:
        """Parse a parameter kind token case-insensitively."""
        try:
            return cls(token.strip().upper())
        except ValueError as exc:
            raise InvalidParameterKindError(f"Unknown parameter kind: {token!r}") from exc


class ValueEncoding(Enum):
    """Encoding of each value pair in the data section."""

    DB = "DB"  # dB magnitude, angle in degrees
    MA = "MA"  # linear magnitude, angle in degrees
    RI = "RI"  # real, imaginary

    @classmethod
    def parse(cls, token: str) -> ValueEncoding:
        """Parse a value encoding token case-insensitively."""
        try:
            return cls(token.strip().upper())
        except ValueError as exc:
            raise InvalidValueEncodingError(f"Unknown value encoding: {token!r}") from exc


@dataclass(frozen=True, slots=True)
class TouchstoneOptions:
    """Decoded contents of the option line.

    Attributes:
        unit: Unit of the frequency column.
        parameter_kind: Type of network parameters stored.
        value_encoding: How each value pair is encoded.
        resistance: Reference resistance in ohms.
    """

    unit: FrequencyUnit = FrequencyUnit.GHZ
    parameter_kind: ParameterKind = ParameterKind.S
    value_encoding: ValueEncoding = ValueEncoding.MA
    resistance: float = 50.0

    def __str__(self) -> str:
        return (
            f"# {self.unit.value} {self.parameter_kind.value} "
            f"{self.value_encoding.value} R {self.resistance:g}"
        )


_ENCODING_TOKENS = frozenset({"db", "ma", "ri"})
_KIND_TOKENS = frozenset({"s", "y", "z", "g", "h"})


def parse_option_line(line: str, options: TouchstoneOptions | None = None) -> TouchstoneOptions:
    """Decode an option line.

    Tokens are examined positionally after the leading ``#`` token is dropped,
    so ``#GHz`` style lines (no space after the marker) lose their first
    field, the same as every other reader of this grammar. Tokens that match
    no category are ignored to tolerate vendor extensions.

    Args:
        line: The raw option line, including the ``#`` marker.
        options: Starting values; defaults to the Touchstone defaults.

    Returns:
        A new TouchstoneOptions with the line's fields applied.

    Raises:
        InvalidUnitError: If a token containing ``hz`` is not a valid unit.
        MalformedOptionsLineError: If ``R`` is not followed by a number.
    """
    opts = options if options is not None else TouchstoneOptions()
    tokens = line.lower().split()[1:]

    for index, token in enumerate(tokens):
        if "hz" in token:
            opts = replace(opts, unit=FrequencyUnit.parse(token))
        elif len(token) == 2 and token in _ENCODING_TOKENS:
            opts = replace(opts, value_encoding=ValueEncoding.parse(token))
        elif len(token) == 1 and token in _KIND_TOKENS:
            opts = replace(opts, parameter_kind=ParameterKind.parse(token))
        elif token == "r":
            if index + 1 >= len(tokens):
                raise MalformedOptionsLineError("Option line ends after 'R' without a resistance")
            try:
                resistance = float(tokens[index + 1])
            except ValueError as exc:
                raise MalformedOptionsLineError(
                    f"Reference resistance is not numeric: {tokens[index + 1]!r}"
                ) from exc
            opts = replace(opts, resistance=resistance)
        else:
            logger.debug("Ignoring option token %r", token)

    return opts


def decode_pairs(raw: ComplexArray, encoding: ValueEncoding) -> ComplexArray:
    """Convert raw ``complex(a, b)`` pairs to true complex values.

    The parser stores each value pair verbatim as ``a + jb``. This applies
    the option line's encoding: RI is returned as-is, MA treats ``a`` as a
    linear magnitude and DB as ``20*log10`` magnitude, with ``b`` an angle
    in degrees for both.
    """
    raw = np.asarray(raw, dtype=np.complex128)
    if encoding == ValueEncoding.RI:
        return raw.copy()

    angle = np.exp(1j * np.radians(raw.imag))
    if encoding == ValueEncoding.MA:
        return raw.real * angle
    if encoding == ValueEncoding.DB:
        return 10.0 ** (raw.real / 20.0) * angle
    raise InvalidValueEncodingError(f"Unknown value encoding: {encoding!r}")
