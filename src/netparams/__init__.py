"""netparams: Touchstone (.sNp) network-parameter reader.

Decodes Touchstone 1.0/2.0 text files into numpy arrays: a frequency series
and, per frequency, a complex square matrix of S/Y/Z/G/H parameters.

Public API
----------
- :func:`read_touchstone` - Parse a ``.s<N>p`` file into a :class:`Touchstone`
- :func:`read_touchstone_from_string` - Parse in-memory content
- :meth:`NetworkModel.from_touchstone` - Wrap a parse result for analysis
- :meth:`NetworkModel.from_file` - Read and wrap in one step

Example
-------
>>> from netparams import NetworkModel
>>> net = NetworkModel.from_file("amplifier.s2p")
>>> net.s.shape
(201, 2, 2)
"""

from __future__ import annotations

from .config import ParserConfig, TouchstoneOptionsSpec, load_parser_config, load_parser_config_from_file
from .errors import (
    EmptySeriesError,
    InvalidParameterKindError,
    InvalidUnitError,
    InvalidValueEncodingError,
    MalformedOptionsLineError,
    NotImplementedFormatError,
    NumericParseError,
    ShapeMismatchError,
    TextDecodeError,
    TouchstoneError,
    UnsupportedFormatError,
)
from .frequency import FrequencySeries, FrequencyUnit
from .network import NetworkModel, to_skrf_network
from .options import ParameterKind, TouchstoneOptions, ValueEncoding, decode_pairs, parse_option_line
from .touchstone import (
    ParsePhase,
    RowKind,
    Touchstone,
    TouchstoneParser,
    TouchstoneVersion,
    classify_row,
    rank_from_path,
    read_touchstone,
    read_touchstone_from_string,
)

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "ParserConfig",
    "TouchstoneOptionsSpec",
    "load_parser_config",
    "load_parser_config_from_file",
    # Errors
    "EmptySeriesError",
    "InvalidParameterKindError",
    "InvalidUnitError",
    "InvalidValueEncodingError",
    "MalformedOptionsLineError",
    "NotImplementedFormatError",
    "NumericParseError",
    "ShapeMismatchError",
    "TextDecodeError",
    "TouchstoneError",
    "UnsupportedFormatError",
    # Frequency
    "FrequencySeries",
    "FrequencyUnit",
    # Options
    "ParameterKind",
    "TouchstoneOptions",
    "ValueEncoding",
    "decode_pairs",
    "parse_option_line",
    # Parser
    "ParsePhase",
    "RowKind",
    "Touchstone",
    "TouchstoneParser",
    "TouchstoneVersion",
    "classify_row",
    "rank_from_path",
    "read_touchstone",
    "read_touchstone_from_string",
    # Network
    "NetworkModel",
    "to_skrf_network",
]
