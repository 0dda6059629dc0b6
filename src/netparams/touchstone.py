"""Touchstone (.sNp) file parsing.

This module reads Touchstone 1.0 and 2.0 text files into raw numeric arrays.
The parser is a single pass over physical lines with two phases:

- ``AWAITING_OPTIONS``: before the ``#`` option line. Any line carrying a
  ``!`` is a header comment and is stored, never parsed as data.
- ``PARSING_DATA``: after the option line. Whole-line comments are dropped
  and trailing ``! ...`` comments are stripped from data and keyword lines.

Each data row is classified purely by its token count (see
:func:`classify_row`). A row of ``2*rank + 1`` or ``2*rank**2 + 1`` numbers
opens a new frequency record; any other row continues the current record
with one more matrix row. Value pairs are stored verbatim as
``complex(a, b)``; :func:`~netparams.options.decode_pairs` applies the
option line's DB/MA/RI encoding.

The ``.ts`` alternate format is recognized but not supported.
"""

from __future__ import annotations

import io
import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import numpy as np
from numpy.typing import NDArray

from .config import ParserConfig
from .errors import (
    NotImplementedFormatError,
    NumericParseError,
    ShapeMismatchError,
    TextDecodeError,
    TouchstoneError,
    UnsupportedFormatError,
)
from .options import TouchstoneOptions, parse_option_line

logger = logging.getLogger(__name__)

ComplexArray = NDArray[np.complex128]
FloatArray = NDArray[np.float64]

_SNP_EXT_RE = re.compile(r"^s(\d+)p$", re.IGNORECASE)

# Keyword prefixes, lowercase.
_KW_VERSION = "[version]"
_KW_REFERENCE = "[reference]"
_KW_NUM_PORTS = "[number of ports]"
_KW_NUM_NOISE_FREQS = "[number of noise frequencies]"
_KW_NUM_FREQS = "[number of frequencies]"
_KW_NETWORK_DATA = "[network data]"
_KW_END = "[end]"


class TouchstoneVersion(Enum):
    """Touchstone file format version."""

    ONE = "1.0"
    TWO = "2.0"


class ParsePhase(Enum):
    """Parser phase."""

    AWAITING_OPTIONS = "awaiting_options"
    PARSING_DATA = "parsing_data"
    DONE = "done"


class RowKind(Enum):
    """Classification of a data row by token count."""

    PORT_ROW = "port_row"  # frequency + one matrix row
    FULL_MATRIX = "full_matrix"  # frequency + the whole matrix
    CONTINUATION = "continuation"  # next matrix row of the open record


def classify_row(token_count: int, rank: int) -> RowKind:
    """Classify a data row from its token count alone.

    Args:
        token_count: Number of whitespace-separated tokens on the row.
        rank: Matrix dimension (number of ports).

    Returns:
        PORT_ROW for ``2*rank + 1`` tokens, FULL_MATRIX for
        ``2*rank**2 + 1`` tokens, CONTINUATION otherwise. For ``rank == 1``
        both shapes coincide and the row is a PORT_ROW.
    """
    if token_count == 2 * rank + 1:
        return RowKind.PORT_ROW
    if token_count == 2 * rank * rank + 1:
        return RowKind.FULL_MATRIX
    return RowKind.CONTINUATION


def rank_from_path(path: str | Path) -> int:
    """Derive the matrix rank from a Touchstone file name.

    Raises:
        NotImplementedFormatError: For the ``.ts`` alternate format.
        UnsupportedFormatError: For any extension other than ``.s<N>p``.
    """
    ext = Path(path).suffix.lower().lstrip(".")
    if ext == "ts":
        raise NotImplementedFormatError(f"Touchstone .ts files are not supported: {Path(path).name}")
    match = _SNP_EXT_RE.match(ext)
    if not match or int(match.group(1)) < 1:
        raise UnsupportedFormatError(f"Invalid Touchstone extension: {Path(path).suffix!r}")
    return int(match.group(1))


@dataclass(frozen=True, slots=True)
class Touchstone:
    """Result of parsing one Touchstone file.

    Attributes:
        filename: Name of the parsed file (or a label for string input).
        rank: Matrix dimension derived from the extension.
        options: Decoded option line, or the defaults when absent.
        frequencies: 1D array of frequency values, in ``options.unit``.
        s_params: Raw value pairs as complex, shape (n_freq, rank, rank).
        version: Declared format version.
        comments: Header comments in file order, without the ``!`` marker.
        num_ports: Value of ``[Number of Ports]``, if present and valid.
        num_freq_points: Value of ``[Number of Frequencies]``.
        num_noise_freq_points: Value of ``[Number of Noise Frequencies]``.
        reference: Per-port reference impedances from ``[Reference]``.
        noise: Noise parameters; not parsed, always None.
    """

    filename: str
    rank: int
    options: TouchstoneOptions
    frequencies: FloatArray
    s_params: ComplexArray
    version: TouchstoneVersion = TouchstoneVersion.ONE
    comments: tuple[str, ...] = ()
    num_ports: int | None = None
    num_freq_points: int | None = None
    num_noise_freq_points: int | None = None
    reference: tuple[float, ...] | None = None
    noise: ComplexArray | None = None

    @property
    def n_frequencies(self) -> int:
        """Return the number of frequency points."""
        return int(self.frequencies.shape[0])

    def describe(self) -> str:
        """Return a multi-line summary of the parse result."""
        noise = "None" if self.noise is None else f"shape {self.noise.shape}"
        lines = [
            "Touchstone:",
            f"\tFilename: {self.filename}",
            f"\tVersion: {self.version.value}",
            f"\tOptions: {self.options}",
            f"\tNumber of Ports: {self.num_ports}",
            f"\tNumber of Frequency Points: {self.num_freq_points}",
            f"\tNumber of Noise Points: {self.num_noise_freq_points}",
            f"\tReference: {list(self.reference) if self.reference is not None else None}",
            f"\tRank: {self.rank}",
            f"\tS Parameters: shape {self.s_params.shape}",
            f"\tNoise: {noise}",
            f"\tComments: {list(self.comments)}",
        ]
        return "\n".join(lines)


@dataclass
class _ParseState:
    """Mutable accumulator used while lines are consumed."""

    phase: ParsePhase = ParsePhase.AWAITING_OPTIONS
    version: TouchstoneVersion = TouchstoneVersion.ONE
    comments: list[str] = field(default_factory=list)
    num_ports: int | None = None
    num_freq_points: int | None = None
    num_noise_freq_points: int | None = None
    reference: tuple[float, ...] | None = None
    options: TouchstoneOptions | None = None
    frequencies: list[float] = field(default_factory=list)
    records: list[list[complex]] = field(default_factory=list)


class TouchstoneParser:
    """Single-use line consumer for one Touchstone file.

    Args:
        rank: Matrix dimension (number of ports).
        filename: Label stored on the result and used in log messages.
        config: Parser settings; defaults to ``ParserConfig()``.
    """

    def __init__(self, rank: int, filename: str = "<string>", config: ParserConfig | None = None) -> None:
        if rank < 1:
            raise ValueError(f"rank must be >= 1, got {rank}")
        self.rank = rank
        self.filename = filename
        self.config = config if config is not None else ParserConfig()
        self._state = _ParseState()
        self._line_number = 0

    @property
    def phase(self) -> ParsePhase:
        """Current parser phase."""
        return self._state.phase

    def parse(self, lines: Iterable[str]) -> Touchstone:
        """Consume ``lines`` and return the completed result.

        Raises:
            TouchstoneError: Subclass describing the first structural problem.
        """
        if self._state.phase is ParsePhase.DONE:
            raise RuntimeError("TouchstoneParser instances are single-use")

        it = iter(lines)
        for raw in it:
            self._line_number += 1
            self._consume(raw, it)
            if self._state.phase is ParsePhase.DONE:
                break
        self._state.phase = ParsePhase.DONE
        return self._finish()

    # ------------------------------------------------------------------
    # Line dispatch
    # ------------------------------------------------------------------

    def _consume(self, raw: str, it: Iterator[str]) -> None:
        state = self._state
        line = raw.rstrip()
        if not line.strip():
            return

        if "!" in line:
            idx = line.index("!")
            if state.phase is ParsePhase.AWAITING_OPTIONS:
                # The whole line is header text, even an option line with a trailing comment.
                state.comments.append(line[idx + 1 :].strip())
                return
            if not line[:idx].strip():
                return
            line = line[:idx]

        line = line.strip()
        lowered = line.lower()

        if lowered.startswith("["):
            self._directive(line, lowered, it)
        elif lowered.startswith("#"):
            self._option_line(lowered)
        else:
            self._data_row(line)

    def _directive(self, line: str, lowered: str, it: Iterator[str]) -> None:
        state = self._state
        if lowered.startswith(_KW_VERSION):
            value = line[len(_KW_VERSION) :].strip()
            if value == "2.0":
                state.version = TouchstoneVersion.TWO
            logger.debug("%s: [Version] %s", self.filename, value or "<empty>")
        elif lowered.startswith(_KW_REFERENCE):
            inline = line[len(_KW_REFERENCE) :].strip()
            if inline:
                state.reference = self._parse_reference(inline)
            else:
                # The list is always on the very next physical line.
                nxt = next(it, None)
                self._line_number += 1
                if nxt is None:
                    logger.warning("%s: [Reference] at end of input has no values", self.filename)
                    return
                state.reference = self._parse_reference(nxt.split("!", 1)[0])
        elif lowered.startswith(_KW_NUM_PORTS):
            state.num_ports = self._optional_int(line[len(_KW_NUM_PORTS) :])
        elif lowered.startswith(_KW_NUM_NOISE_FREQS):
            state.num_noise_freq_points = self._optional_int(line[len(_KW_NUM_NOISE_FREQS) :])
        elif lowered.startswith(_KW_NUM_FREQS):
            state.num_freq_points = self._optional_int(line[len(_KW_NUM_FREQS) :])
        elif lowered.startswith(_KW_NETWORK_DATA):
            pass
        elif lowered.startswith(_KW_END):
            state.phase = ParsePhase.DONE
        else:
            logger.debug("%s: ignoring keyword line %d: %s", self.filename, self._line_number, line)

    def _option_line(self, lowered: str) -> None:
        state = self._state
        if state.options is not None:
            logger.debug("%s: ignoring repeated option line %d", self.filename, self._line_number)
            return
        try:
            state.options = parse_option_line(lowered)
        except TouchstoneError as exc:
            if exc.line_number is None:
                exc.line_number = self._line_number
            raise
        state.phase = ParsePhase.PARSING_DATA
        logger.debug("%s: options %s", self.filename, state.options)

    def _data_row(self, line: str) -> None:
        state = self._state
        tokens = line.split()
        values = self._parse_floats(tokens)
        kind = classify_row(len(values), self.rank)

        if kind is RowKind.CONTINUATION:
            if not state.records:
                raise ShapeMismatchError(
                    f"Data row with {len(values)} values does not start a frequency record "
                    f"(expected {2 * self.rank + 1} or {2 * self.rank**2 + 1} for rank {self.rank})",
                    line_number=self._line_number,
                )
            pairs = values
        else:
            state.frequencies.append(values[0])
            state.records.append([])
            pairs = values[1:]

        if len(pairs) % 2:
            raise ShapeMismatchError(
                f"Odd number of values ({len(pairs)}) cannot be paired into complex entries",
                line_number=self._line_number,
            )
        state.records[-1].extend(complex(a, b) for a, b in zip(pairs[::2], pairs[1::2]))

    # ------------------------------------------------------------------
    # Token helpers
    # ------------------------------------------------------------------

    def _parse_floats(self, tokens: list[str]) -> list[float]:
        try:
            return [float(t) for t in tokens]
        except ValueError as exc:
            raise NumericParseError(f"Invalid numeric token: {exc}", line_number=self._line_number) from exc

    def _parse_reference(self, text: str) -> tuple[float, ...]:
        return tuple(self._parse_floats(text.split()))

    def _optional_int(self, text: str) -> int | None:
        try:
            return int(text.strip())
        except ValueError:
            logger.debug("%s: unparseable count %r on line %d", self.filename, text.strip(), self._line_number)
            return None

    # ------------------------------------------------------------------
    # Finalization
    # ------------------------------------------------------------------

    def _finish(self) -> Touchstone:
        state = self._state
        rank = self.rank
        expected = rank * rank

        for index, record in enumerate(state.records):
            if len(record) != expected:
                raise ShapeMismatchError(
                    f"Frequency record {index} (f={state.frequencies[index]:g}) has {len(record)} "
                    f"values, expected {expected} for rank {rank}"
                )

        n_freq = len(state.frequencies)
        frequencies = np.array(state.frequencies, dtype=np.float64)
        s_params = np.array(state.records, dtype=np.complex128).reshape((n_freq, rank, rank))
        frequencies.flags.writeable = False
        s_params.flags.writeable = False

        self._check_declared_counts(n_freq)

        options = state.options if state.options is not None else self.config.default_options.to_options()
        logger.info("Parsed %s: rank %d, %d frequency points", self.filename, rank, n_freq)

        return Touchstone(
            filename=self.filename,
            rank=rank,
            options=options,
            frequencies=frequencies,
            s_params=s_params,
            version=state.version,
            comments=tuple(state.comments),
            num_ports=state.num_ports,
            num_freq_points=state.num_freq_points,
            num_noise_freq_points=state.num_noise_freq_points,
            reference=state.reference,
        )

    def _check_declared_counts(self, n_freq: int) -> None:
        state = self._state
        problems: list[str] = []
        if state.num_ports is not None and state.num_ports != self.rank:
            problems.append(f"[Number of Ports] is {state.num_ports} but extension implies {self.rank}")
        if state.num_freq_points is not None and state.num_freq_points != n_freq:
            problems.append(f"[Number of Frequencies] is {state.num_freq_points} but {n_freq} were read")

        for problem in problems:
            if self.config.strict_declared_counts:
                raise ShapeMismatchError(f"{self.filename}: {problem}")
            logger.warning("%s: %s", self.filename, problem)


def read_touchstone(file_path: str | Path, config: ParserConfig | None = None) -> Touchstone:
    """Read a Touchstone file.

    The extension is checked before the file is opened.

    Args:
        file_path: Path to a ``.s<N>p`` file.
        config: Parser settings.

    Raises:
        NotImplementedFormatError: For ``.ts`` files.
        UnsupportedFormatError: For any other non ``.s<N>p`` extension.
        FileNotFoundError: If the file does not exist.
        TextDecodeError: If the bytes do not decode under ``config.encoding``.
        TouchstoneError: Subclass for malformed content.
    """
    path = Path(file_path)
    rank = rank_from_path(path)
    config = config if config is not None else ParserConfig()

    if not path.exists():
        raise FileNotFoundError(f"Touchstone file not found: {path}")

    with open(path, encoding=config.encoding, errors=config.errors) as f:
        try:
            return TouchstoneParser(rank, filename=path.name, config=config).parse(f)
        except UnicodeDecodeError as exc:
            raise TextDecodeError(f"{path.name} is not valid {config.encoding}: {exc.reason}") from exc


def read_touchstone_from_string(
    content: str,
    rank: int,
    filename: str = "<string>",
    config: ParserConfig | None = None,
) -> Touchstone:
    """Parse Touchstone content held in memory.

    Args:
        content: Touchstone file content.
        rank: Number of ports.
        filename: Label used on the result and in log messages.
        config: Parser settings.
    """
    return TouchstoneParser(rank, filename=filename, config=config).parse(io.StringIO(content))
