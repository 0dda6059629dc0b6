"""Builders for well-formed Touchstone data sections used across tests."""

from __future__ import annotations

import numpy as np


def matrix_values(rank: int, freq_index: int) -> list[float]:
    """Deterministic flat list of 2*rank**2 values for one frequency.

    Entry (i, j) is the pair (f + i + 0.1*j, -(f + 0.01*(i*rank + j))), so
    every position in every record is distinguishable.
    """
    values: list[float] = []
    for i in range(rank):
        for j in range(rank):
            values.append(round(freq_index + i + 0.1 * j, 6))
            values.append(round(-(freq_index + 0.01 * (i * rank + j)), 6))
    return values


def data_rows_split(rank: int, n_freq: int, f0: float = 1.0) -> list[str]:
    """Data section with each matrix row on its own line."""
    lines: list[str] = []
    for k in range(n_freq):
        values = matrix_values(rank, k)
        for i in range(rank):
            row = " ".join(str(v) for v in values[2 * rank * i : 2 * rank * (i + 1)])
            lines.append(f"{f0 + k} {row}" if i == 0 else row)
    return lines


def data_rows_flat(rank: int, n_freq: int, f0: float = 1.0) -> list[str]:
    """Data section with each frequency's whole matrix on one line."""
    return [f"{f0 + k} " + " ".join(str(v) for v in matrix_values(rank, k)) for k in range(n_freq)]


def expected_tensor(rank: int, n_freq: int) -> np.ndarray:
    """Tensor the builders above encode, as raw complex(a, b) pairs."""
    out = np.zeros((n_freq, rank, rank), dtype=np.complex128)
    for k in range(n_freq):
        values = matrix_values(rank, k)
        pairs = [complex(a, b) for a, b in zip(values[::2], values[1::2])]
        out[k] = np.array(pairs).reshape(rank, rank)
    return out


def snp_content(header: list[str], rows: list[str]) -> str:
    """Join header and data lines into file content."""
    return "\n".join([*header, *rows]) + "\n"
