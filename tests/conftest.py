# SPDX-License-Identifier: MIT
"""Pytest configuration and shared fixtures for test suite.

This module provides:
- Deterministic test environment setup
- Writers for temporary Touchstone files
"""
from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

import pytest


# ---------------------------------------------------------------------------
# Environment Setup
# ---------------------------------------------------------------------------


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest environment for determinism."""
    deterministic_env = {
        "LC_ALL": "C",
        "LANG": "C",
        "TZ": "UTC",
        "PYTHONHASHSEED": "0",
    }
    for key, value in deterministic_env.items():
        os.environ.setdefault(key, value)


# ---------------------------------------------------------------------------
# Fixtures: Touchstone Files
# ---------------------------------------------------------------------------


@pytest.fixture
def write_snp(tmp_path: Path) -> Callable[[str, str], Path]:
    """Fixture returning a writer for Touchstone files under tmp_path.

    Usage:
        def test_something(write_snp):
            path = write_snp("dut.s2p", "# GHz S MA R 50\\n1 0 0 0 0 0 0 0 0\\n")
    """

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
