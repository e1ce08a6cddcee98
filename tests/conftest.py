"""Common test fixtures."""

import io
from pathlib import Path
from typing import Callable, Generator, List

import pytest
from rich.console import Console

from lshsig.logging import setup_logging
from lshsig.shingles import hash_shingle
from lshsig.types import ShingleSet


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Drop any file handlers a test installed."""
    yield
    setup_logging()


@pytest.fixture
def test_console() -> Console:
    """Create a test console that records into a buffer."""
    return Console(file=io.StringIO(), force_terminal=True, no_color=True, width=100)


@pytest.fixture
def write_rows(tmp_path: Path) -> Callable[[str, List[str]], Path]:
    """Factory fixture writing one row per line to a file."""

    def _write(name: str, rows: List[str]) -> Path:
        file_path = tmp_path / name
        file_path.write_text("\n".join(rows) + "\n", encoding="utf-8")
        return file_path

    return _write


@pytest.fixture
def make_shingle_set() -> Callable[[range], ShingleSet]:
    """Build a shingle set with one pseudo-random hash per integer label."""

    def _make(labels: range) -> ShingleSet:
        return frozenset(hash_shingle(f"shingle-{i}") for i in labels)

    return _make
