"""
Shared test fixtures and sample sources for xsv-reader tests.

Sample inputs are defined here as module-level constants and written to
``tmp_path`` by fixtures, so no input files need to ship with the repo.
"""

from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Sample sources -- edit here to change what the file-based tests read
# ---------------------------------------------------------------------------
PEOPLE_CSV = (
    "name,city,note\r\n"
    "Ada,London,\"likes \"\"tea\"\"\"\r\n"
    "Linus,Helsinki,\"kernel, git\"\r\n"
)

MEASUREMENTS_TSV = (
    "sensor\tvalue\tunit\n"
    "t1\t21.5\tC\n"
    "t2\t19.0\tC\n"
)

RAGGED_CSV = "a,b\n1,2,3\nx\n"


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (reads files from disk)",
    )


# ---------------------------------------------------------------------------
# File fixtures
# ---------------------------------------------------------------------------
def _write(path: Path, text: str, encoding: str = "utf-8") -> Path:
    # newline="" so CRLF in the constants reaches the file unchanged
    with open(path, "w", encoding=encoding, newline="") as f:
        f.write(text)
    return path


@pytest.fixture()
def people_csv(tmp_path) -> Path:
    return _write(tmp_path / "people.csv", PEOPLE_CSV)


@pytest.fixture()
def people_csv_bom(tmp_path) -> Path:
    """Same content, written with a UTF-8 byte order mark."""
    return _write(tmp_path / "people_bom.csv", PEOPLE_CSV, encoding="utf-8-sig")


@pytest.fixture()
def measurements_tsv(tmp_path) -> Path:
    return _write(tmp_path / "measurements.tsv", MEASUREMENTS_TSV)


@pytest.fixture()
def ragged_csv(tmp_path) -> Path:
    return _write(tmp_path / "ragged.csv", RAGGED_CSV)
