"""
Demo script: parse delimited files via the public API and log a summary.

Usage:
    uv run python scripts/inspect_xsv.py data.csv              # csv dialect
    uv run python scripts/inspect_xsv.py data.tsv --tsv        # tsv dialect
    uv run python scripts/inspect_xsv.py data.csv --headers    # first row is headers
    uv run python scripts/inspect_xsv.py data.csv --lenient    # pad ragged rows

Each file is read fully into memory, parsed, and summarised: headers,
row count, the first few rows, and the parser error (if any).
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

PREVIEW_ROWS = 5

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("inspect_xsv")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> None:
    import xsv_reader
    from xsv_reader import ParserBehaviour

    args = sys.argv[1:]
    paths = [a for a in args if not a.startswith("--")]
    dialect = "tsv" if "--tsv" in args else "csv"

    behaviours = xsv_reader.default_behaviours()
    if "--headers" in args:
        behaviours |= ParserBehaviour.READ_HEADERS
    if "--lenient" in args:
        behaviours |= ParserBehaviour.LENIENT

    if not paths:
        log.error("No input files given")
        sys.exit(2)

    for input_path in paths:
        if not Path(input_path).exists():
            log.warning("SKIP  %s  (file not found)", input_path)
            continue

        log.info("=" * 70)
        log.info("Parsing: %s (dialect=%s)", input_path, dialect)
        log.info("=" * 70)

        table = xsv_reader.read_file(input_path, dialect, behaviours)

        log.info("  headers : %s", table.headers())
        log.info("  rows    : %s", f"{len(table):,}")
        for row in list(table)[:PREVIEW_ROWS]:
            log.info("  [%d] %s", row.index, row.to_list())
        if table.has_error():
            log.warning("  error   : %s (%s)", table.error.name, table.error_string())

    log.info("All files processed.")


if __name__ == "__main__":
    main()
