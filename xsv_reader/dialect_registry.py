"""
Dialect loader for xsv-reader.

Loads dialect YAML files from xsv_reader/dialects/ and provides
name-based access.  Each dialect defines:
- name: unique identifier (e.g., "csv")
- description: free text
- traits: separator, quote and quote escape style
- behaviours: the boolean parser options

Why YAML instead of hardcoded:
- New dialects can be added by dropping a YAML file, no code changes.
- The same file format is used for user-supplied dialects
  (``config.load_dialect``), so a built-in can be copied and edited.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from xsv_reader.config import Dialect, load_dialect
from xsv_reader.exceptions import ConfigValidationError, UnknownDialectError

logger = logging.getLogger(__name__)

# Directory containing dialect YAML files (sibling package)
_DIALECTS_DIR = Path(__file__).parent / "dialects"

_CACHE: dict[str, Dialect] = {}


def load_all_dialects(dialects_dir: Path | None = None) -> dict[str, Dialect]:
    """Load all dialect YAML files in a directory.

    Files that fail to load are logged and skipped.

    Args:
        dialects_dir: Directory to scan for .yaml files. Defaults to
            the built-in dialects/ directory.

    Returns:
        Dict mapping dialect name -> Dialect, in file name order.
    """
    dialects_dir = dialects_dir or _DIALECTS_DIR
    dialects: dict[str, Dialect] = {}
    for yaml_path in sorted(dialects_dir.glob("*.yaml")):
        try:
            dialect = load_dialect(yaml_path)
        except (ConfigValidationError, ValidationError, yaml.YAMLError, OSError) as e:
            logger.warning("Failed to load dialect from %s: %s", yaml_path, e)
            continue
        if dialect.name in dialects:
            logger.warning(
                "Duplicate dialect name '%s' in %s, keeping the first",
                dialect.name, yaml_path,
            )
            continue
        dialects[dialect.name] = dialect
    logger.info("Loaded %d dialects from %s", len(dialects), dialects_dir)
    return dialects


def get_dialect(name: str) -> Dialect:
    """Look up a built-in dialect by name.

    Raises:
        UnknownDialectError: If no built-in dialect has that name.
    """
    if not _CACHE:
        _CACHE.update(load_all_dialects())
    try:
        return _CACHE[name]
    except KeyError:
        raise UnknownDialectError(
            f"Unknown dialect: '{name}'. "
            f"Available dialects: {sorted(_CACHE)}"
        ) from None
