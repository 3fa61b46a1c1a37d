"""
Dialect definitions sub-package for xsv-reader.

Contains YAML files that define the traits and behaviours of each
built-in dialect (``csv``, ``tsv``).  The loader module
(dialect_registry.py in the parent package) reads these files at runtime.
"""
