"""Deterministic résumé-to-opening scoring pipeline."""

__version__ = "0.1.0"
