"""Deterministic SST fixture generator for table-format compatibility tests."""

__version__ = "0.1.0"
