"""Manifest resolver: load release manifest workbooks and match releases across groups."""

__version__ = "0.1.0"
