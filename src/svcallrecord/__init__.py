"""Conversion, ordering and decomposition of structural variant call records."""

__version__ = "0.1.0"
