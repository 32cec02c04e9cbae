"""District scheme-performance dashboard core."""

__version__ = "0.1.0"
