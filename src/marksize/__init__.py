"""marksize - running size totals for marked directories."""

__version__ = "0.1.0"
