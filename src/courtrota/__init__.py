"""courtrota — fair court and team rotation for multi-court badminton sessions."""

__version__ = "0.1.0"
