"""Property listing management with spreadsheet import and export."""

__version__ = "0.1.0"
