"""Allocation visualizer: infer a schema from messy CSV/TSV files and chart totals."""

__version__ = "0.1.0"
