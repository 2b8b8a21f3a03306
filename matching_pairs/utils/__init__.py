"""Utilities."""

from .logger import format_board, grid_columns, setup_logging

__all__ = ["format_board", "grid_columns", "setup_logging"]
