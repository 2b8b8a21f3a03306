"""Matching pairs (Concentration) card game."""

__version__ = "0.1.0"
