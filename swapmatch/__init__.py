"""Swap Match Engine - direct and chain matching for a barter marketplace."""

__version__ = "0.1.0"
