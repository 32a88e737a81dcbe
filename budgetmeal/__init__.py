"""Budget-constrained daily meal planning."""
__version__ = "0.1.0"
