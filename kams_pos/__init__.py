"""KAMS POS: point-of-sale API for a single-location pizzeria."""

__version__ = "0.1.0"
