"""Dual-Zone Clock - a 24-hour dual timezone watch face."""

__version__ = "1.0.0"
