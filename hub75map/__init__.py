"""Coordinate mapping, virtual panels and driver-chip start-up sequences for HUB75 LED matrix panels."""

__version__ = "0.1.0"
__all__ = ["mapping", "virtual_panel", "leddrivers"]