"""Acoustic levitation: field propagation, Gor'kov forces, board calibration, message encoding and plane rendering."""

__version__ = "0.1.0"