"""Minute-slot calendar scheduling: store, selection machine and persistence."""

__version__ = "0.1.0"
