"""Rules engine and turn controller for the "26" card game."""

__version__ = "0.1.0"
