"""Local state and synchronization layer for the dictionary client."""

__version__ = "0.1.0"
