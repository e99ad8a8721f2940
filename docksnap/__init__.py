"""Кэш состояния Docker-демона с операциями над томами."""

__version__ = "0.1.0"
