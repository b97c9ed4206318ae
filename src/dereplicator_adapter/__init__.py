"""Dereplicator adapter: run NPDtools Dereplicator and collect its matches."""

__version__ = "0.1.0"
