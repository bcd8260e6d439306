"""Mood- and diet-aware recipe recommendation backend."""

__version__ = "0.1.0"
