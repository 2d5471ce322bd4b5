"""Blind Globe - daily geography guessing game backend."""

__version__ = "0.1.0"
