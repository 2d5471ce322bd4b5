"""Core types shared by every layer."""

from blindglobe.core.errors import ConfigurationError, TransientTimeSourceError
from blindglobe.core.result import Result

__all__ = ["ConfigurationError", "TransientTimeSourceError", "Result"]
