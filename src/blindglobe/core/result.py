"""Result type for service-layer outcomes."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a value or an error message.

    Services return Result.ok(value) on success and Result.err(message)
    when something failed in a way the caller should report or recover from.

    Example:
        result = game_service.load(player_id)
        if result.is_err:
            return error_message(result.error)
        game = result.unwrap()
    """

    _value: T | None = None
    _error: str | None = None

    @classmethod
    def ok(cls, value: T) -> "Result[T]":
        """Create a successful result."""
        return cls(_value=value)

    @classmethod
    def err(cls, error: str) -> "Result[T]":
        """Create a failed result."""
        return cls(_error=error)

    @property
    def is_ok(self) -> bool:
        return self._error is None

    @property
    def is_err(self) -> bool:
        return self._error is not None

    @property
    def error(self) -> str | None:
        """The error message, or None on success."""
        return self._error

    def unwrap(self) -> T:
        """Return the value.

        Raises:
            ValueError: If this result holds an error.
        """
        if self._error is not None:
            raise ValueError(self._error)
        return self._value  # type: ignore

    def unwrap_or(self, default: T) -> T:
        """Return the value, or default if this result holds an error."""
        if self._error is not None:
            return default
        return self._value  # type: ignore
