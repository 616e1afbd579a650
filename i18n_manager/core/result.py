"""
Outcome of a single translation call.

Providers hand back Ok(translated_text) or Err(message) so that one failing
key is recorded and the batch moves on.
"""

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

T = TypeVar('T')
R = TypeVar('R')


@dataclass
class Ok(Generic[T]):
    """Translation (or any value) obtained.

    Attributes:
        value: Translated text
    """
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def map(self, func: Callable[[T], R]) -> 'Ok[R]':
        """Apply func to the value, e.g. Ok(text).map(str.strip)."""
        return Ok(func(self.value))


@dataclass
class Err:
    """Failed call.

    Attributes:
        error: Human-readable message shown to the user
    """
    error: str

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self):
        raise ValueError(f"Called unwrap on Err: {self.error}")

    def unwrap_or(self, default: T) -> T:
        return default

    def map(self, func: Callable) -> 'Err':
        return self


Result = Union[Ok[T], Err]
