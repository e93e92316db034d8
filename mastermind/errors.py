"""
Errors raised by the game core.

- ValidationError: the input data is malformed (wrong length, digit out of range,
  guess shaped differently than the secret, missing guess).
- InvalidStateError: the operation is not allowed in the session's current state
  (starting twice, guessing before start or after the game ended).

Both are recoverable: reject the input or the call and let the caller try again.
"""

from typing import Optional

from .types import GameStatus


class GameError(Exception):
    """Base class for everything the core raises."""


class ValidationError(GameError, ValueError):
    # reason is one of: "missing", "type", "length", "range", "shape"
    def __init__(self, message: str, reason: str):
        super().__init__(message)
        self.reason = reason


class InvalidStateError(GameError):
    def __init__(self, message: str, state: Optional[GameStatus] = None):
        super().__init__(message)
        self.state = state


class RandomServiceError(Exception):
    """random.org could not give us a usable answer."""
