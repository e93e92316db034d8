"""
Labels for clarity.
"""

from enum import Enum
from typing import List, Literal, Tuple

Digit = int  # bounded by the difficulty's value range
Code = List[Digit]  # raw digits, before validation
Values = Tuple[Digit, ...]  # validated, immutable digits
Difficulty = Literal["easy", "medium", "hard"]


class GameStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"

    @property
    def is_terminal(self) -> bool:
        return self in (GameStatus.WON, GameStatus.LOST)
