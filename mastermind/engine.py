"""
Pure game logic (no HTTP, no storage).
We compute two feedback numbers for each guess:
- position_matches: how many indices are exactly correct (right number, right place)
- digit_matches: how many digits the guess shares with the secret, in any place,
  counting duplicates only as often as they appear on both sides.
  Exact matches count here too.

We allow duplicates in the secret and in the guess.
"""

from collections import Counter
from dataclasses import dataclass

from .errors import ValidationError
from .sequence import Sequence


@dataclass(frozen=True)
class Score:
    digit_matches: int
    position_matches: int
    sequence_length: int

    @property
    def solved(self) -> bool:
        return self.position_matches == self.sequence_length

    @property
    def message(self) -> str:
        """Feedback text that never reveals which digits are correct."""
        if self.solved:
            return "All correct"
        if self.digit_matches == 0:
            return "All incorrect"
        numbers = "number" if self.digit_matches == 1 else "numbers"
        locations = "location" if self.position_matches == 1 else "locations"
        return (
            f"{self.digit_matches} correct {numbers}, "
            f"and {self.position_matches} correct {locations}"
        )

    def __str__(self) -> str:
        return self.message


def score_guess(secret: Sequence, guess: Sequence) -> Score:
    """
    Example:
      secret = [1, 2, 3, 4]
      guess  = [1, 4, 0, 2]
      position_matches = 1  (the first 1 matches)
      digit_matches    = 3  (1 in place, plus 4 and 2 somewhere else)

    Duplicates:
      secret = [1, 1, 1, 2]
      guess  = [1, 1, 3, 4]
      position_matches = 2, digit_matches = 2 (not 3: the third 1 in the
      secret has nothing left in the guess to pair with)
    """

    # 0. Only same-length sequences are comparable
    if secret is None or guess is None:
        raise ValidationError("Secret and guess are both required.", reason="missing")
    if secret.length != guess.length:
        raise ValidationError(
            f"Guess must have exactly {secret.length} digits, got {guess.length}.",
            reason="shape",
        )

    n = secret.length
    if secret.values == guess.values:
        return Score(digit_matches=n, position_matches=n, sequence_length=n)

    # 1. Position pass; tally whatever is left over on each side
    position_matches = 0
    secret_left: Counter = Counter()
    guess_left: Counter = Counter()
    for expected, actual in zip(secret.values, guess.values):
        if expected == actual:
            position_matches += 1
        else:
            secret_left[expected] += 1
            guess_left[actual] += 1

    # 2. Digit pass: a leftover value pairs up as often as both sides still have it
    paired = 0
    for value, count in guess_left.items():
        paired += min(count, secret_left[value])

    return Score(
        digit_matches=position_matches + paired,
        position_matches=position_matches,
        sequence_length=n,
    )
