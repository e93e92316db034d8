"""
One game of Mastermind, from start to finish.

A GameSession owns:
- the secret Sequence (fixed for the whole game)
- the attempt budget and the hint budget
- the history: one HistoryEntry (guess + score) per submitted guess
- the lifecycle state: pending -> in_progress -> won | lost

Every allowed state change is listed once in TRANSITIONS; methods ask the table
instead of checking states by hand. won and lost are terminal: a finished game
is thrown away by its owner, never restarted.

The session is single-owner and not thread-safe; callers serialize access
(the GameStore does it with a lock).
"""

from dataclasses import dataclass
from enum import Enum
from secrets import SystemRandom
from typing import Dict, FrozenSet, List, Optional, Tuple, Union

from .engine import Score, score_guess
from .errors import InvalidStateError, ValidationError
from .sequence import Sequence
from .types import GameStatus

DEFAULT_MAX_ATTEMPTS = 10
DEFAULT_HINTS = 2


class HintResult(Enum):
    NO_HINTS_LEFT = "no hints left"


NO_HINTS_LEFT = HintResult.NO_HINTS_LEFT

# event -> (states it may fire from, state it leads to)
TRANSITIONS: Dict[str, Tuple[FrozenSet[GameStatus], GameStatus]] = {
    "start": (frozenset({GameStatus.PENDING}), GameStatus.IN_PROGRESS),
    "guess": (frozenset({GameStatus.IN_PROGRESS}), GameStatus.IN_PROGRESS),
    "hint": (frozenset({GameStatus.IN_PROGRESS}), GameStatus.IN_PROGRESS),
    "win": (frozenset({GameStatus.IN_PROGRESS}), GameStatus.WON),
    "lose": (frozenset({GameStatus.IN_PROGRESS}), GameStatus.LOST),
}


@dataclass(frozen=True)
class HistoryEntry:
    guess: Sequence
    score: Score


class GameSession:
    def __init__(
        self,
        secret: Sequence,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        hints: int = DEFAULT_HINTS,
        rng=None,
        player: Optional[str] = None,
        difficulty: Optional[str] = None,
    ) -> None:
        if not isinstance(secret, Sequence):
            raise ValidationError("A game needs a secret Sequence.", reason="missing")
        if isinstance(max_attempts, bool) or not isinstance(max_attempts, int) or max_attempts < 1:
            raise ValidationError("max_attempts must be a positive integer.", reason="range")
        if isinstance(hints, bool) or not isinstance(hints, int) or hints < 0:
            raise ValidationError("hints must be zero or a positive integer.", reason="range")

        self._secret = secret
        self.max_attempts = max_attempts
        self.hints_remaining = hints
        # anything with randrange(n) works; tests pass random.Random(seed)
        self._rng = rng if rng is not None else SystemRandom()
        self.player = player
        self.difficulty = difficulty

        self._state = GameStatus.PENDING
        self._history: List[HistoryEntry] = []

    # --- State machine ---

    def _check(self, event: str) -> None:
        sources, _ = TRANSITIONS[event]
        if self._state not in sources:
            raise InvalidStateError(self._rejection(event), state=self._state)

    def _fire(self, event: str) -> None:
        self._check(event)
        _, destination = TRANSITIONS[event]
        self._state = destination

    def _rejection(self, event: str) -> str:
        if self._state.is_terminal:
            return f"Game already finished ({self._state.value})."
        if event == "start":
            return "Game already started."
        return "Game has not been started yet."

    # --- Public API ---

    def start(self) -> None:
        self._fire("start")

    def submit_guess(self, guess: Optional[Sequence]) -> Score:
        """
        Score a guess against the secret and move the game forward.

        The Score is returned even when this guess ends the game, so the caller
        can show it before looking at the final state. A correct guess on the
        last attempt is a win, not a loss.
        """
        self._check("guess")
        if not isinstance(guess, Sequence):
            raise ValidationError("guess is null", reason="missing")
        if not guess.same_shape(self._secret):
            raise ValidationError(
                f"Guess must have exactly {self._secret.length} digits, got {guess.length}.",
                reason="shape",
            )

        score = score_guess(self._secret, guess)
        self._history.append(HistoryEntry(guess=guess, score=score))

        if score.position_matches == self._secret.length:
            self._fire("win")
        elif len(self._history) == self.max_attempts:
            self._fire("lose")

        return score

    def remaining_attempts(self) -> int:
        return self.max_attempts - len(self._history)

    def history(self) -> Tuple[HistoryEntry, ...]:
        return tuple(self._history)

    def hint(self) -> Union[int, HintResult]:
        """
        Reveal one digit of the secret (its value, not where it is).

        Each call picks a random position, so two hints can repeat or differ.
        With no hints left the NO_HINTS_LEFT sentinel comes back instead of an error.
        """
        self._fire("hint")
        if self.hints_remaining <= 0 or self._secret.length == 0:
            return NO_HINTS_LEFT

        self.hints_remaining -= 1
        index = self._rng.randrange(self._secret.length)
        return self._secret[index]

    def current_state(self) -> GameStatus:
        return self._state

    @property
    def state(self) -> GameStatus:
        return self._state

    def secret_value(self) -> Sequence:
        """The answer, for the end-of-game reveal only."""
        if not self._state.is_terminal:
            raise InvalidStateError("The secret is revealed only after the game ends.", state=self._state)
        return self._secret

    @property
    def code_length(self) -> int:
        return self._secret.length

    @property
    def value_range(self) -> Tuple[int, int]:
        return (self._secret.min_value, self._secret.max_value)

    def guesses_used(self) -> int:
        return len(self._history)
