"""
In-memory store
Holds the running GameSessions and the scoreboard for this process.
Nothing survives a restart.

Every call that touches a session goes through one lock, so a session is
never used by two requests at the same time.
"""

import logging
from dataclasses import dataclass, replace
from threading import RLock
from typing import Dict, Optional, Tuple, Union
from uuid import uuid4

from .config import DifficultyPreset
from .session import GameSession, HintResult, HistoryEntry
from .sequence import Sequence
from .types import Code, GameStatus

logger = logging.getLogger(__name__)


# Scoreboard structure
@dataclass
class Stats:
    games_started: int = 0
    games_won: int = 0
    games_lost: int = 0

    current_streak: int = 0
    best_streak: int = 0

    total_guesses_in_wins: int = 0
    fastest_win_attempts: Optional[int] = None

    # per-difficulty counters
    easy_started: int = 0
    medium_started: int = 0
    hard_started: int = 0
    easy_won: int = 0
    medium_won: int = 0
    hard_won: int = 0

    @property
    def average_guesses_to_win(self) -> Optional[float]:
        if self.games_won == 0:
            return None
        return self.total_guesses_in_wins / self.games_won


# Snapshots taken under the lock; routes build responses from these, not from the live session
@dataclass(frozen=True)
class GuessOutcome:
    entry: HistoryEntry
    attempts_left: int
    state: GameStatus
    secret: Optional[Sequence] = None   # only set once the game is over


@dataclass(frozen=True)
class HintOutcome:
    hint: Union[int, HintResult]
    hints_left: int
    attempts_left: int


class GameStore:
    def __init__(self, rng=None) -> None:
        self._games: Dict[str, GameSession] = {}
        self._lock = RLock()
        self._stats = Stats()
        # handed to every session for hint picks; None means secure random
        self._rng = rng

    def create(
        self,
        secret: Sequence,
        preset: DifficultyPreset,
        player: Optional[str] = None,
    ) -> Tuple[str, GameSession]:
        new_id = str(uuid4())
        game = GameSession(
            secret,
            max_attempts=preset.attempts,
            hints=preset.hints,
            rng=self._rng,
            player=player,
            difficulty=preset.name,
        )
        game.start()

        with self._lock:
            self._games[new_id] = game

            # Update scoreboard when game is created
            self._stats.games_started += 1
            if preset.name == "easy":
                self._stats.easy_started += 1
            elif preset.name == "hard":
                self._stats.hard_started += 1
            else:
                self._stats.medium_started += 1

        logger.info("game %s started (difficulty=%s)", new_id, preset.name)
        return new_id, game

    def get(self, game_id: str) -> Optional[GameSession]:
        with self._lock:
            return self._games.get(game_id)

    def guess(self, game_id: str, attempt: Code) -> Optional[GuessOutcome]:
        """
        Returns a GuessOutcome for this guess, or None if there is no such game.
        Raises ValidationError for a badly shaped guess and InvalidStateError
        once the game is over; neither changes the game.
        """
        with self._lock:
            game = self._games.get(game_id)
            if game is None:
                return None

            low, high = game.value_range
            guess = Sequence(attempt, game.code_length, low, high)

            old_status = game.state
            score = game.submit_guess(guess)

            # Update scoreboard exactly once when we detect a transition
            if old_status == GameStatus.IN_PROGRESS and game.state.is_terminal:
                self._update_stats_on_end(game, won=(game.state == GameStatus.WON))
                logger.info("game %s %s after %d guess(es)", game_id, game.state.value, game.guesses_used())

            return GuessOutcome(
                entry=HistoryEntry(guess=guess, score=score),
                attempts_left=game.remaining_attempts(),
                state=game.state,
                secret=game.secret_value() if game.state.is_terminal else None,
            )

    # Helper updates scoreboard exactly once per game
    def _update_stats_on_end(self, game: GameSession, won: bool) -> None:
        if won:
            self._stats.games_won += 1

            # per-difficulty wins
            if game.difficulty == "easy":
                self._stats.easy_won += 1
            elif game.difficulty == "hard":
                self._stats.hard_won += 1
            else:
                self._stats.medium_won += 1

            # streaks
            self._stats.current_streak += 1
            if self._stats.current_streak > self._stats.best_streak:
                self._stats.best_streak = self._stats.current_streak

            # guesses used
            guesses_used = game.guesses_used()
            self._stats.total_guesses_in_wins += guesses_used
            if self._stats.fastest_win_attempts is None or guesses_used < self._stats.fastest_win_attempts:
                self._stats.fastest_win_attempts = guesses_used
        else:
            self._stats.games_lost += 1
            self._stats.current_streak = 0

    def hint(self, game_id: str) -> Optional[HintOutcome]:
        """Returns the digit (or NO_HINTS_LEFT) with the budgets left, or None if there is no such game."""
        with self._lock:
            game = self._games.get(game_id)
            if game is None:
                return None
            hint = game.hint()
            return HintOutcome(
                hint=hint,
                hints_left=game.hints_remaining,
                attempts_left=game.remaining_attempts(),
            )

    def discard(self, game_id: str) -> bool:
        with self._lock:
            found = self._games.pop(game_id, None) is not None
        if found:
            logger.info("game %s discarded", game_id)
        return found

    # public API for stats
    def get_stats(self) -> Stats:
        """A copy of the scoreboard; later games do not change it."""
        with self._lock:
            return replace(self._stats)

    def reset_stats(self) -> None:
        with self._lock:
            self._stats = Stats()
