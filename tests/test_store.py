"""
Testing in-memory store
- Create a game, make guesses, and check status/attempts/history, etc.
- Scoreboard updates exactly once per finished game
"""

import pytest

from mastermind.config import DIFFICULTIES, get_difficulty
from mastermind.errors import InvalidStateError, ValidationError
from mastermind.session import NO_HINTS_LEFT
from mastermind.types import GameStatus

MEDIUM = DIFFICULTIES["medium"]
EASY = DIFFICULTIES["easy"]
HARD = DIFFICULTIES["hard"]


def test_store_create_and_guess_basic(store):
    # Secret is hardcoded so we know what outcome should be
    game_id, game = store.create(MEDIUM.sequence([1, 2, 3, 4]), MEDIUM)

    # Game starts in progress with correct attempts
    assert game.state == GameStatus.IN_PROGRESS
    assert game.remaining_attempts() == 10
    assert store.get(game_id) is game

    # Wrong guess, same length -> attempts should decrement, history increments
    outcome = store.guess(game_id, [0, 0, 0, 0])
    assert outcome.entry.score.digit_matches == 0
    assert outcome.attempts_left == 9
    assert outcome.state == GameStatus.IN_PROGRESS
    assert outcome.secret is None
    assert len(game.history()) == 1

    # Winning guess ends the game
    outcome = store.guess(game_id, [1, 2, 3, 4])
    assert outcome.entry.score.solved
    assert outcome.entry.guess.to_list() == [1, 2, 3, 4]
    assert outcome.state == GameStatus.WON
    assert outcome.attempts_left == 8
    assert outcome.secret.to_list() == [1, 2, 3, 4]


def test_store_rejects_bad_guesses_without_spending_attempts(store):
    game_id, game = store.create(MEDIUM.sequence([1, 2, 3, 4]), MEDIUM)

    with pytest.raises(ValidationError):
        store.guess(game_id, [1, 2, 3])          # wrong length
    with pytest.raises(ValidationError):
        store.guess(game_id, [1, 2, 3, 8])       # 8 is outside 0..7 on medium

    assert game.remaining_attempts() == 10


def test_store_unknown_game(store):
    assert store.get("nope") is None
    assert store.guess("nope", [1, 2, 3, 4]) is None
    assert store.hint("nope") is None


def test_store_guess_after_end_raises(store):
    game_id, _ = store.create(EASY.sequence([1, 2, 3]), EASY)
    store.guess(game_id, [1, 2, 3])

    with pytest.raises(InvalidStateError):
        store.guess(game_id, [1, 2, 3])

    # no double counting
    assert store.get_stats().games_won == 1


def test_store_stats_update_on_win_and_loss(store):
    # Game A: win in 2 guesses
    game_a, _ = store.create(EASY.sequence([1, 2, 3]), EASY)
    store.guess(game_a, [1, 0, 0])  # wrong
    store.guess(game_a, [1, 2, 3])  # win

    stats_after_win = store.get_stats()
    assert stats_after_win.games_started == 1
    assert stats_after_win.easy_started == 1
    assert stats_after_win.games_won == 1
    assert stats_after_win.easy_won == 1
    assert stats_after_win.games_lost == 0
    assert stats_after_win.current_streak == 1
    assert stats_after_win.total_guesses_in_wins == 2
    assert stats_after_win.fastest_win_attempts == 2
    assert stats_after_win.average_guesses_to_win == 2.0

    # Game B: force a loss (medium has 10 attempts)
    game_b, _ = store.create(MEDIUM.sequence([7, 7, 7, 7]), MEDIUM)
    for _ in range(10):
        store.guess(game_b, [0, 0, 0, 0])

    stats_final = store.get_stats()
    assert stats_final.games_started == 2
    assert stats_final.games_won == 1
    assert stats_final.games_lost == 1
    assert stats_final.current_streak == 0
    assert stats_final.best_streak == 1


def test_store_reset_stats(store):
    game_id, _ = store.create(EASY.sequence([1, 2, 3]), EASY)
    store.guess(game_id, [1, 2, 3])

    store.reset_stats()

    stats = store.get_stats()
    assert stats.games_started == 0
    assert stats.games_won == 0
    assert stats.average_guesses_to_win is None


def test_store_stats_is_a_snapshot(store):
    before = store.get_stats()

    game_id, _ = store.create(EASY.sequence([1, 2, 3]), EASY)
    store.guess(game_id, [1, 2, 3])

    # the copy taken earlier does not move; a fresh read does
    assert before.games_started == 0
    assert before.games_won == 0
    assert store.get_stats().games_won == 1
    assert store.get_stats() is not store.get_stats()


def test_store_per_difficulty_counters(store):
    hard_id, _ = store.create(HARD.sequence([0, 1, 2, 3, 9]), HARD)
    store.create(MEDIUM.sequence([1, 2, 3, 4]), MEDIUM)
    store.create(EASY.sequence([1, 2, 3]), EASY)
    store.guess(hard_id, [0, 1, 2, 3, 9])

    stats = store.get_stats()
    assert (stats.easy_started, stats.medium_started, stats.hard_started) == (1, 1, 1)
    assert (stats.easy_won, stats.medium_won, stats.hard_won) == (0, 0, 1)


def test_store_hints(store):
    game_id, game = store.create(MEDIUM.sequence([5, 5, 5, 5]), MEDIUM)

    first = store.hint(game_id)
    second = store.hint(game_id)
    third = store.hint(game_id)

    assert first.hint == 5
    assert first.hints_left == 1
    assert second.hint == 5
    assert second.hints_left == 0
    assert third.hint is NO_HINTS_LEFT
    assert third.attempts_left == 10
    assert game.hints_remaining == 0


def test_store_discard(store):
    game_id, _ = store.create(MEDIUM.sequence([1, 2, 3, 4]), MEDIUM)

    assert store.discard(game_id) is True
    assert store.get(game_id) is None
    assert store.discard(game_id) is False


def test_difficulty_presets():
    assert get_difficulty("easy").length == 3
    assert get_difficulty("HARD").max_value == 9
    assert get_difficulty("impossible").name == "medium"
    assert get_difficulty(None).attempts == 10
