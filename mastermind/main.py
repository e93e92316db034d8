'''
Mastermind API

Endpoints:
POST /games                -> start a game
GET  /games/{id}           -> read state & history
POST /games/{id}/guess     -> submit a guess
GET  /games/{id}/hint      -> reveal one digit of the secret (limited per game)
DELETE /games/{id}        -> discard a game

Extras:
GET  /stats                -> scoreboard
POST /stats/reset          -> reset scoreboard

Games live in memory (GameStore) for the life of the process.
'''

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .config import configure_logging, get_difficulty, settings
from .errors import InvalidStateError, ValidationError
from .random_client import fetch_code
from .session import NO_HINTS_LEFT, GameSession, HistoryEntry
from .store import GameStore

from .schemas import (
    NewGameResponse,
    GuessRequest,
    GuessResponse,
    GameState,
    GuessEntryOut,
    StatsOut,
    HintOut,
)

logger = logging.getLogger(__name__)


# Logging is set up when the server starts, not when the module is imported
@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logger.info("Mastermind API starting (env=%s)", settings.app_env)
    yield


app = FastAPI(title="Mastermind API", version="3.0.0", lifespan=lifespan)

# Allow everything in dev so the docs and front-end work easily
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

# One store per process; routes get it through a dependency so tests can swap it
_store = GameStore()


def get_store() -> GameStore:
    return _store


# --- Small DTO builders ---

def _to_guess_out(entry: HistoryEntry) -> GuessEntryOut:
    return GuessEntryOut(
        guess=entry.guess.to_list(),
        correct_numbers=entry.score.digit_matches,
        correct_positions=entry.score.position_matches,
        message=entry.score.message,
    )


def _to_game_state(game_id: str, game: GameSession) -> GameState:
    return GameState(
        game_id=game_id,
        attempts_left=game.remaining_attempts(),
        hints_left=game.hints_remaining,
        status=game.state.value,
        difficulty=game.difficulty,
        history=[_to_guess_out(entry) for entry in game.history()],
    )


# ---------------- Routes ----------------

@app.post("/games", response_model=NewGameResponse, summary="Start a new game")
def start_game(
    difficulty: str = "medium",
    player: Optional[str] = None,
    store: GameStore = Depends(get_store),
) -> NewGameResponse:
    """
    Difficulty presets:
      easy   -> length=3, digits 0-5, attempts=8
      medium -> length=4, digits 0-7, attempts=10
      hard   -> length=5, digits 0-9, attempts=12
    Unknown names fall back to medium.
    """
    preset = get_difficulty(difficulty)

    digits = fetch_code(preset.length, preset.min_value, preset.max_value)  # random.org w/ secure fallback
    game_id, game = store.create(preset.sequence(digits), preset, player=player)

    low, high = game.value_range
    return NewGameResponse(
        game_id=game_id,
        attempts_left=game.remaining_attempts(),
        hints_left=game.hints_remaining,
        status=game.state.value,
        difficulty=preset.name,
        code_length=game.code_length,
        min_value=low,
        max_value=high,
        player=player,
    )


@app.get("/games/{game_id}", response_model=GameState, summary="Get current game state")
def get_game(
    game_id: str,
    store: GameStore = Depends(get_store),
) -> GameState:
    game = store.get(game_id)
    if not game:
        raise HTTPException(status_code=404, detail="Game not found")
    return _to_game_state(game_id, game)


@app.post("/games/{game_id}/guess", response_model=GuessResponse, summary="Submit a guess")
def submit_guess(
    game_id: str,
    payload: GuessRequest,
    store: GameStore = Depends(get_store),
) -> GuessResponse:
    # store.guess() validates the shape and moves the game forward
    try:
        result = store.guess(game_id, payload.guess)
    except ValidationError as ve:
        raise HTTPException(status_code=400, detail=str(ve))
    except InvalidStateError as ise:
        raise HTTPException(status_code=409, detail=f"{ise} No more guesses allowed.")
    if result is None:
        raise HTTPException(status_code=404, detail="Game not found")

    # When the game ends, include the secret in the response
    note = None
    if result.state.is_terminal:
        note = f"Game {result.state.value}. No more guesses allowed."
    elif result.attempts_left == 1:
        note = "Last attempt!"

    return GuessResponse(
        attempts_left=result.attempts_left,
        status=result.state.value,
        feedback=_to_guess_out(result.entry),
        secret=result.secret.to_list() if result.secret is not None else None,
        note=note,
    )


@app.get("/games/{game_id}/hint", response_model=HintOut, summary="Get a hint: reveals one digit, not its position")
def get_hint(
    game_id: str,
    store: GameStore = Depends(get_store),
) -> HintOut:
    try:
        result = store.hint(game_id)
    except InvalidStateError:
        raise HTTPException(status_code=409, detail="Game finished. No hint available.")
    if result is None:
        raise HTTPException(status_code=404, detail="Game not found")

    if result.hint is NO_HINTS_LEFT:
        return HintOut(
            digit=None,
            hints_left=0,
            attempts_left=result.attempts_left,
            note="No hints left for this game.",
        )

    return HintOut(
        digit=result.hint,
        hints_left=result.hints_left,
        attempts_left=result.attempts_left,
        note=f"The secret contains a {result.hint}. Hints left: {result.hints_left}.",
    )


@app.delete("/games/{game_id}", summary="Discard a game")
def delete_game(
    game_id: str,
    store: GameStore = Depends(get_store),
) -> dict:
    if not store.discard(game_id):
        raise HTTPException(status_code=404, detail="Game not found")
    return {"message": "Game deleted."}


@app.get("/stats", response_model=StatsOut, summary="Get scoreboard")
def get_stats(store: GameStore = Depends(get_store)) -> StatsOut:
    stats = store.get_stats()
    return StatsOut(
        games_started=stats.games_started,
        games_won=stats.games_won,
        games_lost=stats.games_lost,
        current_streak=stats.current_streak,
        best_streak=stats.best_streak,
        average_guesses_to_win=stats.average_guesses_to_win,
        fastest_win_attempts=stats.fastest_win_attempts,
        easy_started=stats.easy_started,
        medium_started=stats.medium_started,
        hard_started=stats.hard_started,
        easy_won=stats.easy_won,
        medium_won=stats.medium_won,
        hard_won=stats.hard_won,
    )


@app.post("/stats/reset", summary="Reset the scoreboard")
def reset_stats(store: GameStore = Depends(get_store)) -> dict:
    store.reset_stats()
    logger.info("scoreboard reset")
    return {"message": "Stats reset."}
