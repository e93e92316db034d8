"""
Explicit validation & Pydantic models
- Models are used to validate and serialize/deserialize data
  exchanged between the client and server.
- Defines the structure of API requests and responses.
"""

from typing import List, Literal, Optional
from pydantic import BaseModel, Field, field_validator

from .types import Difficulty

Status = Literal["pending", "in_progress", "won", "lost"]


# 1. Represents response when a new game is started
class NewGameResponse(BaseModel):
    game_id: str = Field(..., description="Unique ID for the game; secret is never returned")
    attempts_left: int = Field(..., description="How many guesses remain")
    hints_left: int = Field(..., description="How many hints remain")
    status: Status = Field(..., description="Current state of the game")
    difficulty: Difficulty = Field(..., description="Chosen difficulty level")
    code_length: int = Field(..., description="How many digits the secret has")
    min_value: int = Field(..., description="Smallest digit that can appear")
    max_value: int = Field(..., description="Largest digit that can appear")
    player: Optional[str] = Field(None, description="Player name, if given")


# 2. Validates player's guess
class GuessRequest(BaseModel):
    guess: List[int] = Field(
        ..., description="A list of digits (length and range depend on difficulty)."
    )

    @field_validator("guess")
    @classmethod
    def validate_digits(cls, guess_list: List[int]) -> List[int]:
        """
        Every preset starts at 0, so negatives are never valid.
        Length and upper bound depend on the game's difficulty;
        the store checks those against the game's secret.
        """
        for digit in guess_list:
            if digit < 0:
                raise ValueError("Digits cannot be negative.")
        return guess_list

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"guess": [0, 1, 2, 3]},        # medium (default)
                {"guess": [0, 1, 2]},           # easy
                {"guess": [0, 1, 2, 3, 9]},     # hard
            ]
        }
    }


# 3. Describes the feedback for a single guess
class GuessEntryOut(BaseModel):
    guess: List[int] = Field(..., description="The player's guess")
    correct_numbers: int = Field(..., description="How many digits are correct (any position)")
    correct_positions: int = Field(..., description="How many digits are in the correct position")
    message: str = Field(..., description="Feedback message")


# 4. Represents the overall state of the game
class GameState(BaseModel):
    game_id: str = Field(..., description="Unique ID for the game")
    attempts_left: int = Field(..., description="How many guesses remain")
    hints_left: int = Field(..., description="How many hints remain")
    status: Status = Field(..., description="Current state of the game")
    difficulty: Optional[Difficulty] = Field(None, description="Chosen difficulty level")
    history: List[GuessEntryOut] = Field(..., description="All guesses made so far with feedback")


# 5. Result of a guess (or end of the game)
class GuessResponse(BaseModel):
    attempts_left: int = Field(..., description="How many guesses remain")
    status: Status = Field(..., description="Current state of the game")
    feedback: GuessEntryOut = Field(..., description="Feedback from this guess")
    secret: Optional[List[int]] = Field(None, description="The secret code (only revealed if game is over)")
    note: Optional[str] = Field(None, description="Extra note (ex. 'Game lost. No more guesses allowed.')")


# 6. Response schema for scoreboard
class StatsOut(BaseModel):
    games_started: int = Field(..., description="Total games started this session")
    games_won: int = Field(..., description="Total games won this session")
    games_lost: int = Field(..., description="Total games lost this session")

    current_streak: int = Field(..., description="Current consecutive wins")
    best_streak: int = Field(..., description="Best consecutive wins")

    average_guesses_to_win: Optional[float] = Field(
        None, description="Average number of guesses used in wins"
    )
    fastest_win_attempts: Optional[int] = Field(
        None, description="Fewest guesses taken to win a game"
    )

    easy_started: int = Field(..., description="Games started on Easy difficulty")
    medium_started: int = Field(..., description="Games started on Medium difficulty")
    hard_started: int = Field(..., description="Games started on Hard difficulty")

    easy_won: int = Field(..., description="Games won on Easy difficulty")
    medium_won: int = Field(..., description="Games won on Medium difficulty")
    hard_won: int = Field(..., description="Games won on Hard difficulty")


# 7. Response schema for hint
class HintOut(BaseModel):
    digit: Optional[int] = Field(None, description="A digit that appears in the secret (position not revealed)")
    hints_left: int = Field(..., description="Hints remaining")
    attempts_left: int = Field(..., description="Guesses remaining")
    note: str = Field(..., description="Extra info, ex. 'No hints left.'")
