"""
Single place to:
- Read settings from env (a local .env is loaded first, if present)
- Define the difficulty presets (code length, digit range, attempts, hints)
- Set up logging for the app layers (the game core itself never logs)

Why: centralizing this keeps the API, the CLI and the tests consistent.
"""

import logging
import os
from dataclasses import dataclass
from typing import Dict, List, Optional

from dotenv import load_dotenv

from .sequence import Sequence
from .types import Code

# 1) Load env vars from .env if present
# dev convenience; in prod the platform injects env vars
load_dotenv()


def _env_list(name: str, default: str) -> List[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


# 2) Settings, read once at import time
class Settings:
    app_env: str = os.getenv("APP_ENV", "local")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # random.org integer generator
    random_url: str = os.getenv("RANDOM_URL", "https://www.random.org/integers/")
    random_timeout: float = float(os.getenv("RANDOM_TIMEOUT", "3.0"))
    random_retries: int = int(os.getenv("RANDOM_RETRIES", "3"))
    random_backoff: float = float(os.getenv("RANDOM_BACKOFF", "1.0"))

    cors_origins: List[str] = _env_list("CORS_ORIGINS", "*")


settings = Settings()


# 3) Difficulty presets
@dataclass(frozen=True)
class DifficultyPreset:
    name: str
    length: int
    min_value: int
    max_value: int
    attempts: int
    hints: int = 2

    def sequence(self, values: Code) -> Sequence:
        """Validate raw digits against this preset's shape."""
        return Sequence(values, self.length, self.min_value, self.max_value)


DIFFICULTIES: Dict[str, DifficultyPreset] = {
    "easy": DifficultyPreset("easy", length=3, min_value=0, max_value=5, attempts=8),
    "medium": DifficultyPreset("medium", length=4, min_value=0, max_value=7, attempts=10),
    "hard": DifficultyPreset("hard", length=5, min_value=0, max_value=9, attempts=12),
}
DEFAULT_DIFFICULTY = "medium"


def get_difficulty(name: Optional[str]) -> DifficultyPreset:
    """Unknown or missing names fall back to medium."""
    if name is None:
        return DIFFICULTIES[DEFAULT_DIFFICULTY]
    return DIFFICULTIES.get(name.strip().lower(), DIFFICULTIES[DEFAULT_DIFFICULTY])


# 4) Logging
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=LOG_FORMAT,
    )
