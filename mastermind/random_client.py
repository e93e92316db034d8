"""
- HTTP call with retries and a clear fallback
Get the secret digits from random.org. A failed call (no internet, timeout,
bad status, bad body) is retried a few times with a growing pause; if every
try fails we fall back to a local secure random generator so the game still works.
"""

import logging
import time
from secrets import randbelow
from typing import List, Optional

import requests

from .config import DifficultyPreset, settings
from .errors import RandomServiceError
from .sequence import Sequence

logger = logging.getLogger(__name__)


def fetch_from_random_org(
    length: int,
    min_value: int = 0,
    max_value: int = 7,
    timeout: Optional[float] = None,
) -> List[int]:
    """One call to random.org; raises RandomServiceError on anything unexpected."""
    # Parameters to send to random.org
    params = {
        "num": length,       # how many numbers we want
        "min": min_value,    # smallest allowed number
        "max": max_value,    # largest allowed number
        "col": 1,            # one number per line
        "base": 10,          # normal decimal numbers
        "format": "plain",   # plain text response
        "rnd": "new",        # always generate new numbers
    }

    try:
        response = requests.get(
            settings.random_url,
            params=params,
            timeout=timeout if timeout is not None else settings.random_timeout,
        )
    except requests.RequestException as exc:
        raise RandomServiceError(f"Network error while contacting random.org: {exc}") from exc

    if response.status_code == 503:
        # random.org explains itself in a body starting with "Error:"
        body = response.text or ""
        detail = body.strip() if body.startswith("Error:") else "Unknown error from random.org"
        raise RandomServiceError(f"random.org error: {detail}")
    if response.status_code != 200:
        raise RandomServiceError(f"Unexpected HTTP status {response.status_code} from random.org")

    # The body looks like:
    #   0\n3\n1\n2\n
    try:
        digits = [int(line) for line in response.text.splitlines() if line.strip()]
    except ValueError as exc:
        raise RandomServiceError(f"random.org returned a non-integer line: {exc}") from exc

    if len(digits) != length:
        raise RandomServiceError(f"random.org returned {len(digits)} values, expected {length}.")
    for digit in digits:
        if digit < min_value or digit > max_value:
            raise RandomServiceError(f"random.org number {digit} out of range {min_value}..{max_value}.")

    return digits


def local_code(length: int, min_value: int = 0, max_value: int = 7) -> List[int]:
    # randbelow(span) gives 0..span-1; shift into [min_value, max_value]
    span = max_value - min_value + 1
    return [min_value + randbelow(span) for _ in range(length)]


def fetch_code(length: int = 4, min_value: int = 0, max_value: int = 7) -> List[int]:
    """Always returns `length` digits in range: random.org first, local fallback last."""
    attempts = max(1, settings.random_retries)

    for attempt in range(1, attempts + 1):
        try:
            return fetch_from_random_org(length, min_value, max_value)
        except RandomServiceError as exc:
            logger.warning("random.org attempt %d/%d failed: %s", attempt, attempts, exc)
            if attempt < attempts:
                # 1x, 2x, ... the base delay
                time.sleep(settings.random_backoff * attempt)

    logger.warning("random.org failed after %d attempts, using local random generation", attempts)
    return local_code(length, min_value, max_value)


def new_secret(preset: DifficultyPreset, offline: bool = False) -> Sequence:
    """Secret Sequence shaped for the given difficulty."""
    if offline:
        digits = local_code(preset.length, preset.min_value, preset.max_value)
    else:
        digits = fetch_code(preset.length, preset.min_value, preset.max_value)
    return preset.sequence(digits)
