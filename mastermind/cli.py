"""
Terminal front end for Mastermind.

Usage:
    mastermind [--difficulty easy|medium|hard] [--player NAME] [--offline] [--log-level LEVEL]

Flow:
    welcome -> name -> difficulty -> menu loop (guess / history / exit / hint)
    -> end-of-game reveal -> play again?

All reading and printing goes through TerminalUI, so tests can feed it
scripted input and capture the output.
"""

import argparse
import logging
import sys
from typing import List, Optional, Sequence as Seq, TextIO

from .config import DIFFICULTIES, DifficultyPreset, configure_logging, get_difficulty
from .errors import ValidationError
from .random_client import new_secret
from .sequence import Sequence
from .session import NO_HINTS_LEFT, GameSession, HistoryEntry
from .types import GameStatus

logger = logging.getLogger(__name__)

MENU = [
    (1, "Make a guess"),
    (2, "Show game history"),
    (3, "Exit game"),
    (4, "Get a hint"),
]


def parse_guess(text: Optional[str], preset: DifficultyPreset) -> Sequence:
    """
    Turn typed input like "1 2 3 4" into a Sequence for this difficulty.
    Raises ValidationError with a message fit for the player.
    """
    if text is None or not text.strip():
        raise ValidationError("Input is blank.", reason="missing")

    digits: List[int] = []
    for entry in text.split():
        try:
            digits.append(int(entry))
        except ValueError:
            raise ValidationError(f"Invalid number format: {entry}", reason="type")

    return preset.sequence(digits)


class TerminalUI:
    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def say(self, text: str = "") -> None:
        self.stdout.write(text + "\n")
        self.stdout.flush()

    def ask(self, prompt: str) -> str:
        self.stdout.write(prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        if line == "":
            # closed input: behave like the player walked away
            raise EOFError("input closed")
        return line.strip()

    # -- Input --

    def prompt_for_name(self) -> str:
        while True:
            name = self.ask("What is your name?: ")
            if name:
                return name

    def prompt_for_difficulty(self) -> DifficultyPreset:
        self.say()
        for number, preset in enumerate(DIFFICULTIES.values(), start=1):
            self.say(
                f"{number}. {preset.name.capitalize()}: {preset.length} numbers, "
                f"{preset.min_value}-{preset.max_value}, {preset.attempts} attempts"
            )
        choices = list(DIFFICULTIES.values())
        while True:
            answer = self.ask(f"Choose a difficulty (1-{len(choices)}): ")
            if answer.isdigit() and 1 <= int(answer) <= len(choices):
                return choices[int(answer) - 1]
            self.say("\n*** Invalid input. Please enter a number from the list. ***\n")

    def prompt_for_menu(self, name: str, remaining: int) -> Optional[int]:
        self.say()
        self.say("=" * 40)
        self.say("           MASTERMIND - GAME MENU")
        self.say(f"Player: {name}")
        self.say("=" * 40)
        self.say(f"Remaining attempts: {remaining}")
        self.say()
        self.say("Choose an option:")
        for number, label in MENU:
            self.say(f"{number}. {label}")
        answer = self.ask(f"\nEnter your choice (1-{len(MENU)}): ")
        if not answer.isdigit():
            self.say("\n*** Invalid input. Please enter a number. ***\n")
            return None
        return int(answer)

    def prompt_for_guess(self, remaining: int, preset: DifficultyPreset) -> Sequence:
        while True:
            text = self.ask(f"Enter your guess ({remaining} attempts remaining): ")
            try:
                return parse_guess(text, preset)
            except ValidationError as exc:
                self.say("\n*** INVALID INPUT ***")
                self.say(str(exc))
                example = " ".join(str(min(i, preset.max_value)) for i in range(1, preset.length + 1))
                self.say(
                    f"\n=> Please enter {preset.length} numbers between "
                    f"{preset.min_value}-{preset.max_value}, separated by spaces (e.g., '{example}')\n"
                )

    def prompt_for_new_game(self) -> bool:
        while True:
            answer = self.ask("Would you like to play again? (y/n): ").lower()
            if answer in ("y", "yes"):
                return True
            if answer in ("n", "no"):
                return False
            self.say("\n--- Please enter 'y' for yes or 'n' for no ---\n")

    # -- Display --

    def show_welcome(self) -> None:
        self.say("***** Welcome to Mastermind *****")
        self.say("- Guess the secret combination of numbers!")
        self.say("- Duplicates are allowed.")
        self.say("- Each guess tells you how many numbers are right, and how many are in the right place.")
        self.say()

    def show_feedback(self, guess: Sequence, message: str) -> None:
        self.say(f"Your guess: {guess}")
        self.say(f"Result: {message}")
        self.say()

    def show_history(self, history: Seq[HistoryEntry]) -> None:
        if not history:
            self.say("No guesses yet.")
            return
        self.say("\n=== Game History ===")
        for attempt, entry in enumerate(history, start=1):
            self.say(f"Attempt {attempt}: {entry.guess} -> {entry.score.message}")
        self.say()

    def show_remaining(self, remaining: int) -> None:
        if remaining > 1:
            self.say(f"{remaining} attempts remaining.")
        elif remaining == 1:
            self.say("*** WARNING: LAST ATTEMPT! ***")

    def show_hint(self, hint) -> None:
        if hint is NO_HINTS_LEFT:
            self.say("No hints left for this game.")
        else:
            self.say(f"Hint: the secret contains a {hint}.")

    def show_results(self, status: GameStatus, answer: Sequence, name: str) -> None:
        self.say()
        self.say("=" * 40)
        if status == GameStatus.WON:
            self.say(f"          * * * CONGRATULATIONS {name.upper()}! * * *")
            self.say("                 YOU WON!")
        else:
            self.say(f"          - - - GAME OVER {name.upper()} - - -")
            self.say("        You ran out of attempts")
        self.say()
        self.say(f"The secret combination was: {answer}")
        self.say("=" * 40)
        self.say()


def play_round(ui: TerminalUI, game: GameSession, preset: DifficultyPreset, name: str) -> GameStatus:
    """Run the menu loop for one started game; returns its final (or abandoned) state."""
    while game.current_state() == GameStatus.IN_PROGRESS:
        choice = ui.prompt_for_menu(name, game.remaining_attempts())
        if choice == 1:
            guess = ui.prompt_for_guess(game.remaining_attempts(), preset)
            score = game.submit_guess(guess)
            ui.show_feedback(guess, score.message)
            if game.current_state().is_terminal:
                ui.show_results(game.current_state(), game.secret_value(), name)
            else:
                ui.show_remaining(game.remaining_attempts())
        elif choice == 2:
            ui.show_history(game.history())
        elif choice == 3:
            ui.say("Game ended by player.")
            break
        elif choice == 4:
            ui.show_hint(game.hint())
        elif choice is not None:
            ui.say("Invalid menu choice. Please try again.")
    return game.current_state()


def run(
    ui: TerminalUI,
    difficulty: Optional[str] = None,
    player: Optional[str] = None,
    offline: bool = False,
    rng=None,
) -> None:
    ui.show_welcome()
    name = player or ui.prompt_for_name()

    play_again = True
    while play_again:
        preset = get_difficulty(difficulty) if difficulty else ui.prompt_for_difficulty()
        game = GameSession(
            new_secret(preset, offline=offline),
            max_attempts=preset.attempts,
            hints=preset.hints,
            rng=rng,
            player=name,
            difficulty=preset.name,
        )
        game.start()
        logger.info("new %s game for %s", preset.name, name)

        state = play_round(ui, game, preset, name)
        logger.info("game finished: %s", state.value)
        play_again = ui.prompt_for_new_game()

    ui.say(f"Thanks for playing, {name}!")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mastermind",
        description="Play Mastermind in the terminal.",
    )
    parser.add_argument("--difficulty", "-d", choices=sorted(DIFFICULTIES),
                        help="Skip the difficulty prompt")
    parser.add_argument("--player", "-p", help="Skip the name prompt")
    parser.add_argument("--offline", action="store_true",
                        help="Do not call random.org; generate the secret locally")
    parser.add_argument("--log-level", default="WARNING",
                        help="Logging level (default: WARNING)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        run(TerminalUI(), difficulty=args.difficulty, player=args.player, offline=args.offline)
    except (EOFError, KeyboardInterrupt):
        print("\nGoodbye!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
