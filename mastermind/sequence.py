"""
A Sequence is the validated, immutable list of digits used for both the
secret code and a player's guess.

It is built from raw digits plus the shape it must have:
- length: how many digits
- min_value / max_value: inclusive range for every digit

If anything is off, construction raises ValidationError and nothing is stored.
The error's `reason` tells the caller what went wrong ("length" vs "range"),
so the user can get a useful message.
"""

from dataclasses import dataclass
from typing import Iterator

from .errors import ValidationError
from .types import Values


@dataclass(frozen=True, eq=False)
class Sequence:
    values: Values
    length: int
    min_value: int = 0
    max_value: int = 7

    def __post_init__(self) -> None:
        if self.values is None:
            raise ValidationError("Numbers list cannot be null.", reason="missing")

        try:
            digits = tuple(self.values)
        except TypeError:
            raise ValidationError(f"Expected a list of numbers, got {self.values!r}", reason="type")

        # 1. Every item must be a real integer (bool is an int in Python; reject it)
        for digit in digits:
            if isinstance(digit, bool) or not isinstance(digit, int):
                raise ValidationError(f"Invalid number format: {digit!r}", reason="type")

        # 2. Length check comes before the range check
        if len(digits) != self.length:
            raise ValidationError(
                f"Must have exactly {self.length} numbers, got {len(digits)}.", reason="length"
            )

        # 3. Every digit inside [min_value, max_value]
        for digit in digits:
            if digit < self.min_value or digit > self.max_value:
                raise ValidationError(
                    f"Number {digit} must be between {self.min_value}-{self.max_value}.",
                    reason="range",
                )

        # frozen dataclass: store the tuple copy so a caller's list can't leak in
        object.__setattr__(self, "values", digits)

    def same_shape(self, other: "Sequence") -> bool:
        return self.length == other.length

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sequence):
            return NotImplemented
        return self.length == other.length and self.values == other.values

    def __hash__(self) -> int:
        return hash((self.length, self.values))

    def __len__(self) -> int:
        return self.length

    def __iter__(self) -> Iterator[int]:
        return iter(self.values)

    def __getitem__(self, index: int) -> int:
        return self.values[index]

    def __str__(self) -> str:
        return " ".join(str(digit) for digit in self.values)

    def to_list(self) -> list:
        return list(self.values)
