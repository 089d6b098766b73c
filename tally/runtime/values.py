"""Runtime values. A tally program only ever produces 32-bit signed integers or Unit (the absence of a value)."""

from dataclasses import dataclass


BITS = 32


def wrap(number):
    """Wraps an arbitrary int into the signed two's-complement range."""
    half = 1 << (BITS - 1)
    return (number + half) % (1 << BITS) - half


@dataclass(frozen=True)
class Number:
    value: int

    def __post_init__(self):
        object.__setattr__(self, "value", wrap(self.value))

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class Unit:
    """Result of definitions and of empty blocks. Displays as nothing."""

    def __str__(self):
        return ""


UNIT = Unit()
