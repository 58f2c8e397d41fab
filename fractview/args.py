"""Command-line parsing: which fractal to draw and, for Julia, its constant."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

_NUMBER = re.compile(r"[+-]?[0-9]*(?:\.[0-9]*)?")

_NUMBER_HELP = (
    "The number must be a number (positive or negative)\n"
    "If you use a floating number, it must not start or end with a comma\n"
    "Like :\n"
    "\t0.000000\n"
    "\t-0.000000\n"
)


class FractalType(enum.IntEnum):
    """The fractals that can be drawn."""

    MANDELBROT = 1
    JULIA = 2
    TRICORN = 3


class UsageError(ValueError):
    """Raised when the command line does not name a fractal correctly."""


class NumberError(ValueError):
    """Raised when a Julia constant is not a well-formed number."""


@dataclass(frozen=True)
class Config:
    """The fractal chosen on the command line and its constant."""

    fractal: FractalType
    c_re: float = 0.0
    c_im: float = 0.0

    @property
    def sign(self) -> int:
        """Factor applied to the imaginary cross term: -1 for Tricorn, else 1."""
        return -1 if self.fractal is FractalType.TRICORN else 1


def is_valid_number(text: str | None) -> bool:
    """Tell whether ``text`` is an optionally signed decimal number.

    A single decimal point is allowed, but the text may not start or end
    with it.
    """
    if not text or text.startswith(".") or text.endswith("."):
        return False
    return _NUMBER.fullmatch(text) is not None


def parse_number(text: str) -> float:
    """Convert a number accepted by :func:`is_valid_number` to a float."""
    if not is_valid_number(text):
        raise NumberError(_NUMBER_HELP)
    if not text.lstrip("+-"):
        return 0.0
    return float(text)


def usage(program: str = "./fractol", allow_tricorn: bool = False) -> str:
    """Return the help text describing how to start ``program``."""
    lines = ["How to use ??\n"]
    if allow_tricorn:
        lines.append("You have three choices, like :\n")
        lines.append(f"\t\t\t\t{program} Tricorn\n")
    else:
        lines.append("You have two choices, like :\n")
    lines.append(f"\t\t\t\t{program} Mandelbrot\n")
    lines.append(f"\t\t\t\t{program} Julia real_number imaginary_number\n")
    return "".join(lines)


def parse_args(argv: list[str], allow_tricorn: bool = False) -> Config:
    """Parse a full argument vector, program name first, into a :class:`Config`.

    Mandelbrot (and Tricorn when allowed) take no further argument; Julia
    takes the real and imaginary parts of its constant.
    """
    program = argv[0] if argv else "./fractol"
    message = usage(program, allow_tricorn)
    if len(argv) not in (2, 4):
        raise UsageError(message)
    names = {"Mandelbrot": FractalType.MANDELBROT, "Julia": FractalType.JULIA}
    if allow_tricorn:
        names["Tricorn"] = FractalType.TRICORN
    fractal = names.get(argv[1])
    if fractal is None:
        raise UsageError(message)
    expected = 4 if fractal is FractalType.JULIA else 2
    if len(argv) != expected:
        raise UsageError(message)
    if fractal is not FractalType.JULIA:
        return Config(fractal)
    return Config(fractal, parse_number(argv[2]), parse_number(argv[3]))