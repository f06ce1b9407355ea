"""Command-line options controlling the search."""

from __future__ import annotations

import getopt
import re
from dataclasses import dataclass, field
from typing import Optional, Sequence

NCOLORS = 6
UNLIMITED = 2**31 - 1

_INTEGER = re.compile(r"\s*[+-]?\d+")


class UsageError(ValueError):
    """Raised when the command line is not acceptable."""


@dataclass
class Options:
    """Settings taken from the command line."""

    target_folder: str
    central_face_degrees: tuple[int, ...] = field(
        default_factory=lambda: (0,) * NCOLORS
    )
    max_variants_per_solution: int = UNLIMITED
    global_max_solutions: int = UNLIMITED
    per_face_degree_max_solutions: int = UNLIMITED
    global_skip_solutions: int = 0
    per_face_degree_skip_solutions: int = 0
    ignore_first_variants_per_solution: int = 0
    verbose: bool = False
    tracing: bool = False


def parse_face_degrees(text: str, ncolors: int = NCOLORS) -> tuple[int, ...]:
    """Parse the degrees of the faces around the centre, one digit each."""
    if len(text) != ncolors:
        raise UsageError(
            f"Central face degrees string must be exactly {ncolors} digits"
        )
    if any(ch not in "3456" for ch in text):
        raise UsageError("Each digit in central face degrees must be between 3 and 6")
    return tuple(int(ch) for ch in text)


def parse_positive(arg: str, flag: str, allow_zero: bool) -> int:
    """Parse a strictly positive decimal integer given to option ``-flag``.

    ``allow_zero`` only changes the wording of the error: zero is refused.
    """
    message = (
        f"-{flag} must be a {'non-negative' if allow_zero else 'positive'} integer."
    )
    match = _INTEGER.match(arg)
    if match is None or match.end() != len(arg):
        raise UsageError(message)
    value = int(match.group())
    if value <= 0:
        raise UsageError(message)
    return value


def parse_options(argv: Sequence[str]) -> Options:
    """Parse the arguments that follow the program name."""
    try:
        pairs, rest = getopt.getopt(list(argv), "f:d:m:n:k:j:vt")
    except getopt.GetoptError:
        raise UsageError("Invalid option") from None
    if rest:
        raise UsageError("Invalid option")

    target: Optional[str] = None
    degrees: Optional[tuple[int, ...]] = None
    max_solutions = UNLIMITED
    skip_solutions = 0
    settings: dict = {}
    for opt, value in pairs:
        if opt == "-f":
            target = value
        elif opt == "-d":
            degrees = parse_face_degrees(value)
        elif opt == "-m":
            max_solutions = parse_positive(value, "m", False)
        elif opt == "-n":
            settings["max_variants_per_solution"] = parse_positive(value, "n", False)
        elif opt == "-k":
            skip_solutions = parse_positive(value, "k", True)
        elif opt == "-j":
            settings["ignore_first_variants_per_solution"] = parse_positive(
                value, "j", True
            )
        elif opt == "-v":
            settings["verbose"] = True
        elif opt == "-t":
            settings["tracing"] = True

    if target is None:
        raise UsageError("Output folder not specified")
    if degrees is not None:
        settings["central_face_degrees"] = degrees
        settings["per_face_degree_max_solutions"] = max_solutions
        settings["per_face_degree_skip_solutions"] = skip_solutions
    else:
        settings["global_max_solutions"] = max_solutions
        settings["global_skip_solutions"] = skip_solutions
    return Options(target_folder=target, **settings)