"""Facial cycles: cyclic sequences of colours bounding a face."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import product
from typing import Iterator, Optional, Sequence

from .color import color_to_char


@dataclass(frozen=True)
class Cycle:
    """A cyclic sequence of distinct colours, its smallest colour first."""

    curves: tuple[int, ...]

    @property
    def length(self) -> int:
        return len(self.curves)

    @property
    def colors(self) -> int:
        """The colour set of the cycle."""
        result = 0
        for color in self.curves:
            result |= 1 << color
        return result

    def contains_a_then_b(self, a: int, b: int) -> bool:
        """Whether colour ``a`` is directly followed by ``b``, cyclically."""
        curves = self.curves
        return any(
            x == a and y == b for x, y in zip(curves, curves[1:] + curves[:1])
        )

    def contains_a_then_b_then_c(self, a: int, b: int, c: int) -> bool:
        """Whether the sequence ``a, b, c`` occurs, cyclically."""
        curves = self.curves
        return any(
            triple == (a, b, c)
            for triple in zip(curves, curves[1:] + curves[:1], curves[2:] + curves[:2])
        )

    def index_of_color(self, color: int) -> int:
        """Return the position of ``color`` in the cycle."""
        try:
            return self.curves.index(color)
        except ValueError:
            raise ValueError(
                f"colour {color} is not in cycle {cycle_to_string(self)}"
            ) from None


def _is_valid(curves: tuple[int, ...], max_color: int) -> bool:
    return (
        max_color in curves
        and len(set(curves)) == len(curves)
        and min(curves) == curves[0]
    )


def generate_cycles(ncolors: int) -> list[Cycle]:
    """Return every facial cycle for ``ncolors`` curves, in canonical order.

    Cycles whose largest colour is ``k`` come after all cycles using only
    colours below ``k``; within that they come in increasing length, each
    length in reverse lexicographic order. Hence ``(0, 1, ..., n-1)`` is last.
    """
    cycles = []
    for max_color in range(2, ncolors):
        for length in range(3, max_color + 2):
            for curves in product(range(max_color, -1, -1), repeat=length):
                if _is_valid(curves, max_color):
                    cycles.append(Cycle(curves))
    return cycles


def cycle_to_string(cycle: Optional[Cycle]) -> str:
    """Return e.g. ``"(abc)"``, or ``"(NULL)"`` for no cycle."""
    if cycle is None:
        return "(NULL)"
    return "(" + "".join(color_to_char(c) for c in cycle.curves) + ")"


class CycleTable:
    """All facial cycles for a number of colours, addressed by cycle id."""

    def __init__(self, ncolors: int) -> None:
        if ncolors < 3:
            raise ValueError("at least three colours are needed")
        self.ncolors = ncolors
        self.cycles: tuple[Cycle, ...] = tuple(generate_cycles(ncolors))
        self._ids = {cycle.curves: ix for ix, cycle in enumerate(self.cycles)}

    def __len__(self) -> int:
        return len(self.cycles)

    def __getitem__(self, cycle_id: int) -> Cycle:
        return self.cycles[cycle_id]

    def __iter__(self) -> Iterator[Cycle]:
        return iter(self.cycles)

    def get_id(self, curves: Sequence[int]) -> int:
        """Return the id of the cycle with exactly this colour sequence."""
        try:
            return self._ids[tuple(curves)]
        except KeyError:
            raise ValueError(f"no cycle with colours {tuple(curves)}") from None

    def id_from_colors(self, colors: str) -> int:
        """Return the id of the cycle named by letters, e.g. ``"abc"``."""
        return self.get_id([ord(ch) - ord("a") for ch in colors])

    def reverse_direction(self, cycle_id: int) -> int:
        """Return the id of the mirror image, keeping the first colour fixed."""
        curves = self.cycles[cycle_id].curves
        return self.get_id(curves[:1] + curves[:0:-1])