"""Edges of the curves, the links between them, and per-curve bookkeeping.

Each face has one edge per colour. The edge of colour ``c`` on face ``F``
runs along curve ``c``; its ``reversed`` edge runs the other way along the
same curve, on the face differing from ``F`` only in colour ``c``. Once the
vertex at the end of an edge is known, ``to`` is set to one of the
``possibly_to`` links, whose ``next`` is the following edge of the curve.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .color import colorset_has_member
from .engine import Trail
from .failure import Failures


@dataclass(eq=False)
class CurveLink:
    """The end of one edge: the vertex there and the edge that follows."""

    next: Optional["Edge"] = field(default=None, repr=False)
    vertex: Any = field(default=None, repr=False)


@dataclass(eq=False)
class Edge:
    """A segment of the curve ``color`` bounding the face ``colors``."""

    color: int
    colors: int
    reversed: Optional["Edge"] = field(default=None, repr=False)
    to: Optional[CurveLink] = field(default=None, repr=False)
    possibly_to: list[CurveLink] = field(default_factory=list, repr=False)

    @property
    def is_clockwise(self) -> bool:
        """An edge is clockwise when its colour belongs to its face."""
        return colorset_has_member(self.color, self.colors)

    def follow_forwards(self) -> Optional["Edge"]:
        """Return the next edge along the curve, or None if not yet known."""
        if self.to is None:
            return None
        return self.to.next

    def follow_backwards(self) -> Optional["Edge"]:
        """Return the previous edge along the curve, or None if not yet known."""
        if self.reversed is None:
            return None
        reversed_next = self.reversed.follow_forwards()
        return None if reversed_next is None else reversed_next.reversed

    def path_to(self, to: "Edge") -> list["Edge"]:
        """Return the edges from this one forwards to ``to``, both included."""
        path = [self]
        current: Optional[Edge] = self
        while current is not to:
            current = current.follow_forwards()
            if current is None:
                raise ValueError("the curve is not complete up to the target edge")
            if current is to.reversed or current is self:
                raise ValueError("the target edge cannot be reached going forwards")
            path.append(current)
        return path

    def path_length(self, to: "Edge") -> int:
        """Return the number of edges from this one forwards to ``to``."""
        return len(self.path_to(to))


class CurveTracker:
    """Backtrackable counts of edges and crossings for each curve."""

    def __init__(
        self, ncolors: int, trail: Trail, failures: Failures, max_crossings: int
    ) -> None:
        self.ncolors = ncolors
        self.trail = trail
        self.failures = failures
        self.max_crossings = max_crossings
        # Indexed first by whether the edge is clockwise, then by colour.
        self.edge_counts: tuple[list[int], list[int]] = ([0] * ncolors, [0] * ncolors)
        self.crossings = [[0] * ncolors for _ in range(ncolors)]
        self.curves_complete = [False] * ncolors
        # Set once a curve is first found complete; deliberately not undone.
        self.color_completed = 0

    def check_crossing_limit(self, a: int, b: int, depth: int) -> None:
        """Count one crossing of curve ``a`` over ``b``; raise past the limit."""
        row = self.crossings[a]
        if row[b] + 1 > self.max_crossings:
            raise self.failures.crossing_limit(depth)
        self.trail.set_item(row, b, row[b] + 1)

    def count_edge(self, edge: Edge) -> None:
        """Count one more edge with a known end on the curve of ``edge``."""
        counts = self.edge_counts[int(edge.is_clockwise)]
        self.trail.set_item(counts, edge.color, counts[edge.color] + 1)

    def curve_checks(self, edge: Edge, depth: int) -> None:
        """Raise if the curve through ``edge`` closed up without all its edges."""
        if self.curves_complete[edge.color]:
            return
        self._check_for_disconnected_curve(self._find_start_of_curve(edge), depth)

    @staticmethod
    def _find_start_of_curve(edge: Edge) -> Edge:
        current = edge
        while True:
            previous = current.follow_backwards()
            if previous is edge:
                return edge
            if previous is None:
                return current
            current = previous

    @staticmethod
    def _curve_length(edge: Edge) -> int:
        length = 1
        current = edge.follow_forwards()
        while current is not edge:
            if current is None:
                raise ValueError("the curve is not closed")
            length += 1
            current = current.follow_forwards()
        return length

    def _check_for_disconnected_curve(self, edge: Edge, depth: int) -> None:
        if edge.reversed is None or edge.reversed.to is None:
            return
        length = self._curve_length(edge)
        expected = self.edge_counts[int(edge.is_clockwise)][edge.color]
        if length < expected:
            raise self.failures.disconnected_curve(depth)
        if length != expected:
            raise RuntimeError("curve longer than its counted edges")
        bit = 1 << edge.color
        if self.color_completed & bit:
            return
        self.color_completed |= bit
        self.trail.set_item(self.curves_complete, edge.color, True)