"""The kinds of failure met during the search, with counts by depth."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterator


@dataclass(eq=False)
class Failure:
    """One kind of failure, counting how often it occurred at each depth."""

    label: str
    short_label: str
    counts: Counter = field(default_factory=Counter)

    def record(self, depth: int) -> "Failure":
        """Count one occurrence at ``depth`` and return this failure."""
        if depth < 0:
            raise ValueError("depth cannot be negative")
        self.counts[depth] += 1
        return self

    @property
    def total(self) -> int:
        return sum(self.counts.values())


class SearchFailure(Exception):
    """Raised when a branch of the search cannot succeed."""

    def __init__(self, failure: Failure) -> None:
        super().__init__(failure.label)
        self.failure = failure


class Failures:
    """The registry of failure kinds; each method records one and returns
    the exception to raise."""

    def __init__(self) -> None:
        self.no_match = Failure("No matching cycles", "N")
        self.crossing_limit_failure = Failure("More than 3 crossing points", "X")
        self.disconnected_curve_failure = Failure("Disconnected curve", "D")
        self.too_many_corners_failure = Failure("Too many corners", "T")
        self.vertex_conflict_failure = Failure("Vertex conflict", "P")
        self.conflicting_constraints_failure = Failure("Conflicting constraints", "C")
        self.disconnected_faces_failure = Failure("Disconnected faces", "F")
        self.non_canonical_failure = Failure("Non Canonical", "=")

    def __iter__(self) -> Iterator[Failure]:
        return iter(
            (
                self.no_match,
                self.crossing_limit_failure,
                self.disconnected_curve_failure,
                self.too_many_corners_failure,
                self.vertex_conflict_failure,
                self.conflicting_constraints_failure,
                self.disconnected_faces_failure,
                self.non_canonical_failure,
            )
        )

    @staticmethod
    def _raise(failure: Failure, depth: int) -> SearchFailure:
        return SearchFailure(failure.record(depth))

    def no_matching_cycles(self, depth: int) -> SearchFailure:
        return self._raise(self.no_match, depth)

    def conflicting_constraints(self, depth: int) -> SearchFailure:
        return self._raise(self.conflicting_constraints_failure, depth)

    def disconnected_faces(self, depth: int) -> SearchFailure:
        return self._raise(self.disconnected_faces_failure, depth)

    def vertex_conflict(self, depth: int) -> SearchFailure:
        return self._raise(self.vertex_conflict_failure, depth)

    def crossing_limit(self, depth: int) -> SearchFailure:
        return self._raise(self.crossing_limit_failure, depth)

    def disconnected_curve(self, depth: int) -> SearchFailure:
        return self._raise(self.disconnected_curve_failure, depth)

    def too_many_corners(self, depth: int) -> SearchFailure:
        return self._raise(self.too_many_corners_failure, depth)

    def non_canonical(self) -> SearchFailure:
        return self._raise(self.non_canonical_failure, 0)