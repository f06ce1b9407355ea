"""Choice of the degrees of the faces around the central face."""

from __future__ import annotations

from math import comb
from typing import Iterator, Optional, Sequence

from .s6 import Symmetry, SymmetryType


def _total_degree(ncolors: int) -> int:
    # Faces inside all but one curve: 2 * C(n, n-1) + C(n, n-2).
    return 2 * ncolors + comb(ncolors, 2)


def central_face_degrees(
    symmetry: Symmetry, required: Optional[Sequence[int]] = None
) -> Iterator[tuple[int, ...]]:
    """Yield the possible degrees of the faces around the central face.

    Each degree lies between 3 and the number of colours; they sum to the
    total fixed by the number of colours, and non-canonical sequences are
    skipped. A non-zero entry of ``required`` fixes the degree at that
    position. Sequences come in decreasing lexicographic order.
    """
    n = symmetry.ncolors
    total = _total_degree(n)
    if required is None:
        fixed = (0,) * n
    else:
        fixed = tuple(required)
        if len(fixed) != n:
            raise ValueError(f"expected {n} required degrees")
        for degree in fixed:
            if degree != 0 and not 3 <= degree <= n:
                raise ValueError(f"face degree {degree} must be between 3 and {n}")

    def extend(prefix: tuple[int, ...], partial: int) -> Iterator[tuple[int, ...]]:
        position = len(prefix)
        if position == n:
            if (
                partial == total
                and symmetry.central_degrees_symmetry_type(prefix)
                is not SymmetryType.NON_CANONICAL
            ):
                yield prefix
            return
        for degree in range(n, 2, -1):
            if fixed[position] and degree != fixed[position]:
                continue
            running = partial + degree
            if running + 3 * (n - position - 1) > total:
                continue
            yield from extend(prefix + (degree,), running)

    return extend((), 0)