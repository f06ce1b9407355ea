"""Symmetries of diagrams: canonical forms under relabelling and reflection.

Colour permutations from the dihedral group act on faces (by permuting the
colour sets) and on facial cycles (by permuting their colours). A diagram is
described by the cycle id of each face, indexed by the face's colour set.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Sequence

from .color import colorset_to_string
from .cycles import CycleTable, cycle_to_string

Permutation = tuple[int, ...]


class SymmetryType(enum.Enum):
    """How a sequence relates to its images under the dihedral group."""

    CANONICAL = "canonical"
    EQUIVOCAL = "equivocal"
    NON_CANONICAL = "non-canonical"


@dataclass(frozen=True)
class Signature:
    """A diagram's cycle ids relative to a central face and a labelling.

    ``offset`` is the colour set of the face taken as centre, and
    ``reflected`` records whether the diagram was mirrored.
    """

    class_signature: tuple[int, ...]
    offset: int
    reflected: bool = False


def dihedral_group(ncolors: int) -> tuple[Permutation, ...]:
    """Return the rotations, then the reflections, of ``ncolors`` colours."""
    if ncolors < 1:
        raise ValueError("at least one colour is needed")
    rotations = [
        tuple((i + k) % ncolors for i in range(ncolors)) for k in range(ncolors)
    ]
    reflections = [
        tuple((ncolors - 1 - k - i) % ncolors for i in range(ncolors))
        for k in range(ncolors)
    ]
    return tuple(rotations + reflections)


def _permute_colorset(colors: int, permutation: Permutation) -> int:
    result = 0
    for color, image in enumerate(permutation):
        if (colors >> color) & 1:
            result |= 1 << image
    return result


def _order_key(signature: Signature) -> bytes:
    # Signatures are ordered by the little-endian 64-bit encoding of their ids.
    return b"".join(
        cycle_id.to_bytes(8, "little") for cycle_id in signature.class_signature
    )


def signature_to_string(signature: Signature) -> str:
    """Encode each cycle id as two letters: ``A``+id//26 and ``a``+id%26."""
    return "".join(
        chr(ord("A") + cycle_id // 26) + chr(ord("a") + cycle_id % 26)
        for cycle_id in signature.class_signature
    )


def signature_to_long_string(signature: Signature, table: CycleTable) -> str:
    """Return the reflection flag, central face and every face's cycle."""
    flag = "!" if signature.reflected else " "
    head = f"{flag}{colorset_to_string(signature.offset, table.ncolors)}:"
    return head + "".join(
        " " + cycle_to_string(table[cycle_id])
        for cycle_id in signature.class_signature
    )


class Symmetry:
    """Canonical face ordering and symmetry checks for one cycle table."""

    def __init__(self, table: CycleTable) -> None:
        self.table = table
        self.ncolors = n = table.ncolors
        self.nfaces = 1 << n
        self.group = dihedral_group(n)
        full = self.nfaces - 1

        # Faces missing one colour first, then missing the first and last
        # colours, then missing consecutive pairs, then everything else.
        priority = (
            [1 << i for i in range(n)]
            + [(1 << (n - 1)) | 1]
            + [3 << i for i in range(n - 1)]
            + list(range(self.nfaces))
        )
        seen: set[int] = set()
        order = []
        for omitted in priority:
            if omitted in seen:
                continue
            seen.add(omitted)
            order.append(full & ~omitted)
        if len(order) != self.nfaces:
            raise RuntimeError("face ordering does not cover every face")
        self.sequence_order: tuple[int, ...] = tuple(order)
        inverse = [0] * self.nfaces
        for position, colors in enumerate(order):
            inverse[colors] = position
        self.inverse_sequence_order: tuple[int, ...] = tuple(inverse)

        self._position_maps = tuple(
            tuple(
                inverse[_permute_colorset(order[k], permutation)]
                for k in range(self.nfaces)
            )
            for permutation in self.group
        )

    def _check_faces(self, face_cycle_ids: Sequence[int]) -> tuple[int, ...]:
        ids = tuple(face_cycle_ids)
        if len(ids) != self.nfaces:
            raise ValueError(f"expected {self.nfaces} face cycle ids, got {len(ids)}")
        return ids

    def automorphism(self, cycle_id: int) -> Permutation:
        """Return the relabelling taking a full-length cycle to ``(0, 1, ..., n-1)``."""
        cycle = self.table[cycle_id]
        if cycle.length != self.ncolors:
            raise ValueError("an automorphism needs a cycle through every colour")
        result = [0] * self.ncolors
        for position, color in enumerate(cycle.curves):
            result[color] = position
        return tuple(result)

    def permute_cycle_id(self, cycle_id: int, permutation: Sequence[int]) -> int:
        """Return the id of the cycle with its colours relabelled."""
        permuted = [permutation[color] for color in self.table[cycle_id].curves]
        start = permuted.index(min(permuted))
        return self.table.get_id(permuted[start:] + permuted[:start])

    def _degrees_in_order(self, face_cycle_ids: Sequence[int]) -> tuple[int, ...]:
        ids = self._check_faces(face_cycle_ids)
        return tuple(self.table[ids[colors]].length for colors in self.sequence_order)

    def _canonicity(self, degrees: tuple[int, ...]) -> SymmetryType:
        images = sorted(
            (tuple(degrees[ix] for ix in positions) for positions in self._position_maps),
            reverse=True,
        )
        if images[0] != degrees:
            return SymmetryType.NON_CANONICAL
        if images[1] == images[0]:
            return SymmetryType.EQUIVOCAL
        return SymmetryType.CANONICAL

    def face_degrees_symmetry_type(self, face_cycle_ids: Sequence[int]) -> SymmetryType:
        """Classify the face degrees of a complete diagram."""
        return self._canonicity(self._degrees_in_order(face_cycle_ids))

    def central_degrees_symmetry_type(self, degrees: Sequence[int]) -> SymmetryType:
        """Classify the degrees of the faces around the central face."""
        degrees = tuple(degrees)
        if len(degrees) != self.ncolors:
            raise ValueError(f"expected {self.ncolors} face degrees")
        return self._canonicity(degrees + (0,) * (self.nfaces - self.ncolors))

    def face_degree_signature(self, face_cycle_ids: Sequence[int]) -> str:
        """Return the degrees of the faces around the centre as digits."""
        degrees = self._degrees_in_order(face_cycle_ids)
        return "".join(str(d) for d in degrees[: self.ncolors])

    def signature_from_faces(self, face_cycle_ids: Sequence[int]) -> Signature:
        """Return the signature of the diagram as given."""
        return Signature(self._check_faces(face_cycle_ids), self.nfaces - 1, False)

    def _reflected(self, signature: Signature) -> Signature:
        return Signature(
            tuple(self.table.reverse_direction(c) for c in signature.class_signature),
            signature.offset,
            not signature.reflected,
        )

    def _permuted(self, signature: Signature, permutation: Permutation) -> Signature:
        ids = [0] * self.nfaces
        for colors, cycle_id in enumerate(signature.class_signature):
            ids[_permute_colorset(colors, permutation)] = self.permute_cycle_id(
                cycle_id, permutation
            )
        return Signature(
            tuple(ids),
            _permute_colorset(signature.offset, permutation),
            signature.reflected,
        )

    def _recentered(self, signature: Signature, center: int) -> Signature:
        ids = signature.class_signature
        return Signature(
            tuple(ids[colors ^ center] for colors in range(self.nfaces)),
            center ^ signature.offset,
            signature.reflected,
        )

    def _max_spun(self, signature: Signature) -> Signature:
        best = signature
        permuted = self._permuted(
            signature, self.automorphism(signature.class_signature[0])
        )
        rotation = self.group[1]
        for _ in range(self.ncolors):
            if _order_key(permuted) > _order_key(best):
                best = permuted
            permuted = self._permuted(permuted, rotation)
        return best

    def max_signature(self, face_cycle_ids: Sequence[int]) -> Signature:
        """Return the greatest signature over every full-length centre face,
        every rotation of the labels, and both orientations."""
        from_faces = self.signature_from_faces(face_cycle_ids)
        results = []
        for center, cycle_id in enumerate(from_faces.class_signature):
            if self.table[cycle_id].length == self.ncolors:
                recentered = self._recentered(from_faces, center)
                results.append(self._max_spun(recentered))
                results.append(self._max_spun(self._reflected(recentered)))
        if not results:
            raise ValueError("no face has a cycle through every colour")
        return max(results, key=_order_key)