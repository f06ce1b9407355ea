import random

import pytest

from vennsearch.cycles import CycleTable
from vennsearch.s6 import (
    Signature,
    Symmetry,
    SymmetryType,
    dihedral_group,
    signature_to_long_string,
    signature_to_string,
)


@pytest.fixture(scope="module")
def table4():
    return CycleTable(4)


@pytest.fixture(scope="module")
def sym4(table4):
    return Symmetry(table4)


@pytest.fixture(scope="module")
def sym6():
    return Symmetry(CycleTable(6))


def _permute_colorset(colors, permutation):
    result = 0
    for color, image in enumerate(permutation):
        if (colors >> color) & 1:
            result |= 1 << image
    return result


def _random_diagram(table, seed):
    rng = random.Random(seed)
    ids = list(range(len(table)))
    full = [i for i in ids if table[i].length == table.ncolors]
    faces = [rng.choice(ids) for _ in range(1 << table.ncolors)]
    faces[0] = rng.choice(full)
    faces[5] = rng.choice(full)
    return faces


def test_dihedral_group_six_matches_table():
    group = dihedral_group(6)
    assert group[0] == (0, 1, 2, 3, 4, 5)
    assert group[1] == (1, 2, 3, 4, 5, 0)
    assert group[6] == (5, 4, 3, 2, 1, 0)
    assert group[11] == (0, 5, 4, 3, 2, 1)


def test_dihedral_group_four_matches_table():
    assert dihedral_group(4) == (
        (0, 1, 2, 3), (1, 2, 3, 0), (2, 3, 0, 1), (3, 0, 1, 2),
        (3, 2, 1, 0), (2, 1, 0, 3), (1, 0, 3, 2), (0, 3, 2, 1),
    )


@pytest.mark.parametrize("n", [3, 4, 5, 6])
def test_dihedral_group_elements_are_distinct_permutations(n):
    group = dihedral_group(n)
    assert len(set(group)) == 2 * n
    for permutation in group:
        assert sorted(permutation) == list(range(n))


def test_sequence_order_is_a_bijection(sym6):
    order = sym6.sequence_order
    assert sorted(order) == list(range(64))
    for position, colors in enumerate(order):
        assert sym6.inverse_sequence_order[colors] == position
    assert order[:6] == tuple(63 & ~(1 << i) for i in range(6))


def test_automorphism_maps_cycle_to_last(sym6):
    table = sym6.table
    for cycle_id, cycle in enumerate(table):
        if cycle.length == 6:
            permutation = sym6.automorphism(cycle_id)
            assert sym6.permute_cycle_id(cycle_id, permutation) == len(table) - 1


def test_automorphism_rejects_short_cycle(sym6):
    short = next(i for i, c in enumerate(sym6.table) if c.length == 3)
    with pytest.raises(ValueError):
        sym6.automorphism(short)


def test_permute_identity_and_length(sym4, table4):
    for cycle_id, cycle in enumerate(table4):
        assert sym4.permute_cycle_id(cycle_id, (0, 1, 2, 3)) == cycle_id
        image = sym4.permute_cycle_id(cycle_id, (2, 0, 3, 1))
        assert table4[image].length == cycle.length


def test_central_degrees_symmetry_types(sym6):
    assert sym6.central_degrees_symmetry_type((6, 6, 6, 3, 3, 3)) is SymmetryType.EQUIVOCAL
    assert sym6.central_degrees_symmetry_type((3, 3, 3, 6, 6, 6)) is SymmetryType.NON_CANONICAL
    assert sym6.central_degrees_symmetry_type((6, 5, 4, 3, 3, 3)) is SymmetryType.CANONICAL


def test_central_degrees_wrong_length(sym6):
    with pytest.raises(ValueError):
        sym6.central_degrees_symmetry_type((6, 5, 4))


def test_uniform_degrees_are_equivocal(sym4, table4):
    full = next(i for i, c in enumerate(table4) if c.length == 4)
    faces = [full] * 16
    assert sym4.face_degrees_symmetry_type(faces) is SymmetryType.EQUIVOCAL
    assert sym4.face_degree_signature(faces) == "4444"


def test_signature_from_faces(sym4, table4):
    faces = _random_diagram(table4, 1)
    signature = sym4.signature_from_faces(faces)
    assert signature.class_signature == tuple(faces)
    assert signature.offset == 15
    assert signature.reflected is False


def test_signature_from_faces_wrong_length(sym4):
    with pytest.raises(ValueError):
        sym4.signature_from_faces([0, 1, 2])


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_max_signature_starts_with_full_cycle(sym4, table4, seed):
    signature = sym4.max_signature(_random_diagram(table4, seed))
    assert signature.class_signature[0] == len(table4) - 1
    assert len(signature.class_signature) == 16


@pytest.mark.parametrize("seed", [4, 5])
def test_max_signature_invariant_under_relabelling(sym4, table4, seed):
    faces = _random_diagram(table4, seed)
    permutation = (1, 3, 0, 2)
    relabelled = [0] * 16
    for colors, cycle_id in enumerate(faces):
        relabelled[_permute_colorset(colors, permutation)] = sym4.permute_cycle_id(
            cycle_id, permutation
        )
    assert (
        sym4.max_signature(relabelled).class_signature
        == sym4.max_signature(faces).class_signature
    )


@pytest.mark.parametrize("seed", [6, 7])
def test_max_signature_invariant_under_reflection(sym4, table4, seed):
    faces = _random_diagram(table4, seed)
    mirrored = [table4.reverse_direction(c) for c in faces]
    assert (
        sym4.max_signature(mirrored).class_signature
        == sym4.max_signature(faces).class_signature
    )


def test_max_signature_needs_full_face(sym4, table4):
    short = next(i for i, c in enumerate(table4) if c.length == 3)
    with pytest.raises(ValueError):
        sym4.max_signature([short] * 16)


def test_signature_to_string():
    assert signature_to_string(Signature((0, 27, 1), 7)) == "AaBbAb"


def test_signature_to_long_string():
    table = CycleTable(3)
    abc = table.id_from_colors("abc")
    acb = table.id_from_colors("acb")
    ids = (abc, acb) * 4
    text = signature_to_long_string(Signature(ids, 7, True), table)
    assert text == "!|abc|:" + " (abc) (acb)" * 4
    plain = signature_to_long_string(Signature(ids, 1, False), table)
    assert plain.startswith(" |a|: (abc)")