# vennsearch

Building blocks for a backtracking search over simple, monotone Venn
diagrams drawn with convex curves (typically six of them). The package is
pure Python with no runtime dependencies.

## Modules

- `vennsearch.color` – a curve is a colour `0..n-1`, printed as `a`, `b`,
  `c`, …; a face is labelled by the bit set of curves it lies inside.
  `color_to_char`, `colorset_has_member`, `colorset_to_string` (e.g. `|ac|`)
  and `colorset_to_bare_string` (e.g. `ac`).
- `vennsearch.cycles` – facial cycles. `generate_cycles(n)` lists every
  cyclic order of distinct colours (length 3 or more, smallest colour first)
  in a fixed order with the full cycle `(0, 1, …, n-1)` last. `CycleTable`
  holds them by id, with `get_id`, `id_from_colors("abc")` and
  `reverse_direction`; `Cycle` has `contains_a_then_b`,
  `contains_a_then_b_then_c` and `index_of_color`; `cycle_to_string` prints
  `(abc)`.
- `vennsearch.engine` – a non-deterministic engine. A `Predicate` has an
  `attempt(round)` returning a `PredicateResult` (fail, succeed to the next
  predicate, succeed to the next round, offer choices with
  `predicate_choices(n)`, or suspend) and a `retry(round, choice)`.
  `Engine.run` explores every choice by backtracking; `Engine.resume`
  continues a suspended run. A `Trail` records changes made through
  `set_attr`, `set_item` and `maybe_set_attr` and undoes them with
  `rewind_to`; `freeze` stops rewinding past a point.
  `forward_backward_predicate` builds a predicate from gate, forward and
  backward callables. `FAIL_PREDICATE` and `SUSPEND_PREDICATE` end a sequence.
- `vennsearch.failure` – the kinds of dead end (`Failure`), counted by
  depth, registered in `Failures`; each method records one and returns a
  `SearchFailure` exception to raise.
- `vennsearch.edges` – `Edge` and `CurveLink` of the curves, with
  `follow_forwards`, `follow_backwards`, `path_to` and `path_length`;
  `CurveTracker` keeps backtrackable crossing and edge counts and raises
  `SearchFailure` when a crossing limit is passed or a curve closes up too
  early.
- `vennsearch.s6` – symmetry. `dihedral_group(n)` gives rotations then
  reflections; `Symmetry` classifies face-degree sequences as a
  `SymmetryType` (canonical, equivocal, non-canonical) and computes the
  `Signature` of a diagram and its maximal class signature, given the cycle
  id of every face indexed by colour set. `signature_to_string` and
  `signature_to_long_string` print signatures.
- `vennsearch.innerface` – `central_face_degrees(symmetry, required)`
  yields the canonical degree sequences of the faces around the central
  face, in decreasing lexicographic order, optionally with some positions
  fixed.
- `vennsearch.options` – `parse_options(argv)` reads search options into an
  `Options` dataclass; bad input raises `UsageError`.
- `vennsearch.variations` – `number_of_levels` and `variation_path` give the
  folder layout for the saved variations of one solution.

## Example

```python
from vennsearch.color import colorset_to_string
from vennsearch.cycles import CycleTable, cycle_to_string
from vennsearch.s6 import Symmetry
from vennsearch.innerface import central_face_degrees
from vennsearch.variations import number_of_levels, variation_path

print(colorset_to_string(0b101, 6))             # |ac|

table = CycleTable(6)
full = table.id_from_colors("abcdef")
print(full == len(table) - 1)                    # True
print(cycle_to_string(table[table.reverse_direction(full)]))  # (afedcb)

symmetry = Symmetry(table)
for degrees in central_face_degrees(symmetry):
    print(degrees)                               # canonical sequences summing to 27

print(number_of_levels(5000))                    # 2
print(variation_path("out", 5, 2))               # out/05/000.xml
```

A small engine run:

```python
from vennsearch.engine import (
    Engine, FAIL_PREDICATE, PREDICATE_SUCCESS_NEXT_PREDICATE,
    Predicate, predicate_choices,
)

seen = []
pick = Predicate(
    "pick",
    lambda round_: predicate_choices(3),
    lambda round_, choice: (seen.append(choice), PREDICATE_SUCCESS_NEXT_PREDICATE)[1],
)
Engine().run([pick, FAIL_PREDICATE])
print(seen)                                      # [0, 1, 2]
```

## Options

`parse_options` takes the arguments after the program name:

| flag | meaning |
|------|---------|
| `-f folder` | output folder (required) |
| `-d degrees` | degrees of the faces around the centre, one digit 3–6 per curve (six curves) |
| `-m n` | maximum number of solutions (per degree sequence when `-d` is given) |
| `-n n` | maximum variants per solution |
| `-k n` | solutions to skip (per degree sequence when `-d` is given) |
| `-j n` | variants to skip per solution |
| `-v` | verbose |
| `-t` | trace the engine |

Numeric values must be positive integers.

## What the package does not do

It supplies the pieces a search is made of, not the search itself. There is
no command to run, no complete search program tying the predicates
together, no face graph with cycle propagation, and nothing writes solution
or GraphML files: the options are parsed and the output paths computed, but
acting on them is left to the caller.

## Running the tests

Install with the `test` extra and run `pytest` from the repository root.