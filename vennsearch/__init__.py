"""Colours, facial cycles, a backtracking engine, edges, symmetry checks and
option parsing for searching simple monotone Venn diagrams."""

__version__ = "0.1.0"

__all__ = [
    "color",
    "cycles",
    "engine",
    "failure",
    "edges",
    "s6",
    "innerface",
    "options",
    "variations",
]