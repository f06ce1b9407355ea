"""File layout for the variations of one solution."""

from __future__ import annotations

from typing import Callable, Optional


def number_of_levels(expected_variations: int) -> int:
    """Return how many directory levels hold ``expected_variations`` files,
    keeping each directory to at most 4096 files."""
    levels = 1
    while expected_variations >= 4096:
        levels += 1
        expected_variations //= 256
    return levels


def variation_path(
    prefix: str,
    variation_number: int,
    levels: int,
    make_folder: Optional[Callable[[str], None]] = None,
) -> str:
    """Return the file path of a variation under ``prefix``.

    Each level above the last adds a two-digit hexadecimal folder from the
    low byte of the number; ``make_folder`` is called with each folder path
    as it is built. The file is named by the rest of the number in hex.
    """
    if variation_number < 0:
        raise ValueError("variation number cannot be negative")
    path = prefix
    number = variation_number
    for _ in range(levels - 1):
        path += f"/{number % 256:02x}"
        if make_folder is not None:
            make_folder(path)
        number //= 256
    return f"{path}/{number:03x}.xml"