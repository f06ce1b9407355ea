"""Colours (curves) and sets of colours.

A colour is a small integer naming one curve of the diagram. A colour set is
an integer used as a bit set: bit ``i`` is set when colour ``i`` is present.
"""

from __future__ import annotations


def color_to_char(color: int) -> str:
    """Return the letter naming ``color``: 0 is ``'a'``, 1 is ``'b'`` and so on."""
    return chr(ord("a") + color)


def colorset_has_member(color: int, colors: int) -> bool:
    """Return whether ``color`` is present in the colour set ``colors``."""
    return bool((colors >> color) & 1)


def colorset_to_bare_string(colors: int, ncolors: int) -> str:
    """Return the letters of the colours in ``colors``, e.g. ``"abc"``."""
    return "".join(
        color_to_char(color)
        for color in range(ncolors)
        if colorset_has_member(color, colors)
    )


def colorset_to_string(colors: int, ncolors: int) -> str:
    """Return the colour set enclosed in pipes, e.g. ``"|abc|"``."""
    return f"|{colorset_to_bare_string(colors, ncolors)}|"