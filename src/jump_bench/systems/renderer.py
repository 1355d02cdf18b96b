"""Text rendering of the tile grid.

Rendering is a read-only projection: render_text(grid) -> str.
Runs host-side (NumPy), not under JIT.
"""

from __future__ import annotations

from typing import Dict

import numpy as np

from .observation import Tile


TILE_CHARS: Dict[Tile, str] = {
    Tile.EMPTY: " ",
    Tile.GROUND: "=",
    Tile.PLAYER: "@",
    Tile.WALL: "#",
}


def render_text(grid, border: bool = True) -> str:
    """Render a (size, size) tile grid with the top row first.

    Parameters
    ----------
    grid : array-like
        Tile grid indexed ``[row, column]``, row 0 at the bottom
    border : bool
        Frame the board with ``+``, ``-`` and ``|`` (default: True)
    """
    cells = np.asarray(grid)
    if cells.ndim != 2:
        raise ValueError(f"Expected a 2D tile grid, got shape {cells.shape}.")

    lines = [
        "".join(TILE_CHARS[Tile(int(v))] for v in row)
        for row in cells[::-1]
    ]
    if border:
        edge = "+" + "-" * cells.shape[1] + "+"
        lines = [edge] + [f"|{line}|" for line in lines] + [edge]
    return "\n".join(lines)
