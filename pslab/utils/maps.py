"""Helpers for lightweight ASCII maps of the lab state."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

import numpy as np

from pslab.types import CellKind, Position

CELL_GLYPHS: Dict[str, str] = {
    "empty": ".",
    "wall": "#",
    "goal": "G",
    "lava": "X",
    "start": "S",
}
ARROWS = ("^", ">", "v", "<")


def ascii_grid(
    cells: Sequence[Sequence[CellKind]],
    agent: Optional[Position] = None,
    h: Optional[np.ndarray] = None,
) -> str:
    """Return the grid as text, one row per line.

    With ``h`` (shape (H, W, 4)), open cells show the arg-max action arrow
    instead of ``.``. The agent is drawn as ``A``.
    """
    if not cells:
        return ""
    lines: List[str] = []
    for y, row in enumerate(cells):
        glyphs: List[str] = []
        for x, kind in enumerate(row):
            glyph = CELL_GLYPHS.get(kind, "?")
            if kind == "empty" and h is not None:
                values = h[y, x]
                # Untrained cells (all equal) stay blank.
                if float(values.max()) > float(values.min()):
                    glyph = ARROWS[int(np.argmax(values))]
            if agent is not None and (x, y) == tuple(agent):
                glyph = "A"
            glyphs.append(glyph)
        lines.append(" ".join(glyphs))
    return "\n".join(lines)


def glow_map(g: np.ndarray, threshold: float = 0.05) -> str:
    """Mark cells whose strongest glow exceeds ``threshold``."""
    if g.size == 0:
        return ""
    peak = g.max(axis=2)
    lines = []
    for row in peak:
        lines.append(" ".join("*" if float(v) > threshold else "." for v in row))
    return "\n".join(lines)
