"""Seed shapes placed at the grid centre before tiling."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

Offset = tuple[int, int]


class Reflection(StrEnum):
    NONE = "none"
    HORIZONTAL = "h"
    VERTICAL = "v"


@dataclass(frozen=True)
class ShapeTemplate:
    """A short path given as ``(row, col)`` offsets from its first cell."""

    name: str
    path: tuple[Offset, ...]

    def transformed(self, rotation: int, reflection: Reflection) -> list[Offset]:
        """Rotate clockwise *rotation* quarter turns, then reflect."""
        path = list(self.path)
        for _ in range(rotation % 4):
            path = [(c, -r) for r, c in path]
        if reflection is Reflection.HORIZONTAL:
            path = [(r, -c) for r, c in path]
        elif reflection is Reflection.VERTICAL:
            path = [(-r, c) for r, c in path]
        return path


SHAPE_TEMPLATES: tuple[ShapeTemplate, ...] = (
    ShapeTemplate("L-right", ((0, 0), (1, 0), (2, 0), (2, 1), (2, 2))),
    ShapeTemplate("L-left", ((0, 0), (1, 0), (2, 0), (2, -1), (2, -2))),
    ShapeTemplate("L-short", ((0, 0), (1, 0), (2, 0), (2, 1))),
    ShapeTemplate("S-shape", ((0, 0), (0, 1), (1, 1), (1, 2), (1, 3))),
    ShapeTemplate("Z-shape", ((0, 0), (0, 1), (1, 1), (2, 1), (2, 2))),
    ShapeTemplate("snake-v", ((0, 0), (1, 0), (1, 1), (2, 1), (2, 0), (3, 0))),
    ShapeTemplate("snake-h", ((0, 0), (0, 1), (1, 1), (1, 2), (0, 2), (0, 3))),
    ShapeTemplate("spiral", ((0, 0), (0, 1), (0, 2), (1, 2), (1, 1), (2, 1))),
    ShapeTemplate("U-shape", ((0, 0), (1, 0), (2, 0), (2, 1), (2, 2), (1, 2))),
    ShapeTemplate("stair", ((0, 0), (0, 1), (1, 1), (1, 2), (2, 2))),
)

ROTATIONS: tuple[int, ...] = (0, 1, 2, 3)
REFLECTIONS: tuple[Reflection, ...] = (
    Reflection.NONE,
    Reflection.HORIZONTAL,
    Reflection.VERTICAL,
)
