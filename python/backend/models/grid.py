"""Grid model for the sum trails puzzle.

Every mutation returns a new ``Grid``; the original is left untouched so the
search code can explore hypothetical states next to the live game.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import NamedTuple

CellId = str

# up, down, left, right
NEIGHBOR_OFFSETS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


class Position(NamedTuple):
    row: int
    col: int


class CellState(StrEnum):
    AVAILABLE = "available"
    IN_PATH = "in-path"
    SPENT = "spent"


def cell_id_from_position(pos: Position) -> CellId:
    return f"{pos.row}-{pos.col}"


def position_from_cell_id(cell_id: CellId) -> Position | None:
    """Parse ``"row-col"``; malformed ids give ``None``."""
    parts = cell_id.split("-")
    if len(parts) != 2:
        return None
    try:
        return Position(int(parts[0]), int(parts[1]))
    except ValueError:
        return None


def are_adjacent(a: Position, b: Position) -> bool:
    """True when *a* and *b* share an edge (no diagonals)."""
    return abs(a.row - b.row) + abs(a.col - b.col) == 1


@dataclass(frozen=True)
class Cell:
    id: CellId
    position: Position
    value: int
    state: CellState = CellState.AVAILABLE


@dataclass(frozen=True)
class Grid:
    """Square grid of cells stored row-major as nested tuples."""

    cells: tuple[tuple[Cell, ...], ...]

    # -- construction helpers -------------------------------------------------

    @classmethod
    def create(cls, size: int, values: list[list[int]]) -> Grid:
        """Build a grid of available cells from a ``size``x``size`` matrix.

        Example::

            Grid.create(2, [[1, 2], [3, 4]])
        """
        if len(values) != size or any(len(row) != size for row in values):
            raise ValueError(
                f"Expected a {size}×{size} values matrix, "
                f"got {len(values)} rows."
            )
        rows: list[tuple[Cell, ...]] = []
        for r in range(size):
            row: list[Cell] = []
            for c in range(size):
                pos = Position(r, c)
                row.append(Cell(cell_id_from_position(pos), pos, values[r][c]))
            rows.append(tuple(row))
        return cls(cells=tuple(rows))

    # -- queries --------------------------------------------------------------

    @property
    def size(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    def get_cell(self, pos: Position) -> Cell | None:
        if not 0 <= pos.row < len(self.cells):
            return None
        if not 0 <= pos.col < len(self.cells[0]):
            return None
        return self.cells[pos.row][pos.col]

    def get_cell_by_id(self, cell_id: CellId) -> Cell | None:
        pos = position_from_cell_id(cell_id)
        if pos is None:
            return None
        return self.get_cell(pos)

    def get_adjacent_cells(self, pos: Position) -> list[Cell]:
        """All in-bounds 4-neighbours of *pos*, whatever their state."""
        adjacent: list[Cell] = []
        for dr, dc in NEIGHBOR_OFFSETS:
            cell = self.get_cell(Position(pos.row + dr, pos.col + dc))
            if cell is not None:
                adjacent.append(cell)
        return adjacent

    def get_adjacent_available_cells(self, pos: Position) -> list[Cell]:
        return [
            cell
            for cell in self.get_adjacent_cells(pos)
            if cell.state is CellState.AVAILABLE
        ]

    def get_available_cells(self) -> list[Cell]:
        return [cell for cell in self if cell.state is CellState.AVAILABLE]

    def count_available_cells(self) -> int:
        return sum(1 for cell in self if cell.state is CellState.AVAILABLE)

    def extract_values(self) -> list[list[int]]:
        """Plain value matrix, as stored with saved progress."""
        return [[cell.value for cell in row] for row in self.cells]

    # -- immutable updates ----------------------------------------------------

    def update_cell_state(self, cell_id: CellId, state: CellState) -> Grid:
        return self.update_cells_state([cell_id], state)

    def update_cells_state(self, cell_ids: Iterable[CellId], state: CellState) -> Grid:
        targets = set(cell_ids)
        return Grid(
            cells=tuple(
                tuple(
                    replace(cell, state=state) if cell.id in targets else cell
                    for cell in row
                )
                for row in self.cells
            )
        )

    def mark_cells_as_spent(self, cell_ids: Iterable[CellId]) -> Grid:
        return self.update_cells_state(cell_ids, CellState.SPENT)

    def mark_cells_in_path(self, cell_ids: Iterable[CellId]) -> Grid:
        return self.update_cells_state(cell_ids, CellState.IN_PATH)

    def clear_path_cells(self, cell_ids: Iterable[CellId]) -> Grid:
        return self.update_cells_state(cell_ids, CellState.AVAILABLE)

    def reset(self) -> Grid:
        """Every cell back to available; values are kept."""
        return Grid(
            cells=tuple(
                tuple(replace(cell, state=CellState.AVAILABLE) for cell in row)
                for row in self.cells
            )
        )

    def restore_from_progress(self, completed_lines: Iterable[Iterable[CellId]]) -> Grid:
        """Cells of completed lines become spent, all others available."""
        spent = {cell_id for line in completed_lines for cell_id in line}
        return Grid(
            cells=tuple(
                tuple(
                    replace(
                        cell,
                        state=CellState.SPENT if cell.id in spent else CellState.AVAILABLE,
                    )
                    for cell in row
                )
                for row in self.cells
            )
        )
