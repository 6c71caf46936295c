"""Puzzle configuration and the records that describe a puzzle in play."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from backend.models.grid import CellId


class GameMode(StrEnum):
    DAILY = "daily"
    PRACTICE = "practice"


class Difficulty(StrEnum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class ValueRange:
    min: int
    max: int

    def __post_init__(self) -> None:
        if self.min < 1:
            raise ValueError(f"Cell values must be positive, got min={self.min}.")
        if self.min > self.max:
            raise ValueError(
                f"Invalid value range: min={self.min} is greater than max={self.max}."
            )

    @property
    def mid(self) -> int:
        return (self.min + self.max) // 2


@dataclass(frozen=True)
class GenerationConfig:
    """Shape of a puzzle: grid size, line rules and the value range."""

    grid_size: int
    min_line_length: int
    target_sum: int
    value_range: ValueRange

    def __post_init__(self) -> None:
        if self.grid_size < 1:
            raise ValueError(f"Grid size must be positive, got {self.grid_size}.")
        if self.min_line_length < 1:
            raise ValueError(
                f"Minimum line length must be positive, got {self.min_line_length}."
            )
        if self.min_line_length > self.grid_size:
            raise ValueError(
                f"Minimum line length {self.min_line_length} does not fit a "
                f"{self.grid_size}×{self.grid_size} grid."
            )
        if self.target_sum < 1:
            raise ValueError(f"Target sum must be positive, got {self.target_sum}.")

    def can_sum(self, length: int) -> bool:
        """Whether a path of *length* cells can hit the target at all."""
        return (
            length * self.value_range.min
            <= self.target_sum
            <= length * self.value_range.max
        )


DifficultyConfig = GenerationConfig


@dataclass(frozen=True)
class GeneratedPuzzle:
    """Grid values plus the hidden solution they were derived from.

    ``solution_paths`` partitions every cell of the grid; each path is an
    ordered run of 4-adjacent cells whose values add up to the target.
    """

    values: tuple[tuple[int, ...], ...]
    solution_paths: tuple[tuple[CellId, ...], ...]

    def values_matrix(self) -> list[list[int]]:
        return [list(row) for row in self.values]

    def paths_list(self) -> list[list[CellId]]:
        return [list(path) for path in self.solution_paths]


@dataclass
class Line:
    id: str
    cell_ids: list[CellId]
    sum: int


@dataclass
class CurrentPath:
    cell_ids: list[CellId] = field(default_factory=list)
    sum: int = 0
