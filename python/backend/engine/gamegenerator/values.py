"""Value assignment: numbers for a path that add up to the target."""

from __future__ import annotations

from collections.abc import Sequence

from backend.engine.gamegenerator.rng import Rng, rand_int, shuffled
from backend.models.grid import Position
from backend.models.puzzle import ValueRange


def assign_path_values(
    length: int,
    target_sum: int,
    value_range: ValueRange,
    rng: Rng,
) -> list[int] | None:
    """Draw *length* values in *value_range* summing exactly to *target_sum*.

    Each draw is limited to the range that still lets the remaining cells
    reach the target, and the last cell takes the exact remainder. Returns
    ``None`` when no such assignment exists.
    """
    low, high = value_range.min, value_range.max
    if length < 1 or not length * low <= target_sum <= length * high:
        return None

    values: list[int] = []
    remaining = target_sum
    for i in range(length - 1):
        cells_after = length - i - 1
        min_val = max(low, remaining - cells_after * high)
        max_val = min(high, remaining - cells_after * low)
        if min_val > max_val:
            return None
        value = rand_int(rng, min_val, max_val)
        values.append(value)
        remaining -= value
    values.append(remaining)

    # Without the shuffle the last cell would carry the skew of the draws.
    return shuffled(values, rng)


def assign_all_values(
    grid_size: int,
    paths: Sequence[Sequence[Position]],
    target_sum: int,
    value_range: ValueRange,
    rng: Rng,
) -> list[list[int]] | None:
    """Fill a value matrix path by path; ``None`` if any path is infeasible."""
    values = [[0] * grid_size for _ in range(grid_size)]
    for path in paths:
        path_values = assign_path_values(len(path), target_sum, value_range, rng)
        if path_values is None:
            return None
        for pos, value in zip(path, path_values):
            values[pos.row][pos.col] = value
    return values
