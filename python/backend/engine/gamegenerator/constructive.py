"""Constructive generation of puzzles that are solvable by construction.

The solution is built first: the grid is partitioned into connected paths,
then each path gets values that add up to the target. No search is needed to
prove the result solvable.

Per attempt:

1. Place a seed shape (L, S/Z, snake, spiral, U, stair) at the centre,
   rotated and reflected at random. Only tried in the earlier attempts.
2. Tile the rest with direction-aware random walks. Start cells come from
   edge/corner/interior pools weighted against the running direction bias;
   each step is scored for connectivity, turns and balance, and one of the
   two best candidates is taken. A path that would strand a region too
   small for a line is extended until it no longer does.
3. Reject attempts whose steps are over 80% one direction (not checked in
   the first attempts).
4. Assign values per path.

When every attempt fails, a row/column decomposition is used instead.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from backend.engine.gamegenerator.rng import Rng, choice, rand_int, shuffled
from backend.engine.gamegenerator.shapes import REFLECTIONS, ROTATIONS, SHAPE_TEMPLATES
from backend.engine.gamegenerator.values import assign_all_values, assign_path_values
from backend.models.grid import NEIGHBOR_OFFSETS, Position, cell_id_from_position
from backend.models.puzzle import GeneratedPuzzle, GenerationConfig

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 80
SHAPE_PHASE_ATTEMPTS = 50
BALANCE_GATE_START = 20
BALANCE_MIN_RATIO = 0.2
BALANCE_MAX_RATIO = 0.8

MAX_EXTRA_LENGTH = 3
TOP_CHOICES = 2
FORCE_MIXED_CHANCE = 0.3

TURN_BONUS = 1.5
STREAK_BREAK_BONUS = 1.0
STRAIGHT_PENALTY = 1.5
BIAS_WEIGHT = 1.5
MIXED_BONUS = 1.0
SCORE_NOISE = 0.5

MAX_POOL_BOOST = 3.0
CORNER_WEIGHT = 0.75

FALLBACK_MAX_RUN = 5

Path = list[Position]
Step = tuple[int, int]


@dataclass
class DirectionBalance:
    """Running count of horizontal and vertical unit steps."""

    horizontal: int = 0
    vertical: int = 0

    @property
    def total(self) -> int:
        return self.horizontal + self.vertical

    @property
    def horizontal_ratio(self) -> float:
        if self.total == 0:
            return 0.5
        return self.horizontal / self.total

    @property
    def bias(self) -> float:
        """In ``[-1, 1]``; negative means too many vertical steps so far."""
        return (self.horizontal_ratio - 0.5) * 2

    def record(self, path: Sequence[Position]) -> None:
        for a, b in zip(path, path[1:]):
            if a.row == b.row:
                self.horizontal += 1
            else:
                self.vertical += 1


@dataclass(frozen=True)
class _LengthBounds:
    """Path lengths that can carry the target with the configured values."""

    min: int
    max: int

    @classmethod
    def for_config(cls, config: GenerationConfig) -> _LengthBounds:
        low, high = config.value_range.min, config.value_range.max
        shortest = max(config.min_line_length, -(-config.target_sum // high))
        longest = config.target_sum // low
        return cls(min=shortest, max=longest)


class ConstructiveGenerator:
    """Builds a ``GeneratedPuzzle`` from a config and an RNG."""

    @staticmethod
    def generate(config: GenerationConfig, rng: Rng) -> GeneratedPuzzle:
        """Return a puzzle whose solution paths partition the whole grid."""
        bounds = _LengthBounds.for_config(config)
        if bounds.min > bounds.max:
            logger.warning(
                "No path length can reach target %d with values %d..%d",
                config.target_sum,
                config.value_range.min,
                config.value_range.max,
            )
        else:
            for attempt in range(MAX_ATTEMPTS):
                puzzle = ConstructiveGenerator._attempt(config, bounds, attempt, rng)
                if puzzle is not None:
                    logger.debug("Generated puzzle on attempt %d", attempt)
                    return puzzle

        logger.warning(
            "Constructive generation failed after %d attempts, using fallback",
            MAX_ATTEMPTS,
        )
        return ConstructiveGenerator.fallback(config, rng)

    # -- one attempt ----------------------------------------------------------

    @staticmethod
    def _attempt(
        config: GenerationConfig,
        bounds: _LengthBounds,
        attempt: int,
        rng: Rng,
    ) -> GeneratedPuzzle | None:
        size = config.grid_size
        uncovered = {Position(r, c) for r in range(size) for c in range(size)}
        balance = DirectionBalance()
        paths: list[Path] = []

        if attempt < SHAPE_PHASE_ATTEMPTS:
            shape = _place_center_shape(size, uncovered, bounds, rng)
            if shape is not None:
                paths.append(shape)
                uncovered.difference_update(shape)
                balance.record(shape)

        tiled = _tile_remaining(size, uncovered, bounds, balance, rng)
        if tiled is None:
            logger.debug("Attempt %d: tiling stranded cells", attempt)
            return None
        paths.extend(tiled)

        if attempt >= BALANCE_GATE_START:
            ratio = balance.horizontal_ratio
            if not BALANCE_MIN_RATIO <= ratio <= BALANCE_MAX_RATIO:
                logger.debug(
                    "Attempt %d: rejected direction balance %.2f", attempt, ratio
                )
                return None

        values = assign_all_values(
            size, paths, config.target_sum, config.value_range, rng
        )
        if values is None:
            logger.debug("Attempt %d: value assignment infeasible", attempt)
            return None

        return _to_puzzle(values, paths)

    # -- fallback -------------------------------------------------------------

    @staticmethod
    def fallback(config: GenerationConfig, rng: Rng) -> GeneratedPuzzle:
        """Row/column decomposition that always tiles the grid.

        The rows split into a horizontal block and a vertical block; the
        horizontal rows are cut into runs left to right, then every column
        of the vertical block is cut into runs top to bottom.
        """
        size = config.grid_size
        bounds = _LengthBounds.for_config(config)
        run_min = min(bounds.min, size)
        run_max = max(run_min, min(FALLBACK_MAX_RUN, bounds.max))

        heights = [0] + list(range(run_min, size + 1))
        vertical_height = choice(rng, heights)
        if rng() < 0.5:
            vertical_rows = list(range(vertical_height))
            horizontal_rows = list(range(vertical_height, size))
        else:
            horizontal_rows = list(range(size - vertical_height))
            vertical_rows = list(range(size - vertical_height, size))

        paths: list[Path] = []
        for row in horizontal_rows:
            col = 0
            for run in _split_runs(size, run_min, run_max, rng):
                paths.append([Position(row, col + i) for i in range(run)])
                col += run
        if vertical_rows:
            top = vertical_rows[0]
            for col in range(size):
                row = top
                for run in _split_runs(len(vertical_rows), run_min, run_max, rng):
                    paths.append([Position(row + i, col) for i in range(run)])
                    row += run

        values = [[0] * size for _ in range(size)]
        for path in paths:
            path_values = assign_path_values(
                len(path), config.target_sum, config.value_range, rng
            )
            if path_values is None:
                logger.error(
                    "Fallback could not reach target %d over %d cells; "
                    "filling with mid values",
                    config.target_sum,
                    len(path),
                )
                path_values = [config.value_range.mid] * len(path)
            for pos, value in zip(path, path_values):
                values[pos.row][pos.col] = value

        return _to_puzzle(values, paths)


# -- geometry -----------------------------------------------------------------


def _neighbors(pos: Position, size: int) -> list[Position]:
    result: list[Position] = []
    for dr, dc in NEIGHBOR_OFFSETS:
        r, c = pos.row + dr, pos.col + dc
        if 0 <= r < size and 0 <= c < size:
            result.append(Position(r, c))
    return result


def _is_connected_path(path: Sequence[Position]) -> bool:
    return all(
        abs(a.row - b.row) + abs(a.col - b.col) == 1 for a, b in zip(path, path[1:])
    )


def _components(size: int, cells: set[Position]) -> list[set[Position]]:
    """4-connected components of *cells*."""
    seen: set[Position] = set()
    components: list[set[Position]] = []
    for start in sorted(cells):
        if start in seen:
            continue
        component = {start}
        seen.add(start)
        queue = deque([start])
        while queue:
            pos = queue.popleft()
            for nxt in _neighbors(pos, size):
                if nxt in cells and nxt not in seen:
                    seen.add(nxt)
                    component.add(nxt)
                    queue.append(nxt)
        components.append(component)
    return components


def _stranded_cells(
    size: int,
    uncovered: set[Position],
    taken: Iterable[Position],
    min_length: int,
) -> set[Position]:
    """Cells left in regions too small to ever hold a line."""
    remaining = uncovered.difference(taken)
    if not remaining:
        return set()
    if len(remaining) < min_length:
        return remaining
    stranded: set[Position] = set()
    for component in _components(size, remaining):
        if len(component) < min_length:
            stranded |= component
    return stranded


# -- centre shape -------------------------------------------------------------


def _place_center_shape(
    size: int,
    uncovered: set[Position],
    bounds: _LengthBounds,
    rng: Rng,
) -> Path | None:
    """Try template/rotation/reflection combinations until one fits."""
    center = Position(size // 2, size // 2)
    for template in shuffled(SHAPE_TEMPLATES, rng):
        if not bounds.min <= len(template.path) <= bounds.max:
            continue
        rotations = shuffled(ROTATIONS, rng)
        reflections = shuffled(REFLECTIONS, rng)
        for rotation in rotations:
            for reflection in reflections:
                path = [
                    Position(center.row + dr, center.col + dc)
                    for dr, dc in template.transformed(rotation, reflection)
                ]
                if not all(pos in uncovered for pos in path):
                    continue
                if not _is_connected_path(path):
                    continue
                if _stranded_cells(size, uncovered, path, bounds.min):
                    continue
                return path
    return None


# -- tiling -------------------------------------------------------------------


def _tile_remaining(
    size: int,
    uncovered: set[Position],
    bounds: _LengthBounds,
    balance: DirectionBalance,
    rng: Rng,
) -> list[Path] | None:
    paths: list[Path] = []
    while uncovered:
        if len(uncovered) < bounds.min:
            return None
        start = _select_start_cell(size, uncovered, balance.bias, rng)
        path = _grow_path(size, uncovered, start, bounds, balance.bias, rng)
        path = _repair_isolation(size, uncovered, path, bounds, rng)
        if len(path) < bounds.min:
            return None
        uncovered.difference_update(path)
        balance.record(path)
        paths.append(path)
    return paths


def _select_start_cell(
    size: int,
    uncovered: set[Position],
    bias: float,
    rng: Rng,
) -> Position:
    """Weighted pool choice, then a uniform pick inside the pool.

    Paths starting on the left/right edges tend to run horizontally and
    those on the top/bottom edges vertically, so the pool that yields the
    under-represented direction is boosted.
    """
    last = size - 1
    top_bottom: list[Position] = []
    left_right: list[Position] = []
    corners: list[Position] = []
    interior: list[Position] = []
    for pos in sorted(uncovered):
        on_row_edge = pos.row in (0, last)
        on_col_edge = pos.col in (0, last)
        if on_row_edge and on_col_edge:
            corners.append(pos)
        elif on_row_edge:
            top_bottom.append(pos)
        elif on_col_edge:
            left_right.append(pos)
        else:
            interior.append(pos)

    want_horizontal = max(0.0, -bias)
    want_vertical = max(0.0, bias)
    boost = MAX_POOL_BOOST - 1.0
    pools = [
        (top_bottom, 1.0 + boost * want_vertical),
        (left_right, 1.0 + boost * want_horizontal),
        (corners, CORNER_WEIGHT),
        (interior, 1.0),
    ]
    pools = [(cells, weight) for cells, weight in pools if cells]

    pick = rng() * sum(weight for _, weight in pools)
    for cells, weight in pools:
        if pick < weight:
            return choice(rng, cells)
        pick -= weight
    return choice(rng, pools[-1][0])


def _grow_path(
    size: int,
    uncovered: set[Position],
    start: Position,
    bounds: _LengthBounds,
    bias: float,
    rng: Rng,
) -> Path:
    path: Path = [start]
    in_path = {start}
    target_length = min(
        len(uncovered),
        bounds.max,
        bounds.min + rand_int(rng, 0, MAX_EXTRA_LENGTH),
    )
    force_mixed = rng() < FORCE_MIXED_CHANCE
    last_step: Step | None = None
    straight = 0

    while len(path) < target_length:
        current = path[-1]
        candidates = [
            pos for pos in _neighbors(current, size)
            if pos in uncovered and pos not in in_path
        ]
        if not candidates:
            break

        scored: list[tuple[float, Position, Step]] = []
        for pos in candidates:
            step = (pos.row - current.row, pos.col - current.col)
            horizontal = step[0] == 0
            score = float(
                sum(
                    1
                    for nxt in _neighbors(pos, size)
                    if nxt in uncovered and nxt not in in_path
                )
            )
            if last_step is not None:
                if step != last_step:
                    score += TURN_BONUS
                    if straight >= 2:
                        score += STREAK_BREAK_BONUS
                elif straight >= 2:
                    score -= STRAIGHT_PENALTY
                if force_mixed and horizontal != (last_step[0] == 0):
                    score += MIXED_BONUS
            if bias < 0 and horizontal:
                score += -bias * BIAS_WEIGHT
            elif bias > 0 and not horizontal:
                score += bias * BIAS_WEIGHT
            score += rng() * SCORE_NOISE
            scored.append((score, pos, step))

        scored.sort(key=lambda item: item[0], reverse=True)
        _, chosen, step = scored[int(rng() * min(TOP_CHOICES, len(scored)))]

        straight = straight + 1 if step == last_step else 0
        last_step = step
        path.append(chosen)
        in_path.add(chosen)

    return path


def _repair_isolation(
    size: int,
    uncovered: set[Position],
    path: Path,
    bounds: _LengthBounds,
    rng: Rng,
) -> Path:
    """Extend *path* at either end while it is too short or strands cells.

    Neighbours inside a stranded region are preferred, since absorbing them
    is what removes the danger. Greedy: it may give up with cells still
    stranded, which the caller detects on the next path.
    """
    path = list(path)
    in_path = set(path)
    while len(path) < bounds.max:
        stranded = _stranded_cells(size, uncovered, in_path, bounds.min)
        if not stranded and len(path) >= bounds.min:
            break
        options: list[tuple[bool, Position]] = []
        for at_tail, end in ((True, path[-1]), (False, path[0])):
            for pos in _neighbors(end, size):
                if pos in uncovered and pos not in in_path:
                    options.append((at_tail, pos))
        if not options:
            break
        preferred = [option for option in options if option[1] in stranded]
        at_tail, pos = choice(rng, preferred or options)
        if at_tail:
            path.append(pos)
        else:
            path.insert(0, pos)
        in_path.add(pos)
    return path


def _split_runs(length: int, run_min: int, run_max: int, rng: Rng) -> list[int]:
    """Cut *length* cells into runs no shorter than *run_min*.

    A random run is only drawn while another full run still fits after it;
    otherwise the rest is taken whole.
    """
    runs: list[int] = []
    remaining = length
    while remaining > 0:
        if remaining >= 2 * run_min:
            upper = max(run_min, min(run_max, remaining - run_min))
            run = rand_int(rng, run_min, upper)
        else:
            run = remaining
        runs.append(run)
        remaining -= run
    return runs


def _to_puzzle(values: list[list[int]], paths: Sequence[Path]) -> GeneratedPuzzle:
    return GeneratedPuzzle(
        values=tuple(tuple(row) for row in values),
        solution_paths=tuple(
            tuple(cell_id_from_position(pos) for pos in path) for path in paths
        ),
    )
