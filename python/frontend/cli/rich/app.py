"""Rich terminal frontend — styled grid, HUD and keyboard line drawing.

Move the cursor with the arrows or WASD. Space starts a line under the
cursor; moving while drawing extends it (stepping back onto the previous
cell undoes a step) and space again commits it. Progress is saved after
every commit and reset.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.engine.gameplay import GamePlay, calculate_score, generate_share_text
from backend.engine.gameplay.scoring import RANK_EMOJI, RANK_TITLE
from backend.engine.gamegenerator import PuzzleGenerator
from backend.engine.gamestate import GameState
from backend.models.grid import CellState, Position, cell_id_from_position
from backend.models.progress import ProgressStore
from backend.models.puzzle import Difficulty, GameMode
from backend.models.stats import PlayerStats, StatsStore
from frontend.cli.input_handler import get_key

console = Console()

LINE_STYLES = ("green", "blue", "yellow", "magenta", "red", "cyan")

_MOVES: dict[str, tuple[int, int]] = {
    "up": (-1, 0),
    "down": (1, 0),
    "left": (0, -1),
    "right": (0, 1),
}

_REASON_TEXT = {
    "not-adjacent": "Cells must touch side by side.",
    "already-in-path": "That cell is already in the line.",
    "spent": "That cell is already used.",
    "no-path": "Press space to start a line first.",
    "too-short": "Line is too short.",
    "wrong-sum": "Line does not hit the target.",
}


# -- helpers ------------------------------------------------------------------


def _format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m:02d}:{s:02d}"


def _line_index(state: GameState) -> dict[str, int]:
    index: dict[str, int] = {}
    for i, line in enumerate(state.lines):
        for cell_id in line.cell_ids:
            index[cell_id] = i
    return index


# -- grid rendering -----------------------------------------------------------


def _render_grid(
    state: GameState,
    cursor: Position | None = None,
    hint_ids: frozenset[str] = frozenset(),
) -> Table:
    """Return a Rich Table of the grid coloured by cell state."""
    width = len(str(max(cell.value for cell in state.grid)))
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(state.grid.size):
        table.add_column(width=width + 1, justify="center")

    line_of = _line_index(state)
    for row in state.grid.cells:
        cells: list[str] = []
        for cell in row:
            text = f"{cell.value:>{width}}"
            if cell.state is CellState.SPENT:
                style = f"dim {LINE_STYLES[line_of.get(cell.id, 0) % len(LINE_STYLES)]}"
            elif cell.state is CellState.IN_PATH:
                style = "bold black on cyan"
            elif cell.id in hint_ids:
                style = "bold black on yellow"
            else:
                style = "bold white"
            if cursor is not None and cell.position == cursor:
                style += " reverse"
            cells.append(f"[{style}]{text}[/]")
        table.add_row(*cells)

    return table


def _render_solution(state: GameState) -> Table:
    """Values coloured by the solution path that owns each cell."""
    owner: dict[str, int] = {}
    for i, path in enumerate(state.solution_paths):
        for cell_id in path:
            owner[cell_id] = i

    table = Table(show_header=False, box=rich.box.ROUNDED, border_style="dim")
    for _ in range(state.grid.size):
        table.add_column(justify="center")
    for row in state.grid.cells:
        table.add_row(
            *(
                f"[{LINE_STYLES[owner.get(cell.id, 0) % len(LINE_STYLES)]}]{cell.value}[/]"
                for cell in row
            )
        )
    return table


def print_puzzle(state: GameState, show_solution: bool = True) -> None:
    """Print a puzzle (and optionally its solution) without playing it."""
    title = (
        f"[bold cyan]{state.puzzle_id}[/bold cyan]  "
        f"target {state.target_sum}, min {state.min_line_length} cells"
    )
    parts = [Align.center(_render_grid(state))]
    if show_solution:
        parts.append(Text(""))
        parts.append(Align.center(Text(f"Solution: {len(state.solution_paths)} lines", style="dim")))
        parts.append(Align.center(_render_solution(state)))
    console.print(Panel(Group(*parts), title=title, border_style="bright_blue"))


# -- screens ------------------------------------------------------------------


def _draw_menu(difficulty: Difficulty) -> None:
    console.clear()

    levels = Text()
    for i, level in enumerate(Difficulty):
        if i:
            levels.append("  ")
        if level is difficulty:
            levels.append(f" {level.value} ", style="bold green on #313244")
        else:
            levels.append(f" {level.value} ", style="dim")

    opts = Text()
    opts.append("  1", style="bold cyan")
    opts.append("  Daily    ")
    opts.append("2", style="bold yellow")
    opts.append("  Practice    ")
    opts.append("3", style="bold magenta")
    opts.append("  Stats    ")
    opts.append("Q", style="dim bold")
    opts.append("  Quit", style="dim")

    body = Group(
        Text(""),
        Align.center(levels),
        Align.center(Text("  ← →  practice difficulty", style="dim")),
        Text(""),
        Align.center(opts),
        Text(""),
    )
    console.print()
    console.print(
        Align.center(
            Panel(
                body,
                title="[bold]S U M   T R A I L S[/bold]",
                border_style="bright_blue",
                padding=(1, 4),
            )
        )
    )


def _draw_game(
    game: GamePlay,
    cursor: Position,
    hint_ids: frozenset[str],
    status: str = "",
) -> None:
    console.clear()
    state = game.state

    current = state.current_sum
    sum_style = "bold red" if current > state.target_sum else "bold yellow"

    hud = Text()
    hud.append("  Target: ", style="dim")
    hud.append(str(state.target_sum), style="bold green")
    hud.append("    Sum: ", style="dim")
    hud.append(str(current), style=sum_style)
    hud.append("    Left: ", style="dim")
    hud.append(str(state.remaining_cells), style="bold yellow")
    hud.append("    Lines: ", style="dim")
    hud.append(str(len(state.lines)), style="bold yellow")
    hud.append("    Time: ", style="dim")
    hud.append(_format_time(state.elapsed_time), style="bold yellow")

    controls = Text()
    controls.append("  ↑↓←→", style="bold cyan")
    controls.append(" / ", style="dim")
    controls.append("WASD", style="bold cyan")
    controls.append("  move   ", style="dim")
    controls.append("SPACE", style="bold cyan")
    controls.append("  start/commit   ", style="dim")
    controls.append("X", style="bold cyan")
    controls.append("  clear   ", style="dim")
    controls.append("N", style="bold cyan")
    controls.append("  hint   ", style="dim")
    controls.append("R", style="bold cyan")
    controls.append("  reset   ", style="dim")
    controls.append("H", style="bold cyan")
    controls.append("  help   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  back", style="dim")

    mode = "Daily" if state.mode is GameMode.DAILY else "Practice"
    panel = Panel(
        Align.center(_render_grid(state, cursor, hint_ids)),
        title=f"[bold cyan]Sum Trails  {mode}[/bold cyan]",
        subtitle=f"[dim]lines of {state.min_line_length}+ cells summing to {state.target_sum}[/dim]",
        border_style="bright_blue",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(hud))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(controls))


def _draw_help(game: GamePlay) -> None:
    console.clear()
    state = game.state
    rules = Text()
    rules.append("\n  Draw lines through side-by-side cells.\n")
    rules.append("  Each line needs at least ")
    rules.append(str(state.min_line_length), style="bold yellow")
    rules.append(" cells adding up to exactly ")
    rules.append(str(state.target_sum), style="bold green")
    rules.append(".\n")
    rules.append("  A used cell cannot be used again. Clear the whole grid to win.\n")
    rules.append("  One hint per puzzle shows a line from the solution.\n\n")
    rules.append("  Clock paused. Press any key to continue.\n", style="dim")
    console.print()
    console.print(
        Align.center(Panel(rules, title="[bold]How to play[/bold]", border_style="bright_blue"))
    )


def _draw_win(game: GamePlay) -> None:
    console.clear()
    state = game.state
    score = calculate_score(state)

    congrats = Text()
    congrats.append(f"\n  {RANK_EMOJI[score.rank]} ", style="bold yellow")
    congrats.append(RANK_TITLE[score.rank], style="bold green")
    congrats.append(f"  {score.lines_found} lines in {_format_time(state.elapsed_time)}\n")

    parts = [Align.center(_render_grid(state)), Align.center(congrats)]
    if state.mode is GameMode.DAILY:
        parts.append(Align.center(Text(generate_share_text(state))))

    console.print()
    console.print(
        Align.center(
            Panel(
                Group(*parts),
                title="[bold green]Solved![/bold green]",
                border_style="bold green",
                padding=(1, 2),
            )
        )
    )


def _render_stats(stats: PlayerStats) -> Table:
    table = Table(show_header=False, box=rich.box.ROUNDED, border_style="dim")
    table.add_column(style="dim")
    table.add_column(justify="right", style="bold yellow")

    def ms(value: int | None) -> str:
        return "-" if value is None else _format_time(value / 1000)

    table.add_row("Daily streak", str(stats.daily_streak))
    table.add_row("Puzzles solved", str(stats.total_puzzles_completed))
    table.add_row("Lines drawn", str(stats.total_lines_drawn))
    table.add_row("Best time", ms(stats.best_time_ms))
    table.add_row("Average time", ms(stats.average_time_ms))
    table.add_row("Last daily", stats.last_daily_date or "-")
    return table


def print_stats(stats: PlayerStats) -> None:
    """Print the player's stats without starting a game."""
    console.print(
        Panel(_render_stats(stats), title="[bold]S T A T S[/bold]", border_style="bright_blue")
    )


def _draw_stats(stats: PlayerStats) -> None:
    console.clear()
    console.print()
    console.print(
        Align.center(
            Panel(
                Align.center(_render_stats(stats)),
                title="[bold]S T A T S[/bold]",
                border_style="bright_blue",
                padding=(1, 2),
            )
        )
    )
    console.print(Align.center(Text("\n  Press any key to go back.\n", style="dim")))
    get_key()


# -- game loop ----------------------------------------------------------------


def _save(game: GamePlay, store: ProgressStore) -> None:
    store.save(game.to_progress())


def _visible_hint(game: GamePlay, hint_ids: frozenset[str]) -> frozenset[str]:
    """Drop the hint highlight once any of its cells is taken."""
    for cell_id in hint_ids:
        cell = game.state.grid.get_cell_by_id(cell_id)
        if cell is None or cell.state is not CellState.AVAILABLE:
            return frozenset()
    return hint_ids


def _record_win(game: GamePlay, stats: StatsStore) -> None:
    state = game.state
    stats.record_puzzle_complete(round(state.elapsed_time * 1000), state.puzzle_id)
    day = PuzzleGenerator.day_from_puzzle_id(state.puzzle_id)
    if state.mode is GameMode.DAILY and day is not None:
        stats.update_daily_streak(day)


def _play_game(game: GamePlay, store: ProgressStore, stats: StatsStore) -> None:
    size = game.state.grid.size
    cursor = Position(size // 2, size // 2)
    hint_ids: frozenset[str] = frozenset()
    status = ""

    while not game.is_won:
        hint_ids = _visible_hint(game, hint_ids)
        _draw_game(game, cursor, hint_ids, status)
        status = ""
        key = get_key()

        if key in _MOVES:
            dr, dc = _MOVES[key]
            target = Position(
                min(size - 1, max(0, cursor.row + dr)),
                min(size - 1, max(0, cursor.col + dc)),
            )
            if game.state.current_path is None:
                cursor = target
                continue
            result = game.add_to_path(cell_id_from_position(target))
            if result.success:
                cursor = target
            elif result.reason is not None:
                status = f"[yellow]{_REASON_TEXT[result.reason.value]}[/yellow]"

        elif key in ("draw", "enter"):
            if game.state.current_path is None:
                result = game.start_path(cell_id_from_position(cursor))
                if not result.success and result.reason is not None:
                    status = f"[yellow]{_REASON_TEXT[result.reason.value]}[/yellow]"
                continue
            commit = game.commit_line()
            if not commit.success and commit.reason is not None:
                status = f"[yellow]{_REASON_TEXT[commit.reason.value]}[/yellow]"
                continue
            _save(game, store)
            stats.record_line_drawn()
            if commit.is_win:
                _record_win(game, stats)
            elif commit.is_stuck:
                status = "[red]No more lines can be made. Press R to reset.[/red]"
            else:
                status = "[green]Line![/green]"

        elif key == "clear":
            game.clear_path()

        elif key == "hint":
            hint = game.request_hint()
            if hint is None:
                status = "[yellow]No hint available.[/yellow]"
            else:
                hint_ids = frozenset(hint.cell_ids)
                status = f"[cyan]Hint:[/cyan] {hint.message}"
                _save(game, store)

        elif key == "help":
            game.state.pause()
            _draw_help(game)
            get_key()
            game.state.resume()

        elif key == "restart":
            game.reset()
            _save(game, store)
            status = "[yellow]Puzzle reset.[/yellow]"

        elif key == "quit":
            game.clear_path()
            _save(game, store)
            return

    _draw_win(game)
    console.print(Align.center(Text("\n  Press any key to go back.\n", style="dim")))
    get_key()


def _open_daily(store: ProgressStore, day: date | None = None) -> GamePlay:
    """Resume today's saved daily puzzle, or generate it."""
    state = PuzzleGenerator.generate_daily_puzzle(day)
    saved = store.load(state.puzzle_id)
    if saved is not None:
        return GamePlay.from_progress(saved)
    return GamePlay(state)


# -- menu loop ----------------------------------------------------------------


def _menu_loop(store: ProgressStore, stats: StatsStore) -> None:
    levels = list(Difficulty)
    selected = levels.index(Difficulty.MEDIUM)

    while True:
        _draw_menu(levels[selected])
        key = get_key()

        if key == "quit":
            console.clear()
            console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
            return
        elif key == "left":
            selected = max(0, selected - 1)
        elif key == "right":
            selected = min(len(levels) - 1, selected + 1)
        elif key in ("1", "enter"):
            _play_game(_open_daily(store), store, stats)
        elif key == "2":
            _play_game(GamePlay.practice(levels[selected]), store, stats)
        elif key == "3":
            _draw_stats(stats.stats)


# -- public entry point -------------------------------------------------------


def run(
    data_dir: Path,
    mode: GameMode | None = None,
    difficulty: Difficulty = Difficulty.MEDIUM,
    day: date | None = None,
) -> None:
    """Launch the Rich CLI; without a mode, show the menu first."""
    store = ProgressStore(data_dir / "progress.json")
    stats = StatsStore(data_dir / "stats.json")
    if mode is GameMode.DAILY:
        _play_game(_open_daily(store, day), store, stats)
    elif mode is GameMode.PRACTICE:
        _play_game(GamePlay.practice(difficulty), store, stats)
    else:
        _menu_loop(store, stats)
