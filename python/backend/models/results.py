"""Outcome values returned by gameplay queries.

Rejections are ordinary results, not exceptions: a drag across a spent cell
or a commit with the wrong sum happens all the time during play.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from backend.models.grid import CellId


class PathAction(StrEnum):
    ADDED = "added"
    BACKTRACKED = "backtracked"


class PathRejectReason(StrEnum):
    NOT_ADJACENT = "not-adjacent"
    ALREADY_IN_PATH = "already-in-path"
    SPENT = "spent"
    NO_PATH = "no-path"


class CommitRejectReason(StrEnum):
    WRONG_SUM = "wrong-sum"
    TOO_SHORT = "too-short"
    NO_PATH = "no-path"


class HintType(StrEnum):
    FULL_LINE = "full-line"


@dataclass(frozen=True)
class PathAddResult:
    success: bool
    action: PathAction | None = None
    reason: PathRejectReason | None = None

    @classmethod
    def added(cls) -> PathAddResult:
        return cls(success=True, action=PathAction.ADDED)

    @classmethod
    def backtracked(cls) -> PathAddResult:
        return cls(success=True, action=PathAction.BACKTRACKED)

    @classmethod
    def rejected(cls, reason: PathRejectReason) -> PathAddResult:
        return cls(success=False, reason=reason)


@dataclass(frozen=True)
class CommitResult:
    success: bool
    is_win: bool = False
    is_stuck: bool = False
    reason: CommitRejectReason | None = None

    @classmethod
    def committed(cls, is_win: bool, is_stuck: bool) -> CommitResult:
        return cls(success=True, is_win=is_win, is_stuck=is_stuck)

    @classmethod
    def rejected(cls, reason: CommitRejectReason) -> CommitResult:
        return cls(success=False, reason=reason)


@dataclass(frozen=True)
class HintResult:
    """A complete line the player can draw next."""

    cell_ids: tuple[CellId, ...]
    type: HintType = HintType.FULL_LINE
    message: str | None = None
