"""Saved progress — JSON records and the on-disk store."""

from __future__ import annotations

import json
import logging

import pytest

from backend.models.progress import ProgressStore, SavedGameProgress
from backend.models.puzzle import GameMode


def _progress(puzzle_id: str = "daily-2024-03-15", **overrides) -> SavedGameProgress:
    fields = dict(
        puzzle_id=puzzle_id,
        mode=GameMode.DAILY,
        grid_values=[[2, 3, 5], [4, 4, 2], [1, 8, 1]],
        target_sum=10,
        min_line_length=3,
        completed_lines_cell_ids=[["0-0", "0-1", "0-2"]],
        saved_at=2_000,
        started_at=1_000,
        solution_paths=[["0-0", "0-1", "0-2"]],
        hint_used=True,
        hint_cell_ids=["0-0", "0-1", "0-2"],
    )
    fields.update(overrides)
    return SavedGameProgress(**fields)


# -- SavedGameProgress --------------------------------------------------------


def test_dict_round_trip():
    progress = _progress()
    data = progress.to_dict()
    assert data["mode"] == "daily"
    assert SavedGameProgress.from_dict(data) == progress


def test_old_records_without_optional_fields():
    data = _progress().to_dict()
    del data["solution_paths"]
    del data["hint_used"]
    del data["hint_cell_ids"]
    progress = SavedGameProgress.from_dict(data)
    assert progress.solution_paths == []
    assert not progress.hint_used
    assert progress.hint_cell_ids == []


# -- ProgressStore ------------------------------------------------------------


def test_store_persists(tmp_path):
    path = tmp_path / "progress.json"
    store = ProgressStore(path)
    store.save(_progress())
    store.save(_progress("practice-1-abc", mode=GameMode.PRACTICE))

    reopened = ProgressStore(path)
    assert reopened.has("daily-2024-03-15")
    assert reopened.load("daily-2024-03-15") == _progress()
    assert reopened.load("practice-1-abc").mode is GameMode.PRACTICE
    assert reopened.list_ids() == ["daily-2024-03-15", "practice-1-abc"]


def test_store_overwrites_same_puzzle(tmp_path):
    store = ProgressStore(tmp_path / "progress.json")
    store.save(_progress())
    store.save(_progress(completed_lines_cell_ids=[]))
    assert store.load("daily-2024-03-15").completed_lines_cell_ids == []
    assert store.list_ids() == ["daily-2024-03-15"]


def test_store_clear(tmp_path):
    path = tmp_path / "progress.json"
    store = ProgressStore(path)
    store.save(_progress())
    store.clear("daily-2024-03-15")
    store.clear("missing")
    assert not ProgressStore(path).has("daily-2024-03-15")


def test_missing_file_is_empty(tmp_path):
    store = ProgressStore(tmp_path / "nested" / "progress.json")
    assert store.list_ids() == []
    assert store.load("anything") is None
    store.save(_progress())
    assert (tmp_path / "nested" / "progress.json").exists()


def test_corrupt_file_is_ignored(tmp_path, caplog):
    path = tmp_path / "progress.json"
    path.write_text("{not json")
    with caplog.at_level(logging.WARNING):
        store = ProgressStore(path)
    assert store.list_ids() == []
    assert "unreadable" in caplog.text


def test_corrupt_record_is_skipped(tmp_path, caplog):
    path = tmp_path / "progress.json"
    path.write_text(
        json.dumps(
            {
                "good": _progress("good").to_dict(),
                "bad": {"puzzle_id": "bad", "mode": "sideways"},
            }
        )
    )
    with caplog.at_level(logging.WARNING):
        store = ProgressStore(path)
    assert store.list_ids() == ["good"]
    assert "bad" in caplog.text


def test_non_object_file_is_ignored(tmp_path, caplog):
    path = tmp_path / "progress.json"
    path.write_text("[]")
    with caplog.at_level(logging.WARNING):
        store = ProgressStore(path)
    assert store.list_ids() == []
    assert "expected a JSON object" in caplog.text


def test_bad_encoding_is_ignored(tmp_path):
    path = tmp_path / "progress.json"
    path.write_bytes(b'{"daily-2024-03-15": "\xff\xfe"}')
    assert ProgressStore(path).list_ids() == []


def test_unreadable_path_is_ignored(tmp_path, caplog):
    # A directory where the file should be cannot be read as text.
    path = tmp_path / "progress.json"
    path.mkdir()
    with caplog.at_level(logging.WARNING):
        store = ProgressStore(path)
    assert store.list_ids() == []
    assert "unreadable" in caplog.text


@pytest.mark.parametrize(
    "grid_values",
    [
        [[1, 2, 3], [4]],
        [],
        [[1, 2], [3, 0]],
        [[1, 2], [3, "4"]],
    ],
)
def test_malformed_grid_is_rejected(grid_values):
    data = _progress().to_dict()
    data["grid_values"] = grid_values
    with pytest.raises(ValueError):
        SavedGameProgress.from_dict(data)


def test_store_skips_malformed_grid(tmp_path):
    bad = _progress("daily-2024-03-16").to_dict()
    bad["grid_values"] = [[1, 2, 3], [4]]
    path = tmp_path / "progress.json"
    path.write_text(json.dumps({"daily-2024-03-16": bad, "good": _progress("good").to_dict()}))
    store = ProgressStore(path)
    assert not store.has("daily-2024-03-16")
    assert store.has("good")
