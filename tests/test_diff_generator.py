"""Tests for diff_generator utility functions."""

import time

import pytest

from termcoder.utils.diff_generator import (
    NO_NEWLINE_MARKER,
    compute_diff,
    compute_stats,
    split_lines,
)


def test_split_lines_keeps_endings():
    """Line endings are kept and no empty trailing line is added."""
    assert split_lines("a\nb\n") == ["a\n", "b\n"]
    assert split_lines("a\nb") == ["a\n", "b"]
    assert split_lines("") == []


def test_split_lines_ignores_other_separators():
    """Form feeds and lone carriage returns do not start a new line."""
    assert split_lines("a\x0cb\rc\n") == ["a\x0cb\rc\n"]


def test_compute_stats_single_line_replacement():
    """Replacing one line counts one added and one removed."""
    stats = compute_stats("hello world", "hello there")
    assert stats.lines_added == 1
    assert stats.lines_removed == 1
    assert stats.total_changes == 2


def test_compute_stats_identical_is_zero():
    """Identical content has no changes."""
    stats = compute_stats("same\ncontent\n", "same\ncontent\n")
    assert stats.total_changes == 0


def test_compute_stats_pure_insertion():
    """Inserting a line counts only an addition."""
    stats = compute_stats("a\nc\n", "a\nb\nc\n")
    assert stats.lines_added == 1
    assert stats.lines_removed == 0


def test_compute_stats_from_empty():
    """Every line of new content counts as added."""
    stats = compute_stats("", "one\ntwo\nthree\n")
    assert stats.lines_added == 3
    assert stats.lines_removed == 0


@pytest.mark.parametrize(
    "original, modified",
    [
        ("a\nb\nc\n", "a\nx\ny\nc\n"),
        ("one\ntwo\n", ""),
        ("x\n" * 5, "y\n" * 3),
    ],
)
def test_compute_stats_total_is_sum(original, modified):
    """Total changes is added plus removed."""
    stats = compute_stats(original, modified)
    assert stats.total_changes == stats.lines_added + stats.lines_removed


def test_compute_diff_headers_use_display_name():
    """Both headers carry the display name unchanged."""
    diff = compute_diff("def f():\n    pass\n", "def g():\n    pass\n", "src/app.py")
    lines = diff.splitlines()
    assert lines[0] == "--- src/app.py"
    assert lines[1] == "+++ src/app.py"
    assert lines[2].startswith("@@")
    assert "-def f():" in lines
    assert "+def g():" in lines
    assert "     pass" in lines


def test_compute_diff_no_changes():
    """Identical content returns empty string."""
    assert compute_diff("hello\n", "hello\n", "a.py") == ""


def test_compute_diff_marks_missing_trailing_newline():
    """Both sides get the no-newline marker."""
    diff = compute_diff("a\nb", "a\nc", "f.txt")
    assert diff == (
        "--- f.txt\n"
        "+++ f.txt\n"
        "@@ -1,2 +1,2 @@\n"
        " a\n"
        "-b\n"
        f"{NO_NEWLINE_MARKER}\n"
        "+c\n"
        f"{NO_NEWLINE_MARKER}\n"
    )


def test_compute_diff_adding_trailing_newline():
    """Only the old side lacked a final newline."""
    diff = compute_diff("a", "a\n", "f.txt")
    lines = diff.splitlines()
    assert lines[3:] == ["-a", NO_NEWLINE_MARKER, "+a"]


def test_compute_diff_ends_with_newline():
    """Diff text always ends with a newline."""
    diff = compute_diff("line1\nline2\nline3\n", "line1\nchanged\nline3\n", "f.py")
    assert diff.endswith("\n")
    assert "-line2" in diff
    assert "+changed" in diff


def _changed_lines(diff):
    body = diff.splitlines()[2:]
    added = sum(1 for line in body if line.startswith("+"))
    removed = sum(1 for line in body if line.startswith("-"))
    return added, removed


def test_one_line_edit_in_repeated_line_file_is_fast():
    """A single-line change among thousands of identical lines stays quick."""
    original = "start\n" + "}\n" * 20_000 + "end\n"
    modified = "begin\n" + "}\n" * 20_000 + "end\n"

    started = time.perf_counter()
    stats = compute_stats(original, modified)
    diff = compute_diff(original, modified, "big.txt")
    elapsed = time.perf_counter() - started

    assert elapsed < 2.0
    assert (stats.lines_added, stats.lines_removed) == (1, 1)
    assert diff.splitlines()[2] == "@@ -1,4 +1,4 @@"


def test_diff_lines_agree_with_stats():
    """The +/- lines in the diff match the reported counts."""
    original = "".join(f"row {n % 7}\n" for n in range(600))
    modified = original.replace("row 3\n", "row three\n", 5).replace("row 5\n", "", 2)

    stats = compute_stats(original, modified)
    diff = compute_diff(original, modified, "data.csv")

    assert _changed_lines(diff) == (stats.lines_added, stats.lines_removed)


def test_distant_changes_get_separate_hunks():
    """Changes more than six lines apart are reported as two hunks."""
    original = "".join(f"line{n}\n" for n in range(20))
    modified = original.replace("line1\n", "first\n").replace("line18\n", "last\n")

    diff = compute_diff(original, modified, "f.txt")

    hunks = [line for line in diff.splitlines() if line.startswith("@@")]
    assert hunks == ["@@ -1,5 +1,5 @@", "@@ -16,5 +16,5 @@"]


def test_pure_deletion_hunk_header():
    """Deleting every line reports an empty new range."""
    diff = compute_diff("a\nb\n", "", "f.txt")
    assert diff.splitlines()[2:] == ["@@ -1,2 +0,0 @@", "-a", "-b"]
