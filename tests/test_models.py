"""Tests for tool-facing pydantic models."""

import pytest
from pydantic import ValidationError

import termcoder.models as models
from termcoder.models import (
    DiffStats,
    EditRequest,
    GlobRequest,
    GrepMatch,
    PreviewRequest,
    Validation,
)


def test_diff_stats_total_is_computed():
    """totalChanges is derived and serialized."""
    stats = DiffStats(lines_added=3, lines_removed=2)
    assert stats.total_changes == 5
    assert stats.to_payload() == {"linesAdded": 3, "linesRemoved": 2, "totalChanges": 5}


def test_diff_stats_rejects_negative_counts():
    """Counts cannot be negative."""
    with pytest.raises(ValidationError):
        DiffStats(lines_added=-1)


def test_diff_stats_is_frozen():
    """DiffStats is immutable."""
    stats = DiffStats(lines_added=1)
    with pytest.raises(ValidationError):
        stats.lines_added = 2


def test_requests_accept_camel_case():
    """Requests validate from camelCase input."""
    request = EditRequest.model_validate(
        {"filePath": "a.py", "oldString": "a", "newString": "b", "replaceAll": True}
    )
    assert request.file_path == "a.py"
    assert request.replace_all is True
    assert request.preview is True
    assert request.force is False
    assert request.include_diff is True


def test_edit_request_strings_must_differ():
    """editFile requests reject identical strings."""
    with pytest.raises(ValidationError, match="must differ"):
        EditRequest(file_path="a.py", old_string="x", new_string="x")


def test_preview_request_allows_identical_strings():
    """previewEdit requests allow identical strings."""
    request = PreviewRequest(file_path="a.py", old_string="x", new_string="x")
    assert request.old_string == request.new_string


def test_validation_payload():
    validation = Validation(
        is_valid=False,
        errors=["Content contains null bytes"],
        change_stats=DiffStats(lines_added=1),
    )
    payload = validation.to_payload()
    assert payload["isValid"] is False
    assert payload["warnings"] == []
    assert payload["changeStats"]["totalChanges"] == 1


def test_grep_match_line_numbers_start_at_one():
    """Line numbers are 1-based."""
    with pytest.raises(ValidationError):
        GrepMatch(file_path="a", line_number=0, content="x")


def test_glob_request_defaults():
    """Glob requests default to visible files, relative paths."""
    request = GlobRequest(pattern="*.py")
    assert (request.dot, request.absolute, request.only_files) == (False, False, True)
    assert request.cwd is None
    assert request.max_results is None


@pytest.mark.parametrize("name", models.__all__)
def test_package_exports(name):
    assert hasattr(models, name)
