"""Tests for the static edit policy."""

from termcoder.config import EditPolicy
from termcoder.tools.edit_validator import NULL_BYTES_ERROR, EditValidator


def test_clean_edit_is_valid_without_warnings():
    """An ordinary edit passes with no messages."""
    validation = EditValidator().validate("a = 1\n", "a = 2\n")
    assert validation.is_valid is True
    assert validation.warnings == []
    assert validation.errors == []
    assert validation.change_stats.total_changes == 2


def test_null_byte_is_an_error():
    """Null bytes make the edit invalid."""
    validation = EditValidator().validate("text", "te\x00xt")
    assert validation.is_valid is False
    assert validation.errors == [NULL_BYTES_ERROR]


def test_large_file_warns():
    """Content over the size limit warns but stays valid."""
    validator = EditValidator()
    updated = ("y" * 99 + "\n") * 5_001
    validation = validator.validate("", updated)
    assert validation.is_valid is True
    assert validation.warnings == ["File becomes very large (>500KB)"]


def test_exactly_at_limit_does_not_warn():
    """Limits are exclusive."""
    validator = EditValidator(EditPolicy(max_file_chars=10, max_line_chars=10))
    validation = validator.validate("", "0123456789")
    assert validation.warnings == []


def test_long_line_warns():
    """A single line over the limit warns."""
    validation = EditValidator().validate("short\n", "x" * 2_001 + "\n")
    assert validation.warnings == ["Contains very long lines (>2000 chars)"]


def test_warnings_and_errors_together():
    """Warnings are still collected for invalid content."""
    validator = EditValidator(EditPolicy(max_file_chars=5, max_line_chars=3))
    validation = validator.validate("", "abcdef\x00")
    assert validation.is_valid is False
    assert validator.large_file_warning in validation.warnings
    assert validator.long_lines_warning in validation.warnings
    assert validation.errors == [NULL_BYTES_ERROR]


def test_policy_thresholds_appear_in_messages():
    """Warning text reflects the configured limits."""
    validator = EditValidator(EditPolicy(max_file_chars=20_000, max_line_chars=120))
    assert validator.large_file_warning == "File becomes very large (>20KB)"
    assert validator.long_lines_warning == "Contains very long lines (>120 chars)"
