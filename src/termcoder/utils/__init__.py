"""Utilities for termcoder."""

from termcoder.utils.diff_generator import compute_diff, compute_stats, split_lines
from termcoder.utils.markdown import is_markdown_file, parse_markdown

__all__ = [
    "compute_diff",
    "compute_stats",
    "is_markdown_file",
    "parse_markdown",
    "split_lines",
]
