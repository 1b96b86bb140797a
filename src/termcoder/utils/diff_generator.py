"""Line-level diff statistics and unified diffs between two file contents."""

import difflib
from collections.abc import Iterator

from termcoder.models.edit_models import DiffStats

NO_NEWLINE_MARKER = "\\ No newline at end of file"
CONTEXT_LINES = 3

Opcode = tuple[str, int, int, int, int]


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only, keeping line endings.

    ``str.splitlines`` also breaks on form feeds and other separators, which
    would not match what editors and ``patch`` consider a line.
    """
    if not text:
        return []
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def line_opcodes(original_lines: list[str], modified_lines: list[str]) -> list[Opcode]:
    """Edit script between two line lists, in ``SequenceMatcher`` opcode form.

    Lines shared at the start and end are peeled off before matching, so a
    small edit to a large file only runs the matcher on the changed region.
    ``SequenceMatcher`` is quadratic when many lines are identical (blank
    lines, closing braces), which the untrimmed file nearly always has.
    """
    limit = min(len(original_lines), len(modified_lines))
    prefix = 0
    while prefix < limit and original_lines[prefix] == modified_lines[prefix]:
        prefix += 1
    suffix = 0
    while (
        suffix < limit - prefix
        and original_lines[-1 - suffix] == modified_lines[-1 - suffix]
    ):
        suffix += 1

    a_end = len(original_lines) - suffix
    b_end = len(modified_lines) - suffix
    opcodes: list[Opcode] = []
    if prefix:
        opcodes.append(("equal", 0, prefix, 0, prefix))

    matcher = difflib.SequenceMatcher(
        None,
        original_lines[prefix:a_end],
        modified_lines[prefix:b_end],
        autojunk=False,
    )
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        opcodes.append((tag, i1 + prefix, i2 + prefix, j1 + prefix, j2 + prefix))

    if suffix:
        opcodes.append(
            ("equal", a_end, len(original_lines), b_end, len(modified_lines))
        )
    return opcodes


def _stats_from(opcodes: list[Opcode]) -> DiffStats:
    added = 0
    removed = 0
    for tag, i1, i2, j1, j2 in opcodes:
        if tag in ("replace", "delete"):
            removed += i2 - i1
        if tag in ("replace", "insert"):
            added += j2 - j1
    return DiffStats(lines_added=added, lines_removed=removed)


def _grouped(opcodes: list[Opcode], context: int) -> Iterator[list[Opcode]]:
    """Split opcodes into hunks with ``context`` lines around each change.

    Same grouping as ``SequenceMatcher.get_grouped_opcodes``, applied to an
    opcode list that did not come from a single matcher.
    """
    codes = list(opcodes)
    if codes[0][0] == "equal":
        tag, i1, i2, j1, j2 = codes[0]
        codes[0] = tag, max(i1, i2 - context), i2, max(j1, j2 - context), j2
    if codes[-1][0] == "equal":
        tag, i1, i2, j1, j2 = codes[-1]
        codes[-1] = tag, i1, min(i2, i1 + context), j1, min(j2, j1 + context)

    group: list[Opcode] = []
    for tag, i1, i2, j1, j2 in codes:
        if tag == "equal" and i2 - i1 > 2 * context:
            group.append((tag, i1, min(i2, i1 + context), j1, min(j2, j1 + context)))
            yield group
            group = []
            i1, j1 = max(i1, i2 - context), max(j1, j2 - context)
        group.append((tag, i1, i2, j1, j2))
    if group and not (len(group) == 1 and group[0][0] == "equal"):
        yield group


def _format_range(start: int, stop: int) -> str:
    beginning = start + 1
    length = stop - start
    if length == 1:
        return str(beginning)
    if not length:
        beginning -= 1
    return f"{beginning},{length}"


def _body_lines(prefix: str, lines: list[str]) -> list[str]:
    out = []
    for line in lines:
        if line.endswith("\n"):
            out.append(prefix + line[:-1])
        else:
            # Last line of a file without a trailing newline
            out.append(prefix + line)
            out.append(NO_NEWLINE_MARKER)
    return out


def compute_stats(original_content: str, modified_content: str) -> DiffStats:
    """Count whole lines added and removed between two contents."""
    return _stats_from(
        line_opcodes(split_lines(original_content), split_lines(modified_content))
    )


def compute_diff(
    original_content: str,
    modified_content: str,
    display_name: str,
) -> str:
    """Generate a unified diff with ``display_name`` in both headers.

    Built from the same edit script as ``compute_stats``, so the ``+`` and
    ``-`` lines always agree with the reported counts.

    Args:
        original_content: File content before the change.
        modified_content: File content after the change.
        display_name: Name shown after ``---`` and ``+++``.

    Returns:
        Unified diff text ending in a newline. Empty string if no changes.
    """
    if original_content == modified_content:
        return ""

    original_lines = split_lines(original_content)
    modified_lines = split_lines(modified_content)
    opcodes = line_opcodes(original_lines, modified_lines)

    diff_lines = [f"--- {display_name}", f"+++ {display_name}"]
    for group in _grouped(opcodes, CONTEXT_LINES):
        first, last = group[0], group[-1]
        diff_lines.append(
            f"@@ -{_format_range(first[1], last[2])} "
            f"+{_format_range(first[3], last[4])} @@"
        )
        for tag, i1, i2, j1, j2 in group:
            if tag == "equal":
                diff_lines.extend(_body_lines(" ", original_lines[i1:i2]))
                continue
            if tag in ("replace", "delete"):
                diff_lines.extend(_body_lines("-", original_lines[i1:i2]))
            if tag in ("replace", "insert"):
                diff_lines.extend(_body_lines("+", modified_lines[j1:j2]))

    return "\n".join(diff_lines) + "\n"
