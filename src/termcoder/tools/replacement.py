"""Exact string replacement used by the edit tools."""

from termcoder.tools.exceptions import StringNotFound


def count_occurrences(content: str, old_string: str) -> int:
    """Number of non-overlapping literal occurrences of ``old_string``."""
    if not old_string:
        return 0
    return content.count(old_string)


def apply_replacement(
    content: str,
    old_string: str,
    new_string: str,
    replace_all: bool,
    file_path: str,
) -> str:
    """Replace literal ``old_string`` with ``new_string`` in ``content``.

    An empty ``old_string`` replaces the whole content with ``new_string``.
    Otherwise matching is exact: no regex, no whitespace normalisation. With
    ``replace_all`` every occurrence is replaced, else only the first.

    Raises:
        StringNotFound: If ``old_string`` is non-empty and absent.
    """
    if old_string == "":
        return new_string
    if old_string not in content:
        raise StringNotFound(path=file_path, old_string=old_string)
    if replace_all:
        return content.replace(old_string, new_string)
    return content.replace(old_string, new_string, 1)
