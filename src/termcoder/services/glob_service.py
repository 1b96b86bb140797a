"""Filesystem glob scanning."""

import logging
import os
import pathlib
from collections.abc import Callable

logger = logging.getLogger(__name__)


class GlobService:
    """Scans a directory with a glob pattern using ``pathlib``."""

    def scan(
        self,
        pattern: str,
        cwd: str,
        dot: bool = False,
        absolute: bool = False,
        only_files: bool = True,
        max_results: int = 1_000,
        accept: Callable[[pathlib.Path], bool] | None = None,
    ) -> list[str]:
        """Return up to ``max_results`` matches in discovery order.

        Matches are POSIX-style paths relative to ``cwd``, or absolute paths
        when ``absolute`` is set. Hidden entries (any path segment starting
        with a dot) are skipped unless ``dot`` is set. ``accept`` can veto
        individual paths before they count towards the limit.

        Raises:
            ValueError: If the pattern is empty or not relative.
            NotImplementedError: If pathlib rejects the pattern form.
        """
        if not pattern:
            raise ValueError("Glob pattern must not be empty")

        base = pathlib.Path(cwd)
        matches: list[str] = []
        for match in base.glob(pattern):
            # Patterns may walk out and back in through ".."
            path = pathlib.Path(os.path.normpath(match))
            rel = pathlib.PurePath(os.path.relpath(path, base))
            if not dot and any(
                part.startswith(".") and part not in (".", "..") for part in rel.parts
            ):
                continue
            if only_files and not path.is_file():
                continue
            if accept is not None and not accept(path):
                continue
            matches.append(str(path) if absolute else rel.as_posix())
            if len(matches) >= max_results:
                break

        logger.debug("glob %r in %s matched %d entries", pattern, cwd, len(matches))
        return matches
