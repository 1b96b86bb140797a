"""Workspace confinement for every filesystem-touching tool."""

import logging
import os

from termcoder.services.filesystem import LocalFileSystem
from termcoder.services.workspace import WorkspaceRoot
from termcoder.tools.exceptions import FileAccessDenied

logger = logging.getLogger(__name__)


class PathGuard:
    """Resolves caller-supplied paths and rejects any that leave the workspace.

    Only ``ensure_within_workspace`` enforces containment. ``resolve_path`` and
    ``relative_path`` are presentation helpers and must not be used in its
    place.
    """

    def __init__(
        self,
        workspace: WorkspaceRoot,
        fs: LocalFileSystem | None = None,
    ) -> None:
        self.workspace = workspace
        self.fs = fs or LocalFileSystem()

    def resolve_path(self, input_path: str) -> str:
        """Join ``input_path`` onto the workspace cwd. No validation."""
        return os.path.normpath(os.path.join(self.workspace.cwd, input_path))

    def relative_path(self, path: str) -> str:
        """Path of ``path`` relative to the workspace, for display."""
        root = self.workspace.real_cwd
        if not _is_inside(os.path.relpath(path, root)):
            root = self.workspace.cwd
        return os.path.relpath(path, root)

    def contains(self, real_path: str) -> bool:
        """True if an already symlink-resolved path lies inside the workspace."""
        return _is_inside(os.path.relpath(real_path, self.workspace.real_cwd))

    def ensure_within_workspace(self, input_path: str) -> str:
        """Return the real path of ``input_path`` if it lies inside the workspace.

        Existing paths are symlink-resolved in full. For a path that does not
        exist yet, the nearest existing ancestor is resolved and the missing
        segments re-appended, so a new file under a symlinked directory is
        checked against where it would really land. If that ancestor cannot be
        resolved the naive joined path is checked instead.

        Raises:
            FileAccessDenied: If the real path falls outside the workspace root.
            OSError: If an existing path cannot be resolved (e.g. a symlink loop).
        """
        if "\x00" in input_path:
            raise FileAccessDenied(path=input_path)

        resolved = self.resolve_path(input_path)
        if self.fs.exists(resolved):
            target = self.fs.real_path(resolved)
        else:
            target = self._resolve_missing(resolved)

        if not self.contains(target):
            logger.warning("Denied access to %r (resolves to %s)", input_path, target)
            raise FileAccessDenied(path=input_path)
        return target

    def _resolve_missing(self, resolved: str) -> str:
        head = resolved
        missing: list[str] = []
        while not self.fs.exists(head):
            parent = os.path.dirname(head)
            if parent == head:
                return resolved
            missing.append(os.path.basename(head))
            head = parent
        try:
            base = self.fs.real_path(head)
        except OSError:
            return resolved
        return os.path.join(base, *reversed(missing))


def _is_inside(rel: str) -> bool:
    if os.path.isabs(rel):
        return False
    return rel != os.pardir and not rel.startswith(os.pardir + os.sep)
