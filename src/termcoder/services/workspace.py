"""The workspace root every tool is confined to."""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class WorkspaceRoot:
    """Logical and symlink-resolved workspace directory.

    Built once at startup and passed explicitly to the components that need
    it. ``cwd`` is the directory relative paths are joined against;
    ``real_cwd`` is the same directory with symlinks expanded, which is what
    containment checks compare against.
    """

    cwd: str
    real_cwd: str

    @classmethod
    def from_path(cls, path: str | os.PathLike[str] | None = None) -> "WorkspaceRoot":
        """Capture a workspace root; defaults to the current working directory."""
        cwd = os.path.abspath(os.fspath(path) if path is not None else os.getcwd())
        try:
            real_cwd = os.path.realpath(cwd, strict=True)
        except OSError:
            real_cwd = cwd
        return cls(cwd=cwd, real_cwd=os.path.abspath(real_cwd))
