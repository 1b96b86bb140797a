"""Directory listing tool."""

import os

from termcoder.models.file_models import (
    DirectoryEntry,
    ListDirectoryRequest,
    ListDirectoryResult,
)
from termcoder.services.filesystem import LocalFileSystem
from termcoder.services.path_guard import PathGuard


class DirectoryTools:
    def __init__(self, path_guard: PathGuard, fs: LocalFileSystem | None = None) -> None:
        self.path_guard = path_guard
        self.fs = fs or path_guard.fs

    def list_directories(self, request: ListDirectoryRequest) -> ListDirectoryResult:
        """List the entries of a workspace directory, sorted by name.

        Anything that is not a directory (including entries whose symlink
        target is missing) is reported as a file.
        """
        resolved = self.path_guard.ensure_within_workspace(request.path)
        files = []
        for name in self.fs.read_directory(resolved):
            try:
                entry_type = self.fs.stat(os.path.join(resolved, name))
            except OSError:
                entry_type = "file"
            files.append(
                DirectoryEntry(
                    name=name,
                    type="directory" if entry_type == "directory" else "file",
                )
            )
        return ListDirectoryResult(files=files, count=len(files))
