"""Local filesystem used by the workspace tools."""

import os
import stat
from typing import Literal

FileType = Literal["file", "directory", "other"]


class LocalFileSystem:
    """Thin wrapper over the OS filesystem.

    Text is read and written as UTF-8 with newline translation disabled, so
    ``\\r\\n`` line endings survive a read-modify-write cycle byte for byte.
    Errors are the plain ``OSError`` subclasses raised by the OS; nothing here
    wraps or retries them.
    """

    encoding = "utf-8"

    def exists(self, path: str) -> bool:
        # A dangling symlink counts as existing so it is never treated as a new file.
        return os.path.lexists(path)

    def stat(self, path: str) -> FileType:
        """Return the type of ``path``, following symlinks.

        Raises:
            FileNotFoundError: If ``path`` does not exist.
        """
        mode = os.stat(path).st_mode
        if stat.S_ISDIR(mode):
            return "directory"
        if stat.S_ISREG(mode):
            return "file"
        return "other"

    def read_file_string(self, path: str) -> str:
        with open(path, "r", encoding=self.encoding, newline="") as f:
            return f.read()

    def write_file_string(self, path: str, content: str) -> None:
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(path, "w", encoding=self.encoding, newline="") as f:
            f.write(content)

    def read_directory(self, path: str) -> list[str]:
        return sorted(os.listdir(path))

    def real_path(self, path: str) -> str:
        """Resolve symlinks; fails when ``path`` does not exist."""
        return os.path.realpath(path, strict=True)
