"""File operation tools: read, write, existence check, markdown rendering."""

import logging

from termcoder.models.file_models import (
    FileExistsRequest,
    FileExistsResult,
    ReadFileRequest,
    ReadFileResult,
    RenderMarkdownRequest,
    RenderMarkdownResult,
    WriteFileRequest,
    WriteFileResult,
)
from termcoder.services.filesystem import LocalFileSystem
from termcoder.services.path_guard import PathGuard
from termcoder.utils.diff_generator import compute_diff, compute_stats
from termcoder.utils.markdown import is_markdown_file, parse_markdown, plain_metadata

logger = logging.getLogger(__name__)


class FileTools:
    def __init__(self, path_guard: PathGuard, fs: LocalFileSystem | None = None) -> None:
        self.path_guard = path_guard
        self.fs = fs or path_guard.fs

    def read_file(self, request: ReadFileRequest) -> ReadFileResult:
        resolved = self.path_guard.ensure_within_workspace(request.file_path)
        content = self.fs.read_file_string(resolved)
        return ReadFileResult(
            file_path=self.path_guard.relative_path(resolved), content=content
        )

    def write_file(self, request: WriteFileRequest) -> WriteFileResult:
        """Create or overwrite a file, reporting what changed.

        ``diff`` and ``stats`` are only set when ``include_diff`` is on and the
        content actually changed. ``created`` tells whether a previous file
        existed.
        """
        resolved = self.path_guard.ensure_within_workspace(request.file_path)
        rel_path = self.path_guard.relative_path(resolved)

        try:
            previous: str | None = self.fs.read_file_string(resolved)
        except (FileNotFoundError, IsADirectoryError, UnicodeDecodeError):
            previous = None

        stats = None
        diff = None
        if request.include_diff:
            computed = compute_stats(previous or "", request.content)
            if computed.total_changes > 0:
                stats = computed
                diff = compute_diff(previous or "", request.content, rel_path)

        self.fs.write_file_string(resolved, request.content)
        logger.info("Wrote %s (%d chars)", rel_path, len(request.content))
        return WriteFileResult(
            file_path=rel_path,
            size=len(request.content),
            created=previous is None,
            diff=diff,
            stats=stats,
        )

    def file_exists(self, request: FileExistsRequest) -> FileExistsResult:
        resolved = self.path_guard.ensure_within_workspace(request.file_path)
        rel_path = self.path_guard.relative_path(resolved)
        try:
            file_type = self.fs.stat(resolved)
        except OSError:
            return FileExistsResult(file_path=rel_path, exists=False)
        return FileExistsResult(file_path=rel_path, exists=True, type=file_type)

    def render_markdown(self, request: RenderMarkdownRequest) -> RenderMarkdownResult:
        """Read a file and, if it is markdown, extract plain text and structure.

        Non-markdown files come back unchanged with counts-only metadata.
        """
        resolved = self.path_guard.ensure_within_workspace(request.file_path)
        rel_path = self.path_guard.relative_path(resolved)
        content = self.fs.read_file_string(resolved)

        if not is_markdown_file(resolved):
            return RenderMarkdownResult(
                file_path=rel_path,
                is_markdown=False,
                content=content,
                plain_text=content,
                metadata=plain_metadata(content),
            )

        plain_text, metadata = parse_markdown(content)
        return RenderMarkdownResult(
            file_path=rel_path,
            is_markdown=True,
            content=content,
            plain_text=plain_text,
            metadata=metadata,
        )
