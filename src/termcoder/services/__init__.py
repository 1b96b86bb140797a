"""Workspace, filesystem and process services used by the tools."""

from termcoder.services.filesystem import LocalFileSystem
from termcoder.services.glob_service import GlobService
from termcoder.services.path_guard import PathGuard
from termcoder.services.search_process import RipgrepRunner
from termcoder.services.workspace import WorkspaceRoot

__all__ = [
    "GlobService",
    "LocalFileSystem",
    "PathGuard",
    "RipgrepRunner",
    "WorkspaceRoot",
]
