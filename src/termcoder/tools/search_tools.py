"""Content search (grep via ripgrep) and file pattern matching (glob)."""

import logging
import os

from termcoder.config import SearchDefaults
from termcoder.models.search_models import GlobRequest, GlobResult, GrepRequest, GrepResult
from termcoder.services.glob_service import GlobService
from termcoder.services.path_guard import PathGuard
from termcoder.services.search_process import RipgrepRunner
from termcoder.tools.exceptions import EmptyPattern, FileAccessDenied
from termcoder.tools.grep_parser import parse_grep_output

logger = logging.getLogger(__name__)


def build_grep_args(
    pattern: str,
    is_regex: bool,
    include_patterns: list[str] | None,
    exclude_patterns: list[str] | None,
    context_lines: int,
    max_results: int,
    default_excludes: tuple[str, ...],
) -> list[str]:
    """Build the ripgrep argument list for a search rooted at ``.``."""
    args = [
        "--json",
        "--max-count",
        str(max_results),
        "--context",
        str(context_lines),
        "--with-filename",
        "--line-number",
    ]
    if not is_regex:
        args.append("--fixed-strings")

    excludes = exclude_patterns if exclude_patterns is not None else default_excludes
    for exclusion in excludes:
        args.extend(["--glob", f"!{exclusion}"])
    for inclusion in include_patterns or []:
        args.extend(["--glob", inclusion])

    # "--" keeps patterns that start with a dash from being read as flags
    args.extend(["--", pattern, "."])
    return args


class SearchTools:
    """grep and glob confined to the workspace."""

    def __init__(
        self,
        path_guard: PathGuard,
        runner: RipgrepRunner | None = None,
        glob_service: GlobService | None = None,
        defaults: SearchDefaults | None = None,
    ) -> None:
        self.path_guard = path_guard
        self.defaults = defaults or SearchDefaults()
        self.runner = runner or RipgrepRunner(
            command=self.defaults.rg_command, timeout=self.defaults.rg_timeout
        )
        self.glob_service = glob_service or GlobService()

    def grep(self, request: GrepRequest) -> GrepResult:
        """Search file contents under ``search_path``.

        Raises:
            EmptyPattern: If the pattern is blank; ripgrep is not started.
            FileAccessDenied: If ``search_path`` escapes the workspace.
            CommandFailed: If ripgrep cannot run or reports an error.
        """
        if not request.pattern.strip():
            raise EmptyPattern(pattern=request.pattern)

        cwd = self.path_guard.ensure_within_workspace(request.search_path or ".")
        context_lines = (
            request.context_lines
            if request.context_lines is not None
            else self.defaults.context_lines
        )
        max_results = (
            request.max_results if request.max_results is not None else self.defaults.max_results
        )

        args = build_grep_args(
            request.pattern,
            request.is_regex,
            request.include_patterns,
            request.exclude_patterns,
            context_lines,
            max_results,
            self.defaults.default_excludes,
        )
        output = self.runner.run(args, cwd)
        parsed = parse_grep_output(
            output,
            cwd=cwd,
            context_lines=context_lines,
            workspace_root=self.path_guard.workspace.real_cwd,
        )

        return GrepResult(
            pattern=request.pattern,
            is_regex=request.is_regex,
            files_searched=parsed.files_searched,
            matches=parsed.matches,
            truncated=len(parsed.matches) >= max_results,
        )

    def glob(self, request: GlobRequest) -> GlobResult:
        """Find paths matching a glob pattern under ``cwd``.

        Matches whose real path lies outside the workspace are dropped.

        Raises:
            EmptyPattern: If the pattern is blank.
            FileAccessDenied: If ``cwd`` escapes the workspace, or the pattern
                cannot be used (absolute or otherwise unsupported).
        """
        if not request.pattern.strip():
            raise EmptyPattern(pattern=request.pattern)

        working_dir = self.path_guard.ensure_within_workspace(request.cwd or ".")
        max_results = (
            request.max_results
            if request.max_results is not None
            else self.defaults.glob_max_results
        )

        try:
            matches = self.glob_service.scan(
                pattern=request.pattern,
                cwd=working_dir,
                dot=request.dot,
                absolute=request.absolute,
                only_files=request.only_files,
                max_results=max_results,
                accept=lambda path: self.path_guard.contains(os.path.realpath(path)),
            )
        except (ValueError, NotImplementedError) as e:
            logger.warning("Rejected glob pattern %r: %s", request.pattern, e)
            raise FileAccessDenied(path=request.pattern) from e

        ordered = sorted(matches)
        return GlobResult(
            pattern=request.pattern,
            matches=ordered,
            count=len(ordered),
            truncated=len(matches) >= max_results,
            cwd=working_dir if request.absolute else self.path_guard.relative_path(working_dir),
        )
