"""String-replacement editing with validation and preview gating."""

import logging

from termcoder.models.edit_models import (
    EditRequest,
    EditResult,
    PreviewRequest,
    PreviewResult,
    Recommendation,
    Validation,
)
from termcoder.services.filesystem import LocalFileSystem
from termcoder.services.path_guard import PathGuard
from termcoder.tools.edit_validator import EditValidator
from termcoder.tools.replacement import apply_replacement, count_occurrences
from termcoder.utils.diff_generator import compute_diff

logger = logging.getLogger(__name__)

GATED_MESSAGE = "Large or risky change detected. Preview recommended before applying."


def recommend(validation: Validation) -> Recommendation:
    if not validation.is_valid:
        return Recommendation.ABORT
    if validation.warnings:
        return Recommendation.REVIEW
    return Recommendation.PROCEED


class EditTools:
    """Applies exact-string edits to workspace files.

    Each call runs the same pipeline: confine the path, read the file,
    compute the replacement, validate it, then either write the whole file or
    hand the change back for review. Nothing guards against the file changing
    between the read and the write; concurrent edits to one file must be
    serialised by the caller.
    """

    def __init__(
        self,
        path_guard: PathGuard,
        fs: LocalFileSystem | None = None,
        validator: EditValidator | None = None,
    ) -> None:
        self.path_guard = path_guard
        self.fs = fs or path_guard.fs
        self.validator = validator or EditValidator()

    def _prepare(
        self,
        file_path: str,
        old_string: str,
        new_string: str,
        replace_all: bool,
    ) -> tuple[str, str, str]:
        """Resolve, read and replace. Returns (resolved, original, updated)."""
        resolved = self.path_guard.ensure_within_workspace(file_path)
        content = self.fs.read_file_string(resolved)
        updated = apply_replacement(content, old_string, new_string, replace_all, file_path)

        if not replace_all:
            occurrences = count_occurrences(content, old_string)
            if occurrences > 1:
                logger.info(
                    "Anchor text occurs %d times in %s; replacing the first",
                    occurrences,
                    file_path,
                )
        return resolved, content, updated

    def preview_edit(self, request: PreviewRequest) -> PreviewResult:
        """Compute an edit without writing it.

        Raises:
            FileAccessDenied: If the path escapes the workspace.
            StringNotFound: If the anchor text is absent.
            OSError: If the file cannot be read.
        """
        resolved, content, updated = self._prepare(
            request.file_path, request.old_string, request.new_string, request.replace_all
        )
        validation = self.validator.validate(content, updated)
        return PreviewResult(
            path=self.path_guard.relative_path(resolved),
            diff=compute_diff(content, updated, request.file_path),
            validation=validation,
            recommendation=recommend(validation),
        )

    def edit_file(self, request: EditRequest) -> EditResult:
        """Apply an edit unless it is risky and the caller asked for a preview.

        A gated edit is not an error: the result has ``success=False``, a
        message, and the diff under ``preview``. Pass ``force=True`` to write
        anyway.

        Raises:
            FileAccessDenied: If the path escapes the workspace.
            StringNotFound: If the anchor text is absent.
            OSError: If the file cannot be read or written.
        """
        resolved, content, updated = self._prepare(
            request.file_path, request.old_string, request.new_string, request.replace_all
        )
        validation = self.validator.validate(content, updated)
        stats = validation.change_stats
        diff = compute_diff(content, updated, request.file_path) if request.include_diff else None
        rel_path = self.path_guard.relative_path(resolved)

        should_gate = request.preview and (not validation.is_valid or bool(validation.warnings))
        if should_gate and not request.force:
            logger.warning(
                "Edit to %s held for review: errors=%s warnings=%s",
                rel_path,
                validation.errors,
                validation.warnings,
            )
            return EditResult(
                success=False,
                path=rel_path,
                size=len(updated),
                diff=diff,
                stats=stats,
                validation=validation,
                message=GATED_MESSAGE,
                preview=diff,
            )

        self.fs.write_file_string(resolved, updated)
        logger.info(
            "Edited %s (+%d -%d)", rel_path, stats.lines_added, stats.lines_removed
        )
        return EditResult(
            success=True,
            path=rel_path,
            size=len(updated),
            diff=diff,
            stats=stats,
            validation=validation,
        )
